"""Redis implementation of CacheStore.

Key format: {prefix}:{cache key}
Value format: the resolved path string
"""

import redis

from pathfinder.cache.store import BufferedCacheStore
from pathfinder.exceptions import CacheBackendError


class RedisCacheStore(BufferedCacheStore):
    """Redis-backed CacheStore for an externally supplied key-value pool.

    Reads go straight to Redis (after the pending overlay); writes are
    buffered and sent in a single pipeline on commit().
    """

    def __init__(
        self,
        client: redis.Redis,
        *,
        key_prefix: str = "pathfinder",
        ttl_seconds: int | None = None,
    ) -> None:
        """Initialize Redis cache store.

        Args:
            client: Redis client instance
            key_prefix: Prefix for Redis keys
            ttl_seconds: Optional expiry applied to every written key
        """
        super().__init__()
        self._client = client
        self._key_prefix = key_prefix
        self._ttl_seconds = ttl_seconds

    def _make_key(self, key: str) -> str:
        return f"{self._key_prefix}:{key}"

    def _load(self, key: str) -> str | None:
        try:
            value = self._client.get(self._make_key(key))
        except redis.RedisError as e:
            raise CacheBackendError(f"Redis get failed for {key}", cause=e) from e

        if value is None:
            return None
        return value.decode() if isinstance(value, bytes) else str(value)

    def _keys(self) -> list[str]:
        prefix = f"{self._key_prefix}:"
        try:
            raw_keys = list(self._client.scan_iter(match=f"{prefix}*"))
        except redis.RedisError as e:
            raise CacheBackendError("Redis key scan failed", cause=e) from e

        keys = []
        for raw in raw_keys:
            name = raw.decode() if isinstance(raw, bytes) else str(raw)
            keys.append(name[len(prefix):])
        return keys

    def _flush(self, pending: dict[str, str | None]) -> None:
        try:
            pipe = self._client.pipeline()
            for key, value in pending.items():
                if value is None:
                    pipe.delete(self._make_key(key))
                else:
                    pipe.set(self._make_key(key), value, ex=self._ttl_seconds)
            pipe.execute()
        except redis.RedisError as e:
            raise CacheBackendError("Redis pipeline flush failed", cause=e) from e
