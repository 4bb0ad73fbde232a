"""Fault-tolerant access to a CacheStore.

Backend faults never fail a resolution: every CacheBackendError is logged
and turned into a miss (reads) or a no-op (writes).
"""

from typing import Any

from pathfinder.cache.store import CacheStore
from pathfinder.exceptions import CacheBackendError
from pathfinder.observability.logging import get_logger

logger = get_logger(__name__)


class GuardedCache:
    """Wrap a CacheStore so backend errors degrade to misses and no-ops."""

    def __init__(self, store: CacheStore, log: Any = None) -> None:
        self.store = store
        self._logger = log or logger

    def _report(self, operation: str, error: CacheBackendError, key: str | None = None) -> None:
        self._logger.error(
            "cache_backend_error",
            operation=operation,
            key=key,
            error=error.message,
            cause=repr(error.cause) if error.cause else None,
        )

    def get(self, key: str) -> str | None:
        try:
            return self.store.get(key)
        except CacheBackendError as e:
            self._report("get", e, key)
            return None

    def set(self, key: str, value: str) -> None:
        try:
            self.store.set(key, value)
        except CacheBackendError as e:
            self._report("set", e, key)

    def delete(self, key: str) -> None:
        try:
            self.store.delete(key)
        except CacheBackendError as e:
            self._report("delete", e, key)

    def keys(self) -> list[str]:
        try:
            return self.store.keys()
        except CacheBackendError as e:
            self._report("keys", e)
            return []

    def commit(self) -> None:
        try:
            self.store.commit()
        except CacheBackendError as e:
            self._report("commit", e)

    def close(self) -> None:
        try:
            self.store.close()
        except CacheBackendError as e:
            self._report("close", e)
