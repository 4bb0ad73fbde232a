"""In-memory implementation of CacheStore."""

from pathfinder.cache.store import CacheStore


class InMemoryCacheStore(CacheStore):
    """In-memory implementation of CacheStore.

    Uses simple dict storage. Entries live as long as the store instance;
    commit() has nothing to flush.
    """

    def __init__(self, data: dict[str, str] | None = None) -> None:
        """Initialize storage, optionally seeded with entries."""
        self._data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)

    def commit(self) -> None:
        pass

    def clear(self) -> None:
        """Clear all cache entries (test utility)."""
        self._data.clear()
