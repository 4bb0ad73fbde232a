"""CacheStore abstract interface."""

import threading
from abc import ABC, abstractmethod


class CacheStore(ABC):
    """Abstract interface for the resolution cache.

    Maps cache keys to resolved path strings. Backends may defer writes
    until commit() is called.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get a cached value by key."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value under key."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key if present."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List every key currently visible through the store."""
        pass

    @abstractmethod
    def commit(self) -> None:
        """Flush deferred writes to the backing store."""
        pass

    def close(self) -> None:
        """Release the store, flushing deferred writes."""
        self.commit()


class BufferedCacheStore(CacheStore):
    """Base class for stores with deferred-commit semantics.

    Writes and deletes accumulate in an in-memory overlay (a deleted key
    is recorded as a ``None`` tombstone) and are handed to ``_flush`` in
    one batch on commit(). Reads consult the overlay before the backend.
    """

    def __init__(self) -> None:
        self._pending: dict[str, str | None] = {}
        self._lock = threading.RLock()

    @property
    def pending_count(self) -> int:
        """Number of writes and deletes waiting for commit()."""
        with self._lock:
            return len(self._pending)

    def get(self, key: str) -> str | None:
        with self._lock:
            if key in self._pending:
                return self._pending[key]
            return self._load(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._pending[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._pending[key] = None

    def keys(self) -> list[str]:
        with self._lock:
            visible = set(self._keys())
            for key, value in self._pending.items():
                if value is None:
                    visible.discard(key)
                else:
                    visible.add(key)
            return sorted(visible)

    def commit(self) -> None:
        with self._lock:
            if not self._pending:
                return
            # Pending writes survive a failed flush
            self._flush(dict(self._pending))
            self._pending.clear()

    @abstractmethod
    def _load(self, key: str) -> str | None:
        """Read a committed value from the backend."""
        pass

    @abstractmethod
    def _keys(self) -> list[str]:
        """List committed keys in the backend."""
        pass

    @abstractmethod
    def _flush(self, pending: dict[str, str | None]) -> None:
        """Write a batch of pending changes to the backend."""
        pass
