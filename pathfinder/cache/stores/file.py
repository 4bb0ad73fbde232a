"""File-backed implementation of CacheStore.

The cache is persisted as a single JSON artifact::

    {
      "generator": "pathfinder",
      "hash": "<content hash of data>",
      "data": {"<cache key>": "<resolved path>", ...}
    }

The file is read once at construction and rewritten atomically on commit,
only when the content hash of the merged data has changed.
"""

import contextlib
import hashlib
import json
import os
import tempfile
from pathlib import Path

from pathfinder.cache.store import BufferedCacheStore
from pathfinder.exceptions import CacheBackendError
from pathfinder.observability.logging import get_logger

logger = get_logger(__name__)

GENERATOR = "pathfinder"


def content_hash(data: dict[str, str]) -> str:
    """Stable hash of cache data, independent of insertion order."""
    serialized = json.dumps(data, ensure_ascii=False, sort_keys=True)
    return hashlib.sha256(serialized.encode()).hexdigest()[:16]


class FileCacheStore(BufferedCacheStore):
    """Single-file persisted CacheStore with deferred commit.

    A missing file starts an empty cache. An unreadable or corrupt file,
    or one whose stored hash does not match its data, is discarded with a
    warning and also starts an empty cache.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        autosave: bool = True,
        validate_hash: bool = True,
    ) -> None:
        """Initialize the store and load the cache file.

        Args:
            path: Location of the cache artifact
            autosave: Commit pending writes on close()
            validate_hash: Discard files whose stored hash does not match
        """
        super().__init__()
        self.path = Path(path)
        self.autosave = autosave
        self.validate_hash = validate_hash
        self._data, self._hash = self._read()

    @property
    def persisted_hash(self) -> str | None:
        """Content hash of the data last read from or written to disk."""
        return self._hash

    def close(self) -> None:
        if self.autosave:
            self.commit()

    def _read(self) -> tuple[dict[str, str], str | None]:
        if not self.path.exists():
            return {}, None

        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(
                "cache_file_unreadable",
                path=str(self.path),
                error=str(e),
            )
            return {}, None

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            logger.warning("cache_file_corrupt", path=str(self.path))
            return {}, None

        data = {key: value for key, value in data.items() if isinstance(value, str)}
        stored_hash = payload.get("hash")

        if self.validate_hash and stored_hash != content_hash(data):
            logger.warning(
                "cache_file_hash_mismatch",
                path=str(self.path),
                stored_hash=stored_hash,
            )
            return {}, None

        logger.debug("cache_file_loaded", path=str(self.path), entries=len(data))
        return data, stored_hash

    def _load(self, key: str) -> str | None:
        return self._data.get(key)

    def _keys(self) -> list[str]:
        return list(self._data)

    def _flush(self, pending: dict[str, str | None]) -> None:
        data = dict(self._data)
        for key, value in pending.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value

        digest = content_hash(data)
        if digest == self._hash:
            self._data = data
            logger.debug("cache_commit_skipped", path=str(self.path), hash=digest)
            return

        self._write({"generator": GENERATOR, "hash": digest, "data": data})
        self._data, self._hash = data, digest
        logger.debug(
            "cache_committed",
            path=str(self.path),
            entries=len(data),
            hash=digest,
        )

    def _write(self, payload: dict[str, object]) -> None:
        """Write the payload via a temp file and rename."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, ensure_ascii=False, sort_keys=True, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise CacheBackendError(
                f"Failed to write cache file {self.path}", cause=e
            ) from e
