"""Parameterized path resolver with a memoizing cache.

Resolution pipeline for ``resolve(path, relative_to)``:

1. Look up ``cache_key_of(path, relative_to)`` in the cache
2. Split a leading parameter key (``app.storage/cache``) from the path
3. Resolve the key through the ParameterStore; a dangling key is fatal
   to the call and yields None
4. Normalize-join the parameter value and the suffix. Paths containing a
   glob wildcard are returned here, unexpanded and never cached
5. Strip the resolved ``relative_to`` prefix, if given
6. Cache the result when the target exists, or when ``relative_to``
   was given

Resolutions whose target does not exist are returned but not cached.
"""

import os
import threading
from collections.abc import Mapping
from pathlib import Path
from types import TracebackType
from typing import Any

from pathfinder.cache.guard import GuardedCache
from pathfinder.cache.store import CacheStore
from pathfinder.cache.stores.inmemory import InMemoryCacheStore
from pathfinder.exceptions import RelativePathMismatchError, UnresolvedPathError
from pathfinder.observability.logging import get_logger
from pathfinder.parameters.precompile import ParameterSource, precompile
from pathfinder.parameters.provider import ParameterProvider
from pathfinder.parameters.store import DEFAULT_MAX_DEPTH, ParameterStore
from pathfinder.paths.keys import cache_key_of, split_leading_key
from pathfinder.paths.normalize import SEPARATOR, has_wildcard, normalize

logger = get_logger(__name__)

PathInput = str | os.PathLike[str]


class Pathfinder:
    """Resolve parameterized path expressions to normalized paths.

    Example:
        >>> finder = Pathfinder({"dir.root": "/srv/app"})
        >>> finder("dir.root/var/cache")
        '/srv/app/var/cache'
        >>> finder("dir.root/var/cache", relative_to="dir.root")
        '/var/cache'

    The instance owns its cache. Use it as a context manager, or call
    close(), to flush deferred cache writes.
    """

    def __init__(
        self,
        parameters: Mapping[str, Any] | None = None,
        provider: ParameterProvider | None = None,
        cache: CacheStore | None = None,
        *,
        log: Any = None,
        assertive: bool = False,
        strict_relative: bool = False,
        readable_keys: bool = True,
        evict_missing: bool = False,
        max_substitution_depth: int = DEFAULT_MAX_DEPTH,
        max_path_length: int | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            parameters: Static key -> value mapping
            provider: External parameter source, queried on a static miss
            cache: Cache backend (default: a fresh InMemoryCacheStore)
            log: Structured logger (default: module logger)
            assertive: Default failure mode; raise instead of returning None
            strict_relative: Raise RelativePathMismatchError on a mismatched
                relative base instead of logging and returning the full path
            readable_keys: Keep cache keys human-readable when possible
            evict_missing: Delete the cache entry of a resolution whose
                target does not exist
            max_substitution_depth: Maximum placeholder nesting depth
            max_path_length: Host path-length limit override
        """
        self._cache_store = cache if cache is not None else InMemoryCacheStore()
        self._logger = log or logger
        self._cache = GuardedCache(self._cache_store, self._logger)
        self._parameters = ParameterStore(
            parameters,
            provider,
            self._cache_store,
            log=self._logger,
            readable_keys=readable_keys,
            max_depth=max_substitution_depth,
            max_path_length=max_path_length,
        )
        self._assertive = assertive
        self._strict_relative = strict_relative
        self._readable_keys = readable_keys
        self._evict_missing = evict_missing
        self._max_path_length = max_path_length
        self._lock = threading.RLock()
        self._closed = False

    @classmethod
    def from_sources(cls, *sources: ParameterSource, **options: Any) -> "Pathfinder":
        """Create a resolver whose static mapping is precompile(*sources)."""
        return cls(precompile(*sources), **options)

    @property
    def cache(self) -> CacheStore:
        """The cache backend owned by this resolver."""
        return self._cache_store

    def __call__(
        self,
        path: PathInput,
        relative_to: PathInput | None = None,
        *,
        assertive: bool | None = None,
    ) -> str | None:
        return self.resolve(path, relative_to, assertive=assertive)

    def resolve(
        self,
        path: PathInput,
        relative_to: PathInput | None = None,
        *,
        assertive: bool | None = None,
    ) -> str | None:
        """Resolve a path expression.

        Args:
            path: Path expression, optionally starting with a parameter key
            relative_to: Base expression to strip from the resolved path
            assertive: Raise instead of returning None (default: instance setting)

        Returns:
            The resolved path, or None when it cannot be resolved

        Raises:
            UnresolvedPathError: If assertive and no path could be produced
            RelativePathMismatchError: If strict_relative and the base does
                not prefix the resolved path
            PathTooLongError: If a normalized path exceeds the host limit
        """
        path = os.fspath(path)
        relative_to = os.fspath(relative_to) if relative_to is not None else None
        cache_key = cache_key_of(path, relative_to, readable=self._readable_keys)

        with self._lock:
            cached = self._cache.get(cache_key)
            if cached:
                return cached

            resolved = self._resolve_path(path, relative_to)

            if resolved is None:
                self._logger.info(
                    "path_unresolved",
                    notice=True,
                    path=path,
                    relative_to=relative_to,
                )
                if self._assertive if assertive is None else assertive:
                    raise UnresolvedPathError(path)
                return None

            if has_wildcard(resolved):
                self._logger.info(
                    "path_wildcard_unexpanded",
                    notice=True,
                    path=path,
                    resolved=resolved,
                )
                return resolved

            if relative_to or os.path.exists(resolved):
                self._cache.set(cache_key, resolved)
                cached_now = True
            else:
                if self._evict_missing:
                    self._cache.delete(cache_key)
                cached_now = False

            self._logger.info(
                "path_resolved",
                path=path,
                relative_to=relative_to,
                resolved=resolved,
                cached=cached_now,
            )
            return resolved

    def get_file_info(
        self,
        path: PathInput,
        relative_to: PathInput | None = None,
        *,
        assertive: bool | None = None,
    ) -> Path | None:
        """Resolve a path expression and wrap the result in a pathlib.Path."""
        resolved = self.resolve(path, relative_to, assertive=assertive)
        return Path(resolved) if resolved else None

    def get_parameter(self, key: str, *, assertive: bool | None = None) -> str | None:
        """Return a parameter value by key, or None on failure.

        Looks in the static mapping first, then in the provider.
        """
        return self._parameters.get_parameter(
            key,
            assertive=self._assertive if assertive is None else assertive,
        )

    def has_parameter(self, key: str) -> bool:
        """Check if a key exists in the static mapping or the provider."""
        return self._parameters.has_parameter(key)

    def evict(self, path: PathInput, relative_to: PathInput | None = None) -> None:
        """Remove the memoized resolution of one expression."""
        cache_key = cache_key_of(
            os.fspath(path),
            os.fspath(relative_to) if relative_to is not None else None,
            readable=self._readable_keys,
        )
        with self._lock:
            self._cache.delete(cache_key)

    def prune(self) -> list[str]:
        """Delete cache entries whose target no longer exists.

        Relative results are pruned as well; they are recomputed and
        cached again on their next resolution.

        Returns:
            The removed cache keys
        """
        removed: list[str] = []
        with self._lock:
            for cache_key in self._cache.keys():
                value = self._cache.get(cache_key)
                if value and os.path.exists(value):
                    continue
                self._cache.delete(cache_key)
                removed.append(cache_key)

        if removed:
            self._logger.info("cache_pruned", removed=len(removed))
        return removed

    def commit(self) -> None:
        """Flush deferred cache writes."""
        with self._lock:
            self._cache.commit()

    def close(self) -> None:
        """Close the cache backend, flushing writes where it is configured to."""
        with self._lock:
            if self._closed:
                return
            self._cache.close()
            self._closed = True

    def __enter__(self) -> "Pathfinder":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _resolve_path(self, path: str, relative_to: str | None) -> str | None:
        resolved = self._resolve_expression(path)
        if resolved is None or has_wildcard(resolved) or not relative_to:
            return resolved

        base = self._resolve_expression(relative_to)
        if not base:
            return resolved

        return self._subtract(resolved, base)

    def _resolve_expression(self, expression: str) -> str | None:
        """Resolve one expression without relative handling or caching."""
        key, suffix = split_leading_key(expression)

        if key is None:
            return normalize(expression, max_length=self._max_path_length) or None

        value = self._parameters.get_parameter(key)
        if value is None:
            self._logger.error(
                "parameter_key_unresolved",
                key=key,
                path=expression,
            )
            return None

        return normalize(value, suffix, max_length=self._max_path_length)

    def _subtract(self, path: str, base: str) -> str:
        """Strip base from the start of path, on a segment boundary."""
        if path == base:
            return SEPARATOR

        if path.startswith(base):
            # The remainder keeps its leading separator
            if base.endswith(SEPARATOR):
                return path[len(base) - 1:]
            if path[len(base)] == SEPARATOR:
                return path[len(base):]

        self._logger.critical(
            "relative_path_mismatch",
            relative_to=base,
            path=path,
        )
        if self._strict_relative:
            raise RelativePathMismatchError(base, path)
        return path
