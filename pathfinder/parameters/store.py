"""Parameter lookup with nested placeholder substitution.

Lookup order:
1. The static mapping given at construction
2. The external ParameterProvider, only when the mapping has no value

A value may reference other parameters as ``%key.name%`` placeholders.
Each placeholder is replaced by that parameter's value, recursively, up to
``max_depth`` levels. Unresolvable or cyclic placeholders stay verbatim.
"""

import os
import re
from collections.abc import Mapping
from typing import Any

from pathfinder.cache.guard import GuardedCache
from pathfinder.cache.store import CacheStore
from pathfinder.exceptions import (
    InvalidParameterKeyError,
    NonPathLikeValueError,
    ParameterCycleError,
    ParameterNotFoundError,
)
from pathfinder.observability.logging import get_logger
from pathfinder.parameters.provider import ParameterProvider
from pathfinder.paths.keys import cache_key_of, is_valid_key
from pathfinder.paths.normalize import is_path_like, normalize

logger = get_logger(__name__)

PLACEHOLDER_RE = re.compile(r"%([^%\s]+)%")

DEFAULT_MAX_DEPTH = 8


def _describe(value: Any) -> str:
    if value is None:
        return "missing"
    if isinstance(value, str):
        return "empty string"
    return type(value).__name__


class ParameterStore:
    """Resolve parameter keys to normalized, path-like values."""

    def __init__(
        self,
        parameters: Mapping[str, Any] | None = None,
        provider: ParameterProvider | None = None,
        cache: CacheStore | None = None,
        *,
        log: Any = None,
        readable_keys: bool = True,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_path_length: int | None = None,
    ) -> None:
        """Initialize the parameter store.

        Args:
            parameters: Static key -> value mapping, consulted first
            provider: External provider, consulted on a static miss
            cache: Cache for existing resolved values
            log: Structured logger (default: module logger)
            readable_keys: Keep valid keys verbatim as cache keys
            max_depth: Maximum placeholder nesting depth
            max_path_length: Host path-length limit override
        """
        self._parameters: dict[str, Any] = dict(parameters or {})
        self._provider = provider
        self._logger = log or logger
        self._cache = GuardedCache(cache, self._logger) if cache is not None else None
        self._readable_keys = readable_keys
        self._max_depth = max_depth
        self._max_path_length = max_path_length

    @property
    def parameters(self) -> dict[str, Any]:
        """Copy of the static mapping."""
        return dict(self._parameters)

    def has_parameter(self, key: str) -> bool:
        """Check if a key exists in the static mapping or the provider."""
        if not is_valid_key(key):
            raise InvalidParameterKeyError(key)

        if key in self._parameters:
            return True
        return self._provider is not None and self._provider.has(key)

    def get_parameter(self, key: str, *, assertive: bool = False) -> str | None:
        """Return the resolved value for a parameter key.

        Missing, empty, non-string and non-path-like values are logged as
        warnings and return None, unless ``assertive`` is set.

        Raises:
            InvalidParameterKeyError: If the key fails the key grammar
            ParameterNotFoundError: If assertive and no value exists
            NonPathLikeValueError: If assertive and the value is not path-like
        """
        try:
            return self.require_parameter(key)
        except ParameterNotFoundError as e:
            self._logger.warning(
                "parameter_not_found",
                key=key,
                value_type=e.value_type,
            )
            if assertive:
                raise
        except NonPathLikeValueError as e:
            self._logger.warning(
                "parameter_not_path_like",
                key=key,
                value=e.value,
            )
            if assertive:
                raise
        return None

    def require_parameter(self, key: str) -> str:
        """Return the resolved value for a parameter key or raise."""
        if not is_valid_key(key):
            raise InvalidParameterKeyError(key)

        cache_key = cache_key_of(key, readable=self._readable_keys)
        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached:
                return cached

        raw = self._lookup(key)
        if not raw or not isinstance(raw, str):
            raise ParameterNotFoundError(key, _describe(raw))

        if raw.count("%") > 1:
            raw = self._substitute(raw, (key,))

        value = normalize(raw, max_length=self._max_path_length)
        if not is_path_like(value):
            raise NonPathLikeValueError(key, value)

        exists = os.path.exists(value)
        self._logger.info(
            "parameter_resolved",
            key=key,
            value=value,
            exists=exists,
        )

        if exists and self._cache is not None:
            self._cache.set(cache_key, value)

        return value

    def _lookup(self, key: str) -> Any:
        value = self._parameters.get(key)
        if not value and self._provider is not None and self._provider.has(key):
            value = self._provider.get(key)
        return value

    def _substitute(self, value: str, chain: tuple[str, ...]) -> str:
        """Replace every ``%key%`` placeholder in value."""

        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if not is_valid_key(name):
                return match.group(0)

            try:
                return self._expand(name, chain)
            except ParameterCycleError as e:
                self._logger.warning(
                    "parameter_cycle_detected",
                    key=name,
                    chain=list(e.chain),
                    max_depth=self._max_depth,
                )
            except ParameterNotFoundError as e:
                self._logger.warning(
                    "placeholder_unresolved",
                    key=name,
                    parent=chain[-1],
                    value_type=e.value_type,
                )
            return match.group(0)

        return PLACEHOLDER_RE.sub(replace, value)

    def _expand(self, key: str, chain: tuple[str, ...]) -> str:
        """Raw value of a nested placeholder, itself substituted."""
        if key in chain or len(chain) >= self._max_depth:
            raise ParameterCycleError(key, chain)

        raw = self._lookup(key)
        if not raw or not isinstance(raw, str):
            raise ParameterNotFoundError(key, _describe(raw))

        if raw.count("%") > 1:
            raw = self._substitute(raw, (*chain, key))
        return raw
