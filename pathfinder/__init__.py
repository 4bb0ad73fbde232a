"""Pathfinder: parameterized path resolution with a memoizing cache."""

from pathfinder.exceptions import (
    CacheBackendError,
    ConfigurationError,
    InvalidParameterKeyError,
    NonPathLikeValueError,
    ParameterCycleError,
    ParameterNotFoundError,
    PathfinderError,
    PathTooLongError,
    RelativePathMismatchError,
    UnresolvedPathError,
)
from pathfinder.parameters import (
    EnvironmentParameterProvider,
    InMemoryParameterProvider,
    ParameterProvider,
    precompile,
)
from pathfinder.paths import cache_key_of, is_valid_key, normalize, split_leading_key
from pathfinder.resolver import Pathfinder

__all__ = [
    "Pathfinder",
    "precompile",
    "normalize",
    "is_valid_key",
    "split_leading_key",
    "cache_key_of",
    # Providers
    "ParameterProvider",
    "InMemoryParameterProvider",
    "EnvironmentParameterProvider",
    # Errors
    "PathfinderError",
    "InvalidParameterKeyError",
    "ParameterNotFoundError",
    "NonPathLikeValueError",
    "ParameterCycleError",
    "RelativePathMismatchError",
    "PathTooLongError",
    "UnresolvedPathError",
    "CacheBackendError",
    "ConfigurationError",
]
