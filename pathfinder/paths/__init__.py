"""Path normalization and parameter key grammar."""

from pathfinder.paths.keys import (
    CACHE_KEY_LENGTH,
    cache_key_of,
    is_valid_key,
    split_leading_key,
)
from pathfinder.paths.normalize import (
    MAX_PATH_LENGTH,
    SEPARATOR,
    has_wildcard,
    is_path_like,
    normalize,
)

__all__ = [
    # Normalization
    "MAX_PATH_LENGTH",
    "SEPARATOR",
    "normalize",
    "is_path_like",
    "has_wildcard",
    # Keys
    "CACHE_KEY_LENGTH",
    "is_valid_key",
    "split_leading_key",
    "cache_key_of",
]
