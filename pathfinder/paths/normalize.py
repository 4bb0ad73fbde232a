"""Path normalization helpers.

Paths are canonicalized to forward slashes on every host, so resolved
values can be compared and prefix-subtracted as plain strings.
"""

import os
import re

from pathfinder.exceptions import PathTooLongError

SEPARATOR = "/"

# Host path-length limit, mirrors PATH_MAX / MAX_PATH.
MAX_PATH_LENGTH = 260 if os.name == "nt" else 4096

# Characters stripped from both ends of every segment.
_TRIM_CHARS = " \n\r\t\v\0\\/"
_WHITESPACE = " \n\r\t\v\0"

_EXTENSION_RE = re.compile(r"\.[A-Za-z0-9]+$")


def normalize(*fragments: str | os.PathLike[str], max_length: int | None = None) -> str:
    """Join and canonicalize path fragments into a single path string.

    - Backslashes and forward slashes both become ``/``.
    - Repeated separators collapse into one.
    - Each segment is trimmed of whitespace and stray separators.
    - A leading separator on the first fragment is preserved.

    Args:
        *fragments: Path fragments, joined in order
        max_length: Host path-length limit (default: MAX_PATH_LENGTH)

    Returns:
        The normalized path, e.g. ``normalize("a/", "/b", "\\\\c\\\\") == "a/b/c"``

    Raises:
        PathTooLongError: If the result exceeds the limit minus a 2 character margin
    """
    parts = [os.fspath(fragment).replace("\\", SEPARATOR) for fragment in fragments]
    if not parts:
        return ""

    absolute = parts[0].lstrip(_WHITESPACE).startswith(SEPARATOR)

    segments = (segment.strip(_TRIM_CHARS) for segment in SEPARATOR.join(parts).split(SEPARATOR))
    path = SEPARATOR.join(segment for segment in segments if segment)

    limit = (max_length or MAX_PATH_LENGTH) - 2
    if len(path) > limit:
        raise PathTooLongError(len(path), limit)

    if absolute:
        path = SEPARATOR + path

    return path


def is_path_like(value: str) -> bool:
    """Check whether a string looks like a filesystem path.

    A value is path-like when it contains a separator, ends in a file
    extension, names a hidden file (leading dot) or is a parent traversal.
    """
    if not value or not value.strip():
        return False

    if SEPARATOR in value or "\\" in value:
        return True

    return (
        value.startswith(".")
        or ".." in value
        or _EXTENSION_RE.search(value) is not None
    )


def has_wildcard(path: str) -> bool:
    """Check whether a path contains a glob wildcard segment."""
    return "*" in path
