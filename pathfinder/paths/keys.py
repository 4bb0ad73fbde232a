"""Parameter key grammar and cache key derivation.

A parameter key is a dotted identifier such as ``app.storage``: ASCII
letters, digits, ``.``, ``-`` and ``_``, at least one ``.``, and no
leading or trailing ``.``.
"""

import hashlib
import re

from pathfinder.paths.normalize import SEPARATOR

_KEY_RE = re.compile(r"[A-Za-z0-9._\-]+")
_KEY_WITH_SLASH_RE = re.compile(r"[A-Za-z0-9._\-/]+")

CACHE_KEY_LENGTH = 16

# Never valid in a key or a path.
PART_DELIMITER = "\0"


def is_valid_key(value: str, *, allow_slash: bool = False) -> bool:
    """Check whether a string satisfies the parameter key grammar.

    Args:
        value: Candidate key
        allow_slash: Also accept ``/`` inside the key

    Returns:
        True if the key is valid
    """
    if not isinstance(value, str) or "." not in value:
        return False

    if value.startswith(".") or value.endswith("."):
        return False

    pattern = _KEY_WITH_SLASH_RE if allow_slash else _KEY_RE
    return pattern.fullmatch(value) is not None


def split_leading_key(expression: str) -> tuple[str | None, str]:
    """Split a path expression into a leading parameter key and a suffix.

    Only the first segment is considered; the suffix is never searched
    for further keys.

    Examples:
        >>> split_leading_key("app.storage/cache/data.db")
        ('app.storage', '/cache/data.db')
        >>> split_leading_key("/var/www")
        (None, '/var/www')

    Returns:
        ``(key, suffix)`` when the first segment is a valid key,
        otherwise ``(None, expression)``
    """
    candidate, separator, rest = expression.replace("\\", SEPARATOR).partition(SEPARATOR)

    if is_valid_key(candidate):
        return candidate, separator + rest

    return None, expression


def _stringify(part: object) -> str:
    if part is False:
        return ""
    if part is True:
        return "1"
    return str(part)


def cache_key_of(*parts: object, readable: bool = True) -> str:
    """Derive a backend-safe cache key from one or more parts.

    ``None`` parts are skipped. The remaining parts are joined with
    ``PART_DELIMITER``, so distinct part tuples never share a key and a
    multi-part key can never pass the key grammar. A single part that is
    a valid parameter key is used verbatim when ``readable`` is set;
    anything else becomes a fixed-width hex digest.

    Examples:
        >>> cache_key_of("app.storage")
        'app.storage'
        >>> cache_key_of("app.storage", None)
        'app.storage'
        >>> cache_key_of("a.b", "c.d") == cache_key_of("a.bc.d")
        False
    """
    joined = PART_DELIMITER.join(
        _stringify(part) for part in parts if part is not None
    )

    if readable and is_valid_key(joined):
        return joined

    return hashlib.sha256(joined.encode()).hexdigest()[:CACHE_KEY_LENGTH]
