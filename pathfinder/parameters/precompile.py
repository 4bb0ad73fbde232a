"""Ahead-of-time flattening of parameter sources.

precompile() merges several raw sources into one flat key -> normalized
path mapping, meant to seed the static mapping of a Pathfinder at startup.
"""

from collections.abc import Mapping
from typing import Any, TypeAlias

from pathfinder.parameters.provider import ParameterProvider
from pathfinder.paths.normalize import normalize

ParameterSource: TypeAlias = Mapping[str, Any] | ParameterProvider | str


def _entries(sources: tuple[ParameterSource, ...]) -> dict[str, Any]:
    """Merge sources in order; later sources win on duplicate keys.

    Raw strings are keyed by their position among the raw strings.
    """
    merged: dict[str, Any] = {}
    raw_index = 0

    for source in sources:
        if isinstance(source, str):
            merged[str(raw_index)] = source
            raw_index += 1
        elif isinstance(source, ParameterProvider):
            merged.update(source.all())
        elif isinstance(source, Mapping):
            merged.update(source)
        else:
            raise TypeError(
                f"Unsupported parameter source: {type(source).__name__}"
            )

    return merged


def precompile(*sources: ParameterSource) -> dict[str, str]:
    """Flatten parameter sources into a key -> normalized path mapping.

    Non-string values are skipped.

    Args:
        *sources: Mappings, ParameterProviders or raw path strings

    Returns:
        Mapping of every string-valued key to its normalized path

    Example:
        >>> precompile({"dir.root": "/srv//app/"}, {"dir.cache": "var\\\\cache"})
        {'dir.root': '/srv/app', 'dir.cache': 'var/cache'}
    """
    return {
        key: normalize(value)
        for key, value in _entries(sources).items()
        if isinstance(value, str)
    }
