"""Parameter sources, lookup and precompilation."""

from pathfinder.parameters.precompile import ParameterSource, precompile
from pathfinder.parameters.provider import (
    EnvironmentParameterProvider,
    InMemoryParameterProvider,
    ParameterProvider,
)
from pathfinder.parameters.store import ParameterStore

__all__ = [
    "ParameterProvider",
    "InMemoryParameterProvider",
    "EnvironmentParameterProvider",
    "ParameterStore",
    "ParameterSource",
    "precompile",
]
