"""ParameterProvider abstract interface and implementations.

A provider is the external parameter source consulted when the static
mapping of a Pathfinder has no value for a key.
"""

import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class ParameterProvider(ABC):
    """Abstract interface for an external, read-only parameter source."""

    @abstractmethod
    def has(self, key: str) -> bool:
        """Check whether the provider knows a key."""
        pass

    @abstractmethod
    def get(self, key: str) -> Any:
        """Get the raw value for a key, or None when absent."""
        pass

    @abstractmethod
    def all(self) -> dict[str, Any]:
        """Snapshot of every key and raw value."""
        pass


class InMemoryParameterProvider(ParameterProvider):
    """Provider over a plain mapping, for testing and embedding."""

    def __init__(self, parameters: Mapping[str, Any] | None = None) -> None:
        self._parameters: dict[str, Any] = dict(parameters or {})

    def has(self, key: str) -> bool:
        return key in self._parameters

    def get(self, key: str) -> Any:
        return self._parameters.get(key)

    def all(self) -> dict[str, Any]:
        return dict(self._parameters)


class EnvironmentParameterProvider(ParameterProvider):
    """Provider reading parameters from environment variables.

    ``app.storage`` is looked up as ``{prefix}APP__STORAGE``: the key is
    upper-cased, ``.`` becomes ``__`` and ``-`` becomes ``_``. all() maps
    variable names back the same way, so its keys can seed precompile().
    A ``-`` in a key comes back as ``_``.
    """

    def __init__(
        self,
        prefix: str = "PATHFINDER_PARAM_",
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._prefix = prefix
        self._environ = environ if environ is not None else os.environ

    def _variable(self, key: str) -> str:
        return self._prefix + key.upper().replace(".", "__").replace("-", "_")

    def _key(self, variable: str) -> str:
        return variable[len(self._prefix):].lower().replace("__", ".")

    def has(self, key: str) -> bool:
        return self._variable(key) in self._environ

    def get(self, key: str) -> Any:
        return self._environ.get(self._variable(key))

    def all(self) -> dict[str, Any]:
        return {
            self._key(name): value
            for name, value in self._environ.items()
            if name.startswith(self._prefix)
        }
