"""Pathfinder exception hierarchy.

All errors raised by the resolver inherit from PathfinderError. Recoverable
outcomes (missing parameters, non-path-like values, soft relative mismatches)
are normally reported as ``None``; they only surface as exceptions when a
call is made in assertive mode.
"""


class PathfinderError(Exception):
    """Base exception for all Pathfinder errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidParameterKeyError(PathfinderError, ValueError):
    """Raised when a parameter key does not satisfy the key grammar."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"Invalid parameter '{key}'. Must contain one period, "
            "cannot start or end with period."
        )


class ParameterNotFoundError(PathfinderError, LookupError):
    """Raised when a key is absent from every parameter source."""

    def __init__(self, key: str, value_type: str = "missing") -> None:
        self.key = key
        self.value_type = value_type
        super().__init__(f"No value for '{key}', it is {value_type}.")


class NonPathLikeValueError(PathfinderError, ValueError):
    """Raised when a parameter value does not look like a path."""

    def __init__(self, key: str, value: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"The value for '{key}' is not path-like: {value!r}")


class ParameterCycleError(PathfinderError):
    """Raised when placeholder substitution loops or nests too deeply."""

    def __init__(self, key: str, chain: tuple[str, ...]) -> None:
        self.key = key
        self.chain = chain
        super().__init__(
            f"Placeholder '%{key}%' cannot be substituted: "
            f"{' -> '.join((*chain, key))}"
        )


class RelativePathMismatchError(PathfinderError, ValueError):
    """Raised when the relative base is not a prefix of the resolved path."""

    def __init__(self, relative_to: str, path: str) -> None:
        self.relative_to = relative_to
        self.path = path
        super().__init__(f"Relative path [{relative_to}][{path}], is not valid.")


class PathTooLongError(PathfinderError, ValueError):
    """Raised when a normalized path exceeds the host path-length limit."""

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(
            f"Normalizing resulted in a string of {length}, exceeding the "
            f"{limit} character limit. Operation was halted to prevent overflow."
        )


class UnresolvedPathError(PathfinderError, LookupError):
    """Raised by assertive calls when no path could be produced."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Unable to resolve path '{path}'.")


class CacheBackendError(PathfinderError):
    """Raised by cache backends on I/O or serialization faults.

    Backends wrap the underlying error so callers can treat every
    backend the same way.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConfigurationError(PathfinderError, ValueError):
    """Raised when a configuration file is malformed.

    ``source`` names the file the offending value was read from.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)
