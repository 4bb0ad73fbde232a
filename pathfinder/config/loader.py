"""Layered TOML configuration for Pathfinder.

Layers, lowest priority first:
1. ``default.toml`` (required)
2. ``{PATHFINDER_ENV}.toml`` (optional)

Each layer is checked as it is read, so errors name the file at fault:

- ``[parameters]`` holds parameter keys mapped to path strings. Quoted
  (``"dir.root" = ...``) and bare dotted (``dir.root = ...``) keys are
  both accepted; TOML nests the bare form, which is flattened back to
  ``dir.root``. An environment layer overrides single parameters.
- ``[cache] backend`` names a known backend, and the backend sections
  (``[cache.file]``, ``[cache.redis]``) are tables.
"""

import os
import tomllib
from pathlib import Path
from typing import Any, get_args

from pathfinder.config.models.cache import CacheBackendType
from pathfinder.exceptions import ConfigurationError
from pathfinder.observability.logging import get_logger
from pathfinder.paths.keys import is_valid_key

logger = get_logger(__name__)

CONFIG_DIR_VARIABLE = "PATHFINDER_CONFIG_DIR"
ENVIRONMENT_VARIABLE = "PATHFINDER_ENV"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_LAYER = "default.toml"

CACHE_BACKENDS: tuple[str, ...] = get_args(CacheBackendType)


def get_config_dir() -> Path:
    """Locate the directory holding ``default.toml``.

    ``PATHFINDER_CONFIG_DIR`` wins when set. Otherwise ``config/`` is
    searched in the working directory and up to four of its parents.
    """
    configured = os.environ.get(CONFIG_DIR_VARIABLE)
    if configured:
        path = Path(configured)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {configured}")
        return path

    cwd = Path.cwd()
    for base in [cwd, *cwd.parents][:5]:
        candidate = base / "config"
        if (candidate / DEFAULT_LAYER).exists():
            return candidate

    return Path("config")


def get_environment() -> str:
    """Name of the environment layer, from PATHFINDER_ENV."""
    return os.environ.get(ENVIRONMENT_VARIABLE, DEFAULT_ENVIRONMENT)


def load_toml(file_path: Path) -> dict[str, Any]:
    """Read one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    try:
        with file_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"invalid TOML: {e}", source=str(file_path)) from e


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base, recursing into nested tables."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def flatten_parameters(
    table: dict[str, Any],
    source: str | None = None,
    prefix: str = "",
) -> dict[str, str]:
    """Flatten a ``[parameters]`` table into dotted key -> path string.

    Raises:
        ConfigurationError: On an invalid key or a non-string value
    """
    flat: dict[str, str] = {}
    for name, value in table.items():
        key = f"{prefix}{name}"
        if isinstance(value, dict):
            flat.update(flatten_parameters(value, source, prefix=f"{key}."))
            continue

        if not is_valid_key(key):
            raise ConfigurationError(
                f"invalid parameter key {key!r} in [parameters]", source=source
            )
        if not isinstance(value, str):
            raise ConfigurationError(
                f"parameter {key!r} must be a string, got {type(value).__name__}",
                source=source,
            )
        flat[key] = value
    return flat


def check_cache_section(section: Any, source: str | None = None) -> None:
    """Reject an unknown backend or a malformed backend section.

    Raises:
        ConfigurationError: If the section is not usable
    """
    if not isinstance(section, dict):
        raise ConfigurationError("[cache] must be a table", source=source)

    backend = section.get("backend")
    if backend is not None and backend not in CACHE_BACKENDS:
        raise ConfigurationError(
            f"unknown cache backend {backend!r}, expected one of {', '.join(CACHE_BACKENDS)}",
            source=source,
        )

    for name in CACHE_BACKENDS:
        if name in section and not isinstance(section[name], dict):
            raise ConfigurationError(f"[cache.{name}] must be a table", source=source)


def read_layer(file_path: Path) -> dict[str, Any]:
    """Load one layer, flattening and checking its path-specific sections."""
    layer = load_toml(file_path)
    source = str(file_path)

    if "parameters" in layer:
        parameters = layer["parameters"]
        if not isinstance(parameters, dict):
            raise ConfigurationError("[parameters] must be a table", source=source)
        layer["parameters"] = flatten_parameters(parameters, source)

    if "cache" in layer:
        check_cache_section(layer["cache"], source)

    return layer


def load_config() -> dict[str, Any]:
    """Load and merge the configuration layers.

    Returns:
        Merged configuration dictionary

    Raises:
        FileNotFoundError: If default.toml is missing
        ConfigurationError: If a layer is malformed
    """
    config_dir = get_config_dir()
    env = get_environment()

    default_path = config_dir / DEFAULT_LAYER
    if not default_path.exists():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            f"Create config/{DEFAULT_LAYER} or set {CONFIG_DIR_VARIABLE}."
        )

    layers = [default_path]
    env_path = config_dir / f"{env}.toml"
    if env_path.exists():
        layers.append(env_path)

    config: dict[str, Any] = {}
    for layer_path in layers:
        config = deep_merge(config, read_layer(layer_path))

    logger.debug(
        "config_loaded",
        layers=[str(layer_path) for layer_path in layers],
        environment=env,
        parameters=len(config.get("parameters", {})),
        cache_backend=config.get("cache", {}).get("backend"),
    )
    return config
