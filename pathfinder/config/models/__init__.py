"""Configuration model exports.

    from pathfinder.config.models import CacheConfig, ResolverConfig
"""

from pathfinder.config.models.cache import (
    CacheBackendType,
    CacheConfig,
    FileCacheConfig,
    RedisCacheConfig,
)
from pathfinder.config.models.observability import LoggingConfig, ObservabilityConfig
from pathfinder.config.models.resolver import ResolverConfig

__all__ = [
    "CacheBackendType",
    "CacheConfig",
    "FileCacheConfig",
    "RedisCacheConfig",
    "LoggingConfig",
    "ObservabilityConfig",
    "ResolverConfig",
]
