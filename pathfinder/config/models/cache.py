"""Cache backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

CacheBackendType = Literal["inmemory", "file", "redis"]


class FileCacheConfig(BaseModel):
    """Single-file persisted cache configuration."""

    path: str = Field(
        default=".cache/pathfinder.cache.json",
        description="Location of the cache artifact",
    )
    autosave: bool = Field(
        default=True,
        description="Commit pending writes when the resolver is closed",
    )
    validate_hash: bool = Field(
        default=True,
        description="Discard cache files whose stored hash does not match",
    )


class RedisCacheConfig(BaseModel):
    """Redis cache configuration."""

    connection_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    key_prefix: str = Field(
        default="pathfinder",
        description="Redis key prefix for cache keys",
    )
    ttl_seconds: int | None = Field(
        default=None,
        gt=0,
        description="Expiry for cached entries (None: no expiry)",
    )


class CacheConfig(BaseModel):
    """Resolution cache configuration."""

    backend: CacheBackendType = Field(
        default="inmemory",
        description="Backend type",
    )
    file: FileCacheConfig = Field(
        default_factory=FileCacheConfig,
        description="File backend settings",
    )
    redis: RedisCacheConfig = Field(
        default_factory=RedisCacheConfig,
        description="Redis backend settings",
    )
