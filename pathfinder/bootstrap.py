"""Bootstrap module for building a Pathfinder from configuration.

Handles:
- Loading configuration from TOML files
- Creating the configured cache backend (in-memory, file or Redis)
- Optionally configuring structured logging

Example usage:

    from pathfinder.bootstrap import create_pathfinder

    with create_pathfinder() as pathfinder:
        cache_dir = pathfinder("dir.cache/templates")
"""

from typing import Any

import redis

from pathfinder.cache.store import CacheStore
from pathfinder.cache.stores.file import FileCacheStore
from pathfinder.cache.stores.inmemory import InMemoryCacheStore
from pathfinder.cache.stores.redis import RedisCacheStore
from pathfinder.config import get_settings
from pathfinder.config.models.cache import CacheConfig
from pathfinder.config.settings import Settings
from pathfinder.observability.logging import get_logger, setup_logging
from pathfinder.parameters.provider import ParameterProvider
from pathfinder.resolver import Pathfinder

logger = get_logger(__name__)


def create_cache_store(
    config: CacheConfig,
    redis_client: redis.Redis | None = None,
) -> CacheStore:
    """Create the cache backend selected by configuration.

    Args:
        config: Cache configuration
        redis_client: Existing Redis client (default: one built from
            ``config.redis.connection_url``)

    Returns:
        A CacheStore for the configured backend
    """
    if config.backend == "file":
        return FileCacheStore(
            config.file.path,
            autosave=config.file.autosave,
            validate_hash=config.file.validate_hash,
        )

    if config.backend == "redis":
        client = redis_client or redis.Redis.from_url(config.redis.connection_url)
        return RedisCacheStore(
            client,
            key_prefix=config.redis.key_prefix,
            ttl_seconds=config.redis.ttl_seconds,
        )

    return InMemoryCacheStore()


def create_pathfinder(
    settings: Settings | None = None,
    *,
    provider: ParameterProvider | None = None,
    redis_client: redis.Redis | None = None,
    log: Any = None,
    configure_logging: bool = False,
) -> Pathfinder:
    """Build a fully-configured Pathfinder.

    Args:
        settings: Settings to use (default: get_settings())
        provider: External parameter provider
        redis_client: Redis client for the "redis" cache backend
        log: Structured logger handed to the resolver
        configure_logging: Call setup_logging() from the observability settings

    Returns:
        A Pathfinder owning the configured cache backend
    """
    settings = settings or get_settings()

    if configure_logging:
        logging_config = settings.observability.logging
        setup_logging(level=logging_config.level, format=logging_config.format)

    cache = create_cache_store(settings.cache, redis_client=redis_client)
    resolver_config = settings.resolver

    logger.debug(
        "pathfinder_bootstrapped",
        cache_backend=settings.cache.backend,
        parameters=len(settings.parameters),
        assertive=resolver_config.assertive,
        strict_relative=resolver_config.strict_relative,
    )

    return Pathfinder(
        settings.parameters,
        provider,
        cache,
        log=log,
        assertive=resolver_config.assertive,
        strict_relative=resolver_config.strict_relative,
        readable_keys=resolver_config.readable_keys,
        evict_missing=resolver_config.evict_missing,
        max_substitution_depth=resolver_config.max_substitution_depth,
        max_path_length=resolver_config.max_path_length,
    )
