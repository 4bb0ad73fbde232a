"""Resolution cache: the CacheStore port and its backends."""

from pathfinder.cache.store import BufferedCacheStore, CacheStore
from pathfinder.cache.stores import FileCacheStore, InMemoryCacheStore, RedisCacheStore

__all__ = [
    "CacheStore",
    "BufferedCacheStore",
    "InMemoryCacheStore",
    "FileCacheStore",
    "RedisCacheStore",
]
