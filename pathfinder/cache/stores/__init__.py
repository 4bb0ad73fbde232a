"""Cache store backends."""

from pathfinder.cache.store import BufferedCacheStore, CacheStore
from pathfinder.cache.stores.file import FileCacheStore
from pathfinder.cache.stores.inmemory import InMemoryCacheStore
from pathfinder.cache.stores.redis import RedisCacheStore

__all__ = [
    "CacheStore",
    "BufferedCacheStore",
    "InMemoryCacheStore",
    "FileCacheStore",
    "RedisCacheStore",
]
