"""
Cache Stores
"""
from larabake.cache.stores.array_store import ArrayStore
from larabake.cache.stores.file_store import FileStore
from larabake.cache.stores.redis_store import RedisStore

__all__ = [
    'ArrayStore',
    'FileStore',
    'RedisStore',
]
