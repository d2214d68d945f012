"""
Cache Package
Laravel-style caching with swappable drivers (array, file, redis)
"""
from larabake.cache.cache_manager import CacheManager
from larabake.cache.cache_interface import CacheStoreInterface
from larabake.cache.stores.array_store import ArrayStore
from larabake.cache.stores.file_store import FileStore

__all__ = [
    'CacheManager',
    'CacheStoreInterface',
    'ArrayStore',
    'FileStore',
]
