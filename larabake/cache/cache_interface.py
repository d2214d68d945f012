"""
Cache Store Interface
Abstract base class for all cache stores
"""
import inspect
from abc import ABC, abstractmethod
from typing import Any, Callable


class CacheStoreInterface(ABC):
    """
    Interface that all cache stores must implement

    This ensures consistent API across array, file and redis stores.
    """

    @abstractmethod
    async def get(self, key: str, default: Any = None) -> Any:
        """
        Get cached value

        Args:
            key: Cache key
            default: Default value if not found

        Returns:
            Cached value or default
        """

    @abstractmethod
    async def put(self, key: str, value: Any, ttl: int = None) -> bool:
        """
        Put value in cache

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds (None = use DEFAULT_CACHE_TTL, 0 = forever)

        Returns:
            bool: True if successful
        """

    @abstractmethod
    async def has(self, key: str) -> bool:
        """Check if key exists in cache"""

    @abstractmethod
    async def forget(self, key: str) -> bool:
        """Remove key from cache"""

    @abstractmethod
    async def flush(self) -> bool:
        """Clear all cache"""

    async def remember(self, key: str, ttl: int, callback: Callable) -> Any:
        """
        Get cached value or compute and cache it

        Args:
            key: Cache key
            ttl: Time to live in seconds
            callback: Function to call if cache miss (can be sync or async)
        """
        value = await self.get(key)

        if value is not None:
            return value

        value = callback()
        if inspect.isawaitable(value):
            value = await value

        await self.put(key, value, ttl)

        return value
