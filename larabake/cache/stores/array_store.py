"""
Array Cache Store
Stores values in process memory
"""
import time
from typing import Any, Dict

from larabake.cache.cache_interface import CacheStoreInterface


class ArrayStore(CacheStoreInterface):
    """
    In-memory cache storage

    Values are kept as-is (no serialization), so query results and
    rendered elements round-trip unchanged. Lost on restart.
    """

    def __init__(self):
        self._storage: Dict[str, Dict[str, Any]] = {}

    def _is_expired(self, entry: Dict[str, Any]) -> bool:
        expires_at = entry['expires_at']
        return expires_at is not None and time.time() > expires_at

    async def get(self, key: str, default: Any = None) -> Any:
        entry = self._storage.get(key)
        if entry is None:
            return default

        if self._is_expired(entry):
            del self._storage[key]
            return default

        return entry['value']

    async def put(self, key: str, value: Any, ttl: int = None) -> bool:
        if ttl is None:
            from larabake.defaults import DEFAULT_CACHE_TTL
            ttl = DEFAULT_CACHE_TTL

        self._storage[key] = {
            'value': value,
            'expires_at': time.time() + ttl if ttl > 0 else None,
        }
        return True

    async def has(self, key: str) -> bool:
        return await self.get(key) is not None

    async def forget(self, key: str) -> bool:
        return self._storage.pop(key, None) is not None

    async def flush(self) -> bool:
        self._storage.clear()
        return True

    def keys(self):
        """Stored keys, expired ones included (useful for testing)"""
        return list(self._storage.keys())
