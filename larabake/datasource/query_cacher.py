"""
Query Cacher
Reads and writes query results through the cache manager
"""
from typing import Any, Callable, Optional, Union

from larabake.cache import CacheManager, CacheStoreInterface
from larabake.defaults import DEFAULT_QUERY_CACHE_CONFIG
from larabake.logging import getLogger

logger = getLogger(__name__)


class QueryCacher:
    """
    Cache adapter for one query

    Args:
        key: Cache key, or a callable receiving the query and returning the key
        config: Cache configuration name, or a store instance
        cache: Cache manager used to resolve configuration names

    Raises:
        TypeError: The key is neither a string nor a callable
    """

    def __init__(
        self,
        key: Union[str, Callable[[Any], str]],
        config: Union[str, CacheStoreInterface] = DEFAULT_QUERY_CACHE_CONFIG,
        cache: Optional[CacheManager] = None
    ):
        if not isinstance(key, str) and not callable(key):
            raise TypeError('Cache keys must be strings or callables.')
        self._key = key
        self._config = config
        self._cache = cache

    @property
    def cache(self) -> CacheManager:
        if self._cache is None:
            self._cache = CacheManager()
        return self._cache

    def _resolve_key(self, query: Any) -> str:
        if isinstance(self._key, str):
            return self._key

        key = self._key(query)
        if not isinstance(key, str):
            raise TypeError(f'Cache key functions must return a string. Got {key!r}.')
        return key

    async def fetch(self, query: Any) -> Any:
        """Cached results of the query, or None"""
        key = self._resolve_key(query)
        if isinstance(self._config, CacheStoreInterface):
            result = await self._config.get(key)
        else:
            result = await self.cache.read(key, self._config)
        logger.debug("Query cache %s for %s", 'hit' if result is not None else 'miss', key)
        return result

    async def store(self, query: Any, results: Any) -> bool:
        key = self._resolve_key(query)
        if hasattr(results, 'to_list'):
            results = results.to_list()
        if isinstance(self._config, CacheStoreInterface):
            return await self._config.put(key, results)
        return await self.cache.write(key, results, self._config)
