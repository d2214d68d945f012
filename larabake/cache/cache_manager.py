"""
Cache Manager
Named cache configurations over swappable drivers
"""
from typing import Any, Dict, Optional

from larabake.cache.cache_interface import CacheStoreInterface
from larabake.cache.stores.array_store import ArrayStore
from larabake.cache.stores.file_store import FileStore
from larabake.exceptions import MissingCacheConfigException


class CacheManager:
    """
    Cache Manager - manages multiple named cache stores

    Usage:
        manager = CacheManager({
            'default': {'driver': 'array'},
            'views': {'driver': 'file', 'path': '/tmp/views', 'ttl': 600},
        })

        await manager.write('element_sidebar', html, 'views')
        html = await manager.read('element_sidebar', 'views')

    Without arguments the configurations come from `cache.STORES`,
    falling back to a single in-memory `default` store.
    """

    def __init__(self, configs: Optional[Dict[str, Dict[str, Any]]] = None):
        if configs is None:
            from larabake.support import Config
            from larabake.defaults import DEFAULT_CACHE_STORE
            configs = Config.get('cache.STORES') or {'default': {'driver': DEFAULT_CACHE_STORE}}

        self.configs = {name: dict(config) for name, config in configs.items()}
        self._stores: Dict[str, CacheStoreInterface] = {}

    def _create_store(self, config: Dict[str, Any]) -> CacheStoreInterface:
        """
        Create cache store instance based on driver
        """
        driver = config.get('driver', 'array')

        if driver == 'array':
            return ArrayStore()

        elif driver == 'file':
            return FileStore(cache_dir=config.get('path'), prefix=config.get('prefix', ''))

        elif driver == 'redis':
            from larabake.cache.stores.redis_store import RedisStore
            return RedisStore(redis_url=config.get('url'), prefix=config.get('prefix', ''))

        else:
            raise ValueError(f"Unknown cache driver: {driver}")

    def configured(self) -> list:
        return list(self.configs.keys())

    def set_config(self, name: str, config: Dict[str, Any]) -> 'CacheManager':
        """Add or replace a named configuration (drops a store built from the old one)"""
        self.configs[name] = dict(config)
        self._stores.pop(name, None)
        return self

    def store(self, name: str = 'default') -> CacheStoreInterface:
        """
        Get the store of a named configuration (created lazily)

        Raises:
            MissingCacheConfigException: Unknown configuration name
        """
        if name not in self._stores:
            if name not in self.configs:
                raise MissingCacheConfigException(name)
            self._stores[name] = self._create_store(self.configs[name])
        return self._stores[name]

    def _ttl(self, config: str) -> Optional[int]:
        return self.configs.get(config, {}).get('ttl')

    async def read(self, key: str, config: str = 'default') -> Any:
        """Cached value, or None when absent"""
        return await self.store(config).get(key)

    async def write(self, key: str, value: Any, config: str = 'default') -> bool:
        return await self.store(config).put(key, value, self._ttl(config))

    async def delete(self, key: str, config: str = 'default') -> bool:
        return await self.store(config).forget(key)

    async def clear(self, config: str = 'default') -> bool:
        return await self.store(config).flush()

    async def remember(self, key: str, callback, config: str = 'default') -> Any:
        """Get cached value or compute and cache it"""
        return await self.store(config).remember(key, self._ttl(config), callback)
