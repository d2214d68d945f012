"""
Element Cache
Read-through caching of rendered elements
"""
from typing import Any, Dict, Optional

from larabake.cache import CacheManager
from larabake.defaults import DEFAULT_ELEMENT_CACHE_CONFIG, ELEMENT_CACHE_PREFIX
from larabake.logging import getLogger
from larabake.support import Str

logger = getLogger(__name__)


class ElementCache:
    """
    Builds element cache keys and talks to the cache manager

    The key is `element_` followed by the underscored plugin, the element
    name, the option names and the data names joined with `_`. A `cache`
    option given as a mapping may override `config` and `key`.

    Example:
        settings = element_cache.settings('Blog', 'sidebar', {'posts': posts}, {'cache': True})
        # {'config': 'default', 'key': 'element_blog_sidebar_cache_callbacks_posts'}
    """

    def __init__(self, cache: Optional[CacheManager] = None, config: str = DEFAULT_ELEMENT_CACHE_CONFIG):
        self._cache = cache
        self.config = config

    @property
    def cache(self) -> CacheManager:
        if self._cache is None:
            self._cache = CacheManager()
        return self._cache

    def settings(
        self,
        plugin: Optional[str],
        name: str,
        data: Dict[str, Any],
        options: Dict[str, Any]
    ) -> Dict[str, str]:
        underscored = Str.underscore(plugin) if plugin else ''
        keys = [underscored, name] + sorted(options.keys()) + sorted(data.keys())

        settings = {'config': self.config, 'key': '_'.join(keys)}
        if isinstance(options['cache'], dict):
            settings.update(options['cache'])

        settings['key'] = f"{ELEMENT_CACHE_PREFIX}{settings['key']}"
        return settings

    async def read(self, key: str, config: str) -> Optional[str]:
        contents = await self.cache.read(key, config)
        logger.debug("Element cache %s for %s", 'hit' if contents is not None else 'miss', key)
        return contents

    async def write(self, key: str, contents: str, config: str) -> bool:
        return await self.cache.write(key, str(contents), config)
