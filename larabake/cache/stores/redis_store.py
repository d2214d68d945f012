"""
Redis Cache Store
Shared cache for multi-process deployments
"""
import json
from typing import Any, Optional

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from larabake.cache.cache_interface import CacheStoreInterface
from larabake.logging import getLogger

logger = getLogger(__name__)


class RedisStore(CacheStoreInterface):

    def __init__(self, redis_url: str = None, prefix: str = ''):
        """
        Initialize Redis cache store

        Args:
            redis_url: Redis connection URL
            prefix: Prepended to every key
        """
        if redis_url is None:
            from larabake.defaults import DEFAULT_REDIS_URL
            redis_url = DEFAULT_REDIS_URL
        self.redis_url = redis_url
        self.prefix = prefix
        self.redis: Optional[aioredis.Redis] = None

    async def _ensure_connected(self):
        if self.redis is None:
            self.redis = aioredis.from_url(
                self.redis_url,
                encoding='utf-8',
                decode_responses=True
            )

    async def disconnect(self):
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None

    def _key(self, key: str) -> str:
        return f'{self.prefix}{key}'

    async def get(self, key: str, default: Any = None) -> Any:
        await self._ensure_connected()

        try:
            value = await self.redis.get(self._key(key))
        except RedisError:
            logger.warning("Redis read failed for %s", key, exc_info=True)
            return default

        if value is None:
            return default

        return json.loads(value)

    async def put(self, key: str, value: Any, ttl: int = None) -> bool:
        if ttl is None:
            from larabake.defaults import DEFAULT_CACHE_TTL
            ttl = DEFAULT_CACHE_TTL
        await self._ensure_connected()

        serialized = json.dumps(value, ensure_ascii=False)

        try:
            if ttl > 0:
                await self.redis.setex(self._key(key), ttl, serialized)
            else:
                await self.redis.set(self._key(key), serialized)
        except RedisError:
            logger.warning("Redis write failed for %s", key, exc_info=True)
            return False

        return True

    async def has(self, key: str) -> bool:
        await self._ensure_connected()
        return await self.redis.exists(self._key(key)) > 0

    async def forget(self, key: str) -> bool:
        await self._ensure_connected()
        return await self.redis.delete(self._key(key)) > 0

    async def flush(self) -> bool:
        await self._ensure_connected()

        if not self.prefix:
            await self.redis.flushdb()
            return True

        async for found in self.redis.scan_iter(match=f'{self.prefix}*'):
            await self.redis.delete(found)
        return True
