"""
File Cache Store
JSON file per key
"""
import json
import threading
import time
from pathlib import Path
from typing import Any

from larabake.cache.cache_interface import CacheStoreInterface
from larabake.logging import getLogger

logger = getLogger(__name__)


class FileStore(CacheStoreInterface):

    def __init__(self, cache_dir: Path = None, prefix: str = ''):
        """
        Initialize file cache store

        Args:
            cache_dir: Directory for cache files
            prefix: Prepended to every key on disk
        """
        if cache_dir is None:
            from larabake.support.storage import Storage
            cache_dir = Storage.cache_data()

        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.prefix = prefix
        self._lock = threading.Lock()

    def _get_cache_file(self, key: str) -> Path:
        """Get cache file path for key"""
        safe_key = f'{self.prefix}{key}'.replace('/', '_').replace('\\', '_').replace(':', '_')
        return self.cache_dir / f"{safe_key}.cache"

    def _is_expired(self, cache_data: dict) -> bool:
        if cache_data.get('ttl', 0) <= 0:
            return False  # Never expires

        return time.time() > cache_data.get('expires_at', 0)

    async def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            cache_file = self._get_cache_file(key)

            if not cache_file.exists():
                return default

            try:
                with open(cache_file, 'r', encoding='utf-8') as f:
                    cache_data = json.load(f)
            except (OSError, ValueError):
                logger.warning("Unreadable cache file %s", cache_file, exc_info=True)
                return default

            if self._is_expired(cache_data):
                cache_file.unlink(missing_ok=True)
                return default

            return cache_data['value']

    async def put(self, key: str, value: Any, ttl: int = None) -> bool:
        if ttl is None:
            from larabake.defaults import DEFAULT_CACHE_TTL
            ttl = DEFAULT_CACHE_TTL

        cache_data = {
            'value': value,
            'ttl': ttl,
            'expires_at': time.time() + ttl if ttl > 0 else -1,
            'created_at': time.time()
        }

        with self._lock:
            cache_file = self._get_cache_file(key)
            try:
                with open(cache_file, 'w', encoding='utf-8') as f:
                    json.dump(cache_data, f, ensure_ascii=False)
                return True
            except (OSError, TypeError):
                logger.warning("Could not write cache file %s", cache_file, exc_info=True)
                return False

    async def has(self, key: str) -> bool:
        return await self.get(key) is not None

    async def forget(self, key: str) -> bool:
        with self._lock:
            cache_file = self._get_cache_file(key)

            if not cache_file.exists():
                return False

            cache_file.unlink()
            return True

    async def flush(self) -> bool:
        with self._lock:
            for cache_file in self.cache_dir.glob(f'{self.prefix}*.cache'):
                cache_file.unlink()
            return True
