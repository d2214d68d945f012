"""
Config Manager - Laravel-style configuration access
Access config modules using dot notation
"""

import importlib
import threading
from typing import Any, Optional, Dict


_MISSING = object()


class Config:
    """
    Configuration manager with dot notation access

    Usage:
        # Template roots for the view engine
        paths = Config.get('view.TEMPLATE_PATHS', [])

        # Named cache configuration
        stores = Config.get('cache.STORES', {})

        # Set runtime value
        Config.set('view.EXTENSION', '.html')

    Config modules live in the `config` package of the application:
        config/
        ├── app.py
        ├── view.py
        ├── cache.py
        └── mail.py
    """

    _lock = threading.Lock()
    _package: str = 'config'
    _loaded: Dict[str, Any] = {}
    _runtime_overrides: Dict[str, Any] = {}
    _caching_enabled: bool = False
    _cache: Dict[str, Any] = {}

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation (case-insensitive)

        Args:
            key: Config key in dot notation (e.g., 'view.template_paths')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            ext = Config.get('view.EXTENSION', '.tpl')
            ext = Config.get('VIEW.extension', '.tpl')  # Same result
        """
        key_lower = key.lower()

        if cls._caching_enabled and key_lower in cls._cache:
            return cls._cache[key_lower]

        # Runtime overrides win over files, including overrides of a parent key
        override = cls._lookup_override(key_lower)
        if override is not _MISSING:
            return override

        parts = key_lower.split('.')
        file_name = parts[0]

        if file_name not in cls._loaded:
            cls._load_config_file(file_name)

        value = cls._loaded.get(file_name)
        if value is None:
            return default

        for part in parts[1:]:
            value = cls._lookup(value, part)
            if value is _MISSING:
                return default

        if cls._caching_enabled:
            cls._cache[key_lower] = value

        return value

    @classmethod
    def _lookup_override(cls, key_lower: str) -> Any:
        if key_lower in cls._runtime_overrides:
            return cls._runtime_overrides[key_lower]

        parts = key_lower.split('.')
        for depth in range(len(parts) - 1, 0, -1):
            parent = '.'.join(parts[:depth])
            if parent in cls._runtime_overrides:
                value = cls._runtime_overrides[parent]
                for part in parts[depth:]:
                    value = cls._lookup(value, part)
                    if value is _MISSING:
                        return _MISSING
                return value
        return _MISSING

    @staticmethod
    def _lookup(value: Any, part: str) -> Any:
        """Case-insensitive attribute or dict key lookup"""
        if isinstance(value, dict):
            for dict_key in value.keys():
                if str(dict_key).lower() == part:
                    return value[dict_key]
            return _MISSING

        if hasattr(value, '__dict__'):
            for attr_name in dir(value):
                if attr_name.lower() == part:
                    return getattr(value, attr_name)

        return _MISSING

    @classmethod
    def _load_config_file(cls, file_name: str):
        """
        Load a config module from the config package

        Args:
            file_name: Config module name (without .py extension)
        """
        with cls._lock:
            if file_name in cls._loaded:
                return

            try:
                module = importlib.import_module(f'{cls._package}.{file_name}')
                cls._loaded[file_name] = module
            except ImportError:
                # Config module doesn't exist
                cls._loaded[file_name] = None

    @classmethod
    def use_package(cls, package: str):
        """
        Read config modules from another package

        Args:
            package: Dotted package name holding the config modules
        """
        with cls._lock:
            cls._package = package
            cls._loaded.clear()
        cls.clear_cache()

    @classmethod
    def set(cls, key: str, value: Any):
        """
        Set configuration value at runtime (does not persist to file)

        Example:
            Config.set('view.theme', 'Dark')
        """
        cls._runtime_overrides[key.lower()] = value
        cls.clear_cache()

    @classmethod
    def has(cls, key: str) -> bool:
        """Check if configuration key exists"""
        return cls.get(key) is not None

    @classmethod
    def all(cls, file_name: str) -> Optional[Any]:
        """Get the whole config module for a file"""
        if file_name not in cls._loaded:
            cls._load_config_file(file_name)

        return cls._loaded.get(file_name)

    @classmethod
    def reload(cls, file_name: Optional[str] = None):
        """
        Reload configuration module(s)

        Args:
            file_name: Specific module to reload, or None to reload all
        """
        with cls._lock:
            if file_name:
                cls._loaded.pop(file_name, None)
            else:
                cls._loaded.clear()
        cls.clear_cache()

    @classmethod
    def clear_runtime_overrides(cls):
        """Clear all runtime configuration overrides"""
        cls._runtime_overrides.clear()
        cls.clear_cache()

    @classmethod
    def enable_caching(cls, enabled: bool = True):
        """Enable or disable config value caching"""
        cls._caching_enabled = enabled
        if not enabled:
            cls.clear_cache()

    @classmethod
    def clear_cache(cls):
        """Clear the config value cache"""
        cls._cache.clear()
