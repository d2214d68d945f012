"""
Storage - Centralized path management (Laravel-style)
Provides consistent path resolution across the application
"""

import os
from pathlib import Path
from typing import Union


class Storage:
    """
    Centralized path management helper (Laravel-style)

    Directory structure:
    /
    ├── config/             # Configuration modules
    ├── templates/          # Application templates
    │   ├── Layout/
    │   ├── Element/
    │   ├── Email/
    │   ├── Plugin/
    │   └── Themed/
    ├── storage/
    │   ├── framework/
    │   │   └── cache/      # File cache store
    │   └── logs/           # Log files
    └── main.py
    """

    _base_path: Path = None
    _storage_path: Path = None
    _framework_path: Path = None

    @classmethod
    def initialize(cls, base_path: Union[str, Path] = None):
        """
        Initialize paths (should be called during app startup)

        Args:
            base_path: Application base directory (defaults to current working directory)
        """
        if base_path is None:
            base_path = os.getcwd()

        cls._base_path = Path(base_path).resolve()
        cls._storage_path = cls._base_path / 'storage'
        cls._framework_path = Path(__file__).parent.parent.resolve()

    @classmethod
    def framework(cls, *paths: str) -> Path:
        """
        Get framework installation path (where the larabake package is installed)
        Core templates shipped with the framework live below it
        """
        if cls._framework_path is None:
            cls.initialize()

        if paths:
            return cls._framework_path.joinpath(*paths)
        return cls._framework_path

    @classmethod
    def base(cls, *paths: str) -> Path:
        """
        Get application base path

        Example:
            Storage.base('templates')  # /project/templates
        """
        if cls._base_path is None:
            cls.initialize()

        if paths:
            clean_paths = [p.lstrip('/') for p in paths]
            return cls._base_path.joinpath(*clean_paths)
        return cls._base_path

    @classmethod
    def templates(cls, *paths: str) -> Path:
        """Get application templates path (templates/)"""
        from larabake.defaults import DEFAULT_TEMPLATES_DIR
        return cls.base(DEFAULT_TEMPLATES_DIR, *paths)

    @classmethod
    def core_templates(cls, *paths: str) -> Path:
        """Get framework templates path (larabake/templates/)"""
        from larabake.defaults import DEFAULT_TEMPLATES_DIR
        return cls.framework(DEFAULT_TEMPLATES_DIR, *paths)

    @classmethod
    def storage(cls, *paths: str) -> Path:
        """Get storage path"""
        if cls._storage_path is None:
            cls.initialize()

        if paths:
            clean_paths = [p.lstrip('/') for p in paths]
            return cls._storage_path.joinpath(*clean_paths)
        return cls._storage_path

    @classmethod
    def cache_data(cls, *paths: str) -> Path:
        """Get data cache path (storage/framework/cache/data/)"""
        return cls.storage('framework', 'cache', 'data', *paths)

    @classmethod
    def logs(cls, *paths: str) -> Path:
        """Get logs path (storage/logs/)"""
        return cls.storage('logs', *paths)

    @staticmethod
    def ensure_directory(path: Union[str, Path]) -> Path:
        """Create a directory (and parents) if missing"""
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)
        return path
