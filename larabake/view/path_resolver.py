"""
Template Path Resolver
Ordered template directory cascade for apps, plugins and themes
"""
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from larabake.defaults import (
    DEFAULT_TEMPLATE_EXTENSION,
    VIEW_PLUGIN_DIR,
    VIEW_THEME_DIR,
)
from larabake.exceptions import MissingTemplateRootException
from larabake.support import Str

PathLike = Union[str, Path]


class PathResolver:
    """
    Finds template files across the template roots

    For a plugin `Blog` and theme `Dark` the search order is:

        <app>/Themed/Dark/Plugin/Blog/   theme overrides of plugin templates
        <app>/Themed/Dark/               theme templates
        <app>/Plugin/Blog/               app overrides of plugin templates
        <Blog plugin templates>/
        <app>/                           app templates
        <core>/                          framework fallbacks

    Every directory is tried with the configured extension first, then
    with the canonical `.tpl` extension.

    Example:
        resolver = PathResolver(['/srv/app/templates'], theme='Dark')
        resolver.find('Pages/home')  # Path('/srv/app/templates/Themed/Dark/Pages/home.tpl')
    """

    def __init__(
        self,
        template_paths: Optional[Iterable[PathLike]] = None,
        core_paths: Optional[Iterable[PathLike]] = None,
        plugins: Optional[Dict[str, PathLike]] = None,
        theme: Optional[str] = None,
        extension: Optional[str] = None
    ):
        from larabake.support import Config, Storage

        # Unconfigured apps fall back to <base>/templates and the framework's own templates
        if template_paths is None:
            template_paths = Config.get('view.TEMPLATE_PATHS') or [Storage.templates()]
        if core_paths is None:
            core_paths = Config.get('view.CORE_TEMPLATE_PATHS') or [Storage.core_templates()]
        if plugins is None:
            plugins = Config.get('view.PLUGINS', {}) or {}
        if extension is None:
            extension = Config.get('view.EXTENSION', DEFAULT_TEMPLATE_EXTENSION)

        self.template_paths: List[Path] = [Path(p) for p in template_paths]
        self.core_paths: List[Path] = [Path(p) for p in core_paths]
        self.plugins: Dict[str, Path] = {name: Path(p) for name, p in plugins.items()}
        self.extension = extension
        self._theme = theme

        self._paths: Optional[List[Path]] = None
        self._paths_for_plugin: Dict[str, List[Path]] = {}

    @property
    def theme(self) -> Optional[str]:
        return self._theme

    @theme.setter
    def theme(self, value: Optional[str]):
        self._theme = value
        self.clear()

    def clear(self):
        """Forget every cached directory list"""
        self._paths = None
        self._paths_for_plugin.clear()

    def has_plugin(self, name: Optional[str]) -> bool:
        return bool(name) and name in self.plugins

    def plugin_path(self, plugin: str) -> Optional[Path]:
        return self.plugins.get(plugin)

    def extensions(self) -> List[str]:
        """Configured extension first, then the canonical one"""
        extensions = [self.extension]
        if self.extension != DEFAULT_TEMPLATE_EXTENSION:
            extensions.append(DEFAULT_TEMPLATE_EXTENSION)
        return extensions

    def paths(self, plugin: Optional[str] = None, cached: bool = True) -> List[Path]:
        """
        Ordered candidate directories for a plugin (or the app when None)

        Args:
            plugin: Plugin name
            cached: False forces the list to be recomputed

        Raises:
            MissingTemplateRootException: No template roots are configured
        """
        if cached:
            if plugin is None and self._paths is not None:
                return self._paths
            if plugin is not None and plugin in self._paths_for_plugin:
                return self._paths_for_plugin[plugin]

        if not self.template_paths and not self.core_paths and not self.plugins:
            raise MissingTemplateRootException()

        paths: List[Path] = []

        if plugin:
            paths.extend(root / VIEW_PLUGIN_DIR / plugin for root in self.template_paths)
            if plugin in self.plugins:
                paths.append(self.plugins[plugin])

        paths.extend(self.template_paths)

        if self._theme:
            theme_paths = self._theme_paths()
            if plugin:
                theme_paths = [
                    theme_path / VIEW_PLUGIN_DIR / plugin for theme_path in theme_paths
                ] + theme_paths
            paths = theme_paths + paths

        paths.extend(self.core_paths)
        paths = self._unique(paths)

        if plugin is not None:
            self._paths_for_plugin[plugin] = paths
        else:
            self._paths = paths
        return paths

    def _theme_paths(self) -> List[Path]:
        theme = Str.studly(self._theme)
        if theme in self.plugins:
            return [self.plugins[theme]]
        return [root / VIEW_THEME_DIR / theme for root in self.template_paths]

    @staticmethod
    def _unique(paths: List[Path]) -> List[Path]:
        seen = set()
        unique = []
        for path in paths:
            if path not in seen:
                seen.add(path)
                unique.append(path)
        return unique

    def find(self, name: str, plugin: Optional[str] = None) -> Optional[Path]:
        """
        First existing file for a relative template name (no extension)

        Returns:
            Path of the template or None
        """
        for extension in self.extensions():
            for path in self.paths(plugin):
                candidate = path / f'{name}{extension}'
                if candidate.is_file():
                    return candidate
        return None

    def first_path(self, plugin: Optional[str] = None) -> Path:
        """
        Highest priority candidate directory

        Raises:
            MissingTemplateRootException: The cascade is empty
        """
        paths = self.paths(plugin)
        if not paths:
            raise MissingTemplateRootException()
        return paths[0]

    def default_path(self, name: str, plugin: Optional[str] = None) -> Path:
        """
        Where a missing template was expected first (for error messages)

        With a plugin this is the plugin's own template directory when it
        is part of the cascade.
        """
        base = self.first_path(plugin)
        if plugin and plugin in self.plugins:
            base = self.plugins[plugin]
        return base / f'{name}{self.extension}'
