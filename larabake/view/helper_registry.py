"""
Helper Registry
Lazily constructs the helpers of a view
"""
from typing import Any, Dict, Iterable, Optional, Type, Union, TYPE_CHECKING

from larabake.exceptions import MissingHelperException
from larabake.support.class_loader import ClassLoader
from larabake.view.helper import Helper

if TYPE_CHECKING:
    from larabake.view.view import View

HelperList = Union[Iterable[str], Dict[str, Optional[Dict[str, Any]]]]


class HelperRegistry:
    """
    Registry of helper instances for one view

    Helper classes are found by name in the class-level catalog (see
    register()) or by dotted import path. An instance is created on first
    use and reused for the rest of the session.

    Example:
        HelperRegistry.register('Time', TimeHelper)

        registry = HelperRegistry(view)
        registry.load('Time', {'format': '%d/%m/%Y'})
        registry.get('Time').nice(date)
    """

    _catalog: Dict[str, Type[Helper]] = {}

    def __init__(self, view: 'View'):
        self.view = view
        self._loaded: Dict[str, Helper] = {}
        self._configs: Dict[str, Dict[str, Any]] = {}

    @classmethod
    def register(cls, name: str, helper_class: Type[Helper]):
        """Make a helper class loadable by its short name"""
        cls._catalog[name] = helper_class

    @classmethod
    def unregister(cls, name: str):
        cls._catalog.pop(name, None)

    @staticmethod
    def normalize(helpers: Optional[HelperList]) -> Dict[str, Dict[str, Any]]:
        """
        Normalize ['Time', 'app.helpers.Markdown'] or {'Time': {...}} to {name: config}

        Dotted paths are keyed by their class name without the `Helper` suffix.
        """
        if not helpers:
            return {}

        if isinstance(helpers, dict):
            items = helpers.items()
        else:
            items = ((name, None) for name in helpers)

        normalized = {}
        for name, config in items:
            config = dict(config or {})
            alias = name
            if ClassLoader.is_dotted_path(name):
                config.setdefault('class_name', name)
                alias = name.rsplit('.', 1)[1]
                if alias.endswith('Helper') and alias != 'Helper':
                    alias = alias[:-len('Helper')]
            normalized[alias] = config
        return normalized

    def _resolve_class(self, name: str, config: Dict[str, Any]) -> Type[Helper]:
        class_name = config.get('class_name', name)

        if class_name in self._catalog:
            return self._catalog[class_name]

        if ClassLoader.is_dotted_path(class_name):
            try:
                return ClassLoader.load(class_name)
            except (ImportError, AttributeError):
                raise MissingHelperException(class_name)

        raise MissingHelperException(class_name)

    def configure(self, name: str, config: Optional[Dict[str, Any]] = None):
        """Remember a helper's config without constructing it"""
        self._configs[name] = dict(config or {})

    def load(self, name: str, config: Optional[Dict[str, Any]] = None) -> Helper:
        """
        Construct (or return the existing) helper

        Raises:
            MissingHelperException: Unknown helper
        """
        if name in self._loaded:
            return self._loaded[name]

        config = {**self._configs.get(name, {}), **(config or {})}
        helper_class = self._resolve_class(name, config)
        config.pop('class_name', None)

        helper = helper_class(self.view, config)
        self._loaded[name] = helper

        # Declared dependencies stay lazy; only their config is recorded
        for dependency, dependency_config in self.normalize(helper.helpers).items():
            if dependency not in self._configs and dependency not in self._loaded:
                self.configure(dependency, dependency_config)

        for event, method in helper.implemented_events().items():
            self.view.get_event_manager().on(event, getattr(helper, method))

        return helper

    def get(self, name: str) -> Helper:
        """Helper instance, constructed on first use"""
        if name in self._loaded:
            return self._loaded[name]
        return self.load(name)

    def has(self, name: str) -> bool:
        return name in self._loaded

    def loaded(self) -> list:
        return list(self._loaded.keys())

    def unload(self, name: str):
        helper = self._loaded.pop(name, None)
        if helper is None:
            return
        for event, method in helper.implemented_events().items():
            self.view.get_event_manager().off(event, getattr(helper, method))
