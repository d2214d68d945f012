"""
View Builder
Collects view settings and builds a View from them
"""
from typing import Any, Dict, Optional, Type, Union

from larabake.view.helper_registry import HelperList


class ViewBuilder:
    """
    Fluent holder of the options a View is built with

    Used where the caller configures rendering before the view exists,
    such as an Email composing its body.

    Example:
        builder = ViewBuilder().template('welcome').layout('fancy').theme('Dark')
        view = builder.build({'user': user})
        html = await view.render()
    """

    def __init__(self):
        self._template: Optional[str] = None
        self._template_path: Optional[str] = None
        self._layout: Union[str, bool, None] = None
        self._layout_path: Optional[str] = None
        self._plugin: Optional[str] = None
        self._theme: Optional[str] = None
        self._helpers: Optional[HelperList] = None
        self._auto_layout = True
        self._options: Dict[str, Any] = {}
        self._class_name: Optional[Type] = None

    # Each setter returns the builder; call without arguments to read.

    def template(self, *name: Optional[str]):
        if not name:
            return self._template
        self._template = name[0]
        return self

    def template_path(self, *path: Optional[str]):
        if not path:
            return self._template_path
        self._template_path = path[0]
        return self

    def layout(self, *name: Union[str, bool, None]):
        if not name:
            return self._layout
        self._layout = name[0]
        return self

    def layout_path(self, *path: Optional[str]):
        if not path:
            return self._layout_path
        self._layout_path = path[0]
        return self

    def plugin(self, *name: Optional[str]):
        if not name:
            return self._plugin
        self._plugin = name[0]
        return self

    def theme(self, *name: Optional[str]):
        if not name:
            return self._theme
        self._theme = name[0]
        return self

    def helpers(self, *helpers: Optional[HelperList]):
        if not helpers:
            return self._helpers
        self._helpers = helpers[0]
        return self

    def auto_layout(self, *enabled: bool):
        if not enabled:
            return self._auto_layout
        self._auto_layout = enabled[0]
        return self

    def options(self, *options: Dict[str, Any]):
        """Extra View constructor arguments (template_paths, cache, ...)"""
        if not options:
            return dict(self._options)
        self._options.update(options[0])
        return self

    def class_name(self, *view_class: Type):
        if not view_class:
            return self._class_name
        self._class_name = view_class[0]
        return self

    def build(self, view_vars: Optional[Dict[str, Any]] = None, **overrides: Any):
        """Create the configured View"""
        from larabake.view.view import View

        view_class = self._class_name or View
        arguments = dict(self._options)
        arguments.update({
            'view': self._template,
            'view_path': self._template_path or '',
            'layout_path': self._layout_path,
            'plugin': self._plugin,
            'theme': self._theme,
            'helpers': self._helpers,
            'auto_layout': self._auto_layout,
            'view_vars': view_vars,
        })
        if self._layout is not None:
            arguments['layout'] = self._layout
        arguments.update(overrides)
        return view_class(**arguments)

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of every setting, restorable with from_dict()"""
        return {
            'template': self._template,
            'template_path': self._template_path,
            'layout': self._layout,
            'layout_path': self._layout_path,
            'plugin': self._plugin,
            'theme': self._theme,
            'helpers': self._helpers,
            'auto_layout': self._auto_layout,
            'options': dict(self._options),
            'class_name': self._class_name,
        }

    def from_dict(self, data: Dict[str, Any]) -> 'ViewBuilder':
        self._template = data.get('template')
        self._template_path = data.get('template_path')
        self._layout = data.get('layout')
        self._layout_path = data.get('layout_path')
        self._plugin = data.get('plugin')
        self._theme = data.get('theme')
        self._helpers = data.get('helpers')
        self._auto_layout = data.get('auto_layout', True)
        self._options = dict(data.get('options') or {})
        self._class_name = data.get('class_name')
        return self
