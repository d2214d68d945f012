"""
View Helper Base Class
"""
from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from larabake.view.view import View


class Helper:
    """
    Base class for view helpers

    A helper is bound to one view for the lifetime of a render session.
    Helpers listed in `helpers` are available to it through helper().

    Example:
        class TimeHelper(Helper):
            default_config = {'format': '%Y-%m-%d'}

            def nice(self, value):
                return value.strftime(self.config['format'])

        # In a template:
        {{ view.helper('Time').nice(post.created) }}
    """

    default_config: Dict[str, Any] = {}
    helpers: List[str] = []

    def __init__(self, view: 'View', config: Optional[Dict[str, Any]] = None):
        self.view = view
        self.config = {**self.default_config, **(config or {})}

    def helper(self, name: str) -> 'Helper':
        """Another helper of the same view"""
        return self.view.helper(name)

    def implemented_events(self) -> Dict[str, str]:
        """
        View events this helper listens to

        Maps event names to method names; only methods the helper
        defines are registered.
        """
        events = {
            'View.beforeRenderFile': 'before_render_file',
            'View.afterRenderFile': 'after_render_file',
            'View.beforeRender': 'before_render',
            'View.afterRender': 'after_render',
            'View.beforeLayout': 'before_layout',
            'View.afterLayout': 'after_layout',
        }
        return {
            event: method for event, method in events.items()
            if callable(getattr(self, method, None))
        }

    def __repr__(self):
        return f'{self.__class__.__name__}(config={self.config!r})'
