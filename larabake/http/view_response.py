"""
View Response
Renders a page and wraps it in a Sanic HTML response
"""
import inspect
from typing import Any, Dict, Optional

from sanic.response import HTTPResponse, html

from larabake.logging import getLogger

logger = getLogger(__name__)


class ViewResponseBuilder:
    """
    Deferred view rendering with method chaining

    Can be used with or without await:
    - return view('Pages/home') - Returns builder for chaining
    - await view('Pages/home') - Returns HTTPResponse immediately

    Example:
        return await view('Posts/index', {'posts': posts}, layout='admin') \\
            .header('X-Frame-Options', 'DENY')
    """

    def __init__(self, template: Optional[str] = None, context: Optional[Dict[str, Any]] = None, **options: Any):
        """
        Args:
            template: View name (e.g., 'Pages/home')
            context: View variables
            **options: View constructor arguments (layout, theme, plugin, helpers, template_paths, ...)
        """
        self.template = template
        self.context = dict(context or {})
        self.options = options
        self._headers: Dict[str, str] = {}
        self._status = 200

    def __await__(self):
        async def _build():
            result = self.build()
            if inspect.iscoroutine(result):
                return await result
            return result
        return _build().__await__()

    def with_context(self, key: str, value: Any) -> 'ViewResponseBuilder':
        self.context[key] = value
        return self

    def header(self, key: str, value: str) -> 'ViewResponseBuilder':
        self._headers[key] = value
        return self

    def status(self, code: int) -> 'ViewResponseBuilder':
        self._status = code
        return self

    async def render(self) -> str:
        # Import here to avoid circular dependency
        from larabake.view import View

        engine = View(view=self.template, view_vars=self.context, **self.options)
        return await engine.render()

    async def build(self) -> HTTPResponse:
        """Render the view and build the HTTP response"""
        content = await self.render()
        logger.debug("Rendered %s for HTTP response", self.template)
        return html(content, status=self._status, headers=self._headers or None)
