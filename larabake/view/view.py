"""
View
Renders views inside layouts, with blocks, elements, helpers and themes
"""
import hashlib
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from markupsafe import Markup, escape

from larabake.cache import CacheManager
from larabake.defaults import (
    DEFAULT_ELEMENT_CACHE_CONFIG,
    DEFAULT_LAYOUT,
    PLUGIN_SEPARATOR,
    VIEW_ELEMENT_DIR,
    VIEW_LAYOUT_DIR,
)
from larabake.events import Event, EventManager
from larabake.exceptions import (
    ExtensionCycleException,
    MissingElementException,
    MissingLayoutException,
    MissingViewException,
    SelfExtensionException,
    UnclosedBlockException,
)
from larabake.logging import getLogger
from larabake.support import Str
from larabake.view.element_cache import ElementCache
from larabake.view.evaluator import TemplateEvaluator
from larabake.view.helper import Helper
from larabake.view.helper_registry import HelperList, HelperRegistry
from larabake.view.path_resolver import PathResolver
from larabake.view.view_block import OutputBuffer, ViewBlock

logger = getLogger(__name__)


class View:
    """
    View rendering engine

    One instance renders one response. Templates are Jinja2 files that
    receive the view variables plus the view itself as `view`:

        {# templates/Posts/view.tpl #}
        {% do view.extend('/Common/article') %}
        {% do view.assign('title', post.title) %}
        {% do view.start('sidebar') %}
            {{ view.element('related', {'post': post}) }}
        {% do view.end() %}
        <p>{{ post.body }}</p>

    Usage:
        view = View(template_paths=['/srv/app/templates'], view_path='Posts')
        view.set('post', post)
        html = await view.render('view')
    """

    TYPE_VIEW = 'view'
    TYPE_ELEMENT = 'element'
    TYPE_LAYOUT = 'layout'

    def __init__(
        self,
        view: Optional[str] = None,
        view_path: Optional[str] = None,
        name: Optional[str] = None,
        plugin: Optional[str] = None,
        layout: Union[str, bool, None] = DEFAULT_LAYOUT,
        layout_path: Optional[str] = None,
        sub_dir: Optional[str] = None,
        auto_layout: bool = True,
        theme: Optional[str] = None,
        view_vars: Optional[Dict[str, Any]] = None,
        helpers: Optional[HelperList] = None,
        template_paths: Optional[List[Union[str, Path]]] = None,
        core_paths: Optional[List[Union[str, Path]]] = None,
        plugins: Optional[Dict[str, Union[str, Path]]] = None,
        extension: Optional[str] = None,
        event_manager: Optional[EventManager] = None,
        cache: Optional[CacheManager] = None,
        element_cache: str = DEFAULT_ELEMENT_CACHE_CONFIG,
        autoescape: bool = True
    ):
        self.view = view
        self.name = name
        self.view_path = view_path if view_path is not None else (name or '')
        self.plugin = plugin
        self.layout = layout
        self.layout_path = layout_path
        self.sub_dir = sub_dir
        self.auto_layout = auto_layout
        self.view_vars: Dict[str, Any] = dict(view_vars or {})
        self.helpers = helpers
        self.autoescape = autoescape
        self.has_rendered = False
        self.uuids: List[str] = []

        self.resolver = PathResolver(
            template_paths=template_paths,
            core_paths=core_paths,
            plugins=plugins,
            theme=theme,
            extension=extension,
        )
        self.buffer = OutputBuffer()
        self.view_blocks = ViewBlock(self.buffer)
        self.evaluator = TemplateEvaluator(self.buffer, autoescape=autoescape)
        self.element_cache = ElementCache(cache, element_cache)
        self.element_cache_settings: Dict[str, str] = {}

        self._event_manager = event_manager
        self._helpers: Optional[HelperRegistry] = None
        self._scripts: List[str] = []
        self._parents: Dict[Path, Path] = {}
        self._current: Optional[Path] = None
        self._current_type = ''
        self._stack: List[str] = []

        self.load_helpers()

    # ==========================================================================
    # Collaborators
    # ==========================================================================

    @property
    def theme(self) -> Optional[str]:
        return self.resolver.theme

    @theme.setter
    def theme(self, value: Optional[str]):
        self.resolver.theme = value

    def get_event_manager(self) -> EventManager:
        if self._event_manager is None:
            self._event_manager = EventManager()
        return self._event_manager

    def set_event_manager(self, event_manager: EventManager):
        self._event_manager = event_manager

    async def _dispatch(self, name: str, *data: Any) -> Event:
        return await self.get_event_manager().dispatch(Event(name, self, list(data)))

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def helper_registry(self) -> HelperRegistry:
        if self._helpers is None:
            self._helpers = HelperRegistry(self)
        return self._helpers

    def load_helpers(self):
        """Register the configured helpers; each is constructed on first use"""
        registry = self.helper_registry()
        for name, config in HelperRegistry.normalize(self.helpers).items():
            registry.configure(name, config)

    def add_helper(self, name: str, config: Optional[Dict[str, Any]] = None) -> Helper:
        return self.helper_registry().load(name, config)

    def helper(self, name: str) -> Helper:
        """
        Helper instance by name

        Example:
            {{ view.helper('Time').nice(post.created) }}
        """
        return self.helper_registry().get(name)

    # ==========================================================================
    # View variables
    # ==========================================================================

    def set(self, name: Union[str, Dict[str, Any]], value: Any = None) -> 'View':
        """Set one view variable, or several from a mapping"""
        if isinstance(name, dict):
            self.view_vars.update(name)
        else:
            self.view_vars[name] = value
        return self

    def get(self, name: str, default: Any = None) -> Any:
        value = self.view_vars.get(name)
        return default if value is None else value

    def get_vars(self) -> List[str]:
        return list(self.view_vars.keys())

    # ==========================================================================
    # Blocks
    # ==========================================================================

    def blocks(self) -> List[str]:
        """Names of every block defined so far"""
        return self.view_blocks.keys()

    def start(self, name: str):
        self.view_blocks.start(name)

    def end(self):
        self.view_blocks.end()

    def _safe(self, value: Any) -> Any:
        # Plain strings are escaped; Markup and captured output are already safe
        if value is None or not self.autoescape:
            return value
        return escape(value)

    def append(self, name: str, value: Any):
        self.view_blocks.concat(name, self._safe(value), ViewBlock.APPEND)

    def prepend(self, name: str, value: Any):
        self.view_blocks.concat(name, self._safe(value), ViewBlock.PREPEND)

    def assign(self, name: str, value: Any):
        self.view_blocks.set(name, self._safe(value))

    def fetch(self, name: str, default: str = '') -> Markup:
        return Markup(self.view_blocks.get(name, default))

    def add_script(self, markup: str):
        """Add markup to `scripts_for_layout`"""
        if markup not in self._scripts:
            self._scripts.append(markup)

    # ==========================================================================
    # Rendering
    # ==========================================================================

    async def render(self, view: Union[str, bool, None] = None, layout: Union[str, bool, None] = None) -> Optional[str]:
        """
        Render a view and wrap it in its layout

        Args:
            view: View name; None uses `self.view`, False skips the view file
            layout: Layout name; None uses `self.layout`, False disables it

        Returns:
            The rendered page, or None when this view already rendered
        """
        if self.has_rendered:
            return None

        if view is not False:
            view_file = self._get_view_file_name(view)
            logger.debug("Rendering view %s", view_file)
            self._current_type = self.TYPE_VIEW
            await self._dispatch('View.beforeRender', view_file)
            self.view_blocks.set('content', await self._render(view_file))
            await self._dispatch('View.afterRender', view_file)

        if layout is None:
            layout = self.layout
        if layout and self.auto_layout:
            self.view_blocks.set('content', await self.render_layout('', layout))

        self.has_rendered = True
        return self.view_blocks.get('content')

    async def render_layout(self, content: str, layout: Optional[str] = None) -> str:
        """
        Render a layout around `content` (or the current content block)

        The layout receives `content_for_layout`, `scripts_for_layout` and
        `title_for_layout`.
        """
        layout_file = self._get_layout_file_name(layout)

        if not content:
            content = self.view_blocks.get('content')
        else:
            self.view_blocks.set('content', content)

        await self._dispatch('View.beforeLayout', layout_file)

        scripts = '\n\t'.join(self._scripts)
        scripts += self.view_blocks.get('meta') + self.view_blocks.get('css') + self.view_blocks.get('script')

        self.view_vars.update({
            'content_for_layout': Markup(content),
            'scripts_for_layout': Markup(scripts),
        })

        title = self.view_blocks.get('title')
        if title == '':
            if self.view_vars.get('title_for_layout') is not None:
                title = self._safe(self.view_vars['title_for_layout'])
            else:
                title = self._safe(Str.humanize(self.view_path))
        else:
            title = Markup(title)
        self.view_vars['title_for_layout'] = title
        self.view_blocks.set('title', title)

        self._current_type = self.TYPE_LAYOUT
        self.view_blocks.set('content', await self._render(layout_file))

        await self._dispatch('View.afterLayout', layout_file)
        return self.view_blocks.get('content')

    def extend(self, name: str):
        """
        Make the file being rendered extend another template

        The parent is rendered after this file with this file's output
        available as the `content` block.

        Raises:
            SelfExtensionException: The parent is the current file
            ExtensionCycleException: The parent (transitively) extends the current file
            MissingElementException: An element extends a missing element
        """
        if name.startswith('/') or self._current_type == self.TYPE_VIEW:
            parent = self._get_view_file_name(name)
        elif self._current_type == self.TYPE_ELEMENT:
            parent = self._get_element_file_name(name)
            if parent is None:
                plugin, element = self.plugin_split(name)
                default_path = self.resolver.first_path(plugin) / VIEW_ELEMENT_DIR / f'{element}{self.resolver.extension}'
                raise MissingElementException(
                    default_path,
                    f'You cannot extend an element which does not exist ({default_path}).'
                )
        elif self._current_type == self.TYPE_LAYOUT:
            parent = self._get_layout_file_name(name)
        else:
            parent = self._get_view_file_name(name)

        if parent == self._current:
            logger.error("%s extends itself", parent)
            raise SelfExtensionException(self._current, parent)
        ancestor = parent
        seen = set()
        while ancestor in self._parents and ancestor not in seen:
            seen.add(ancestor)
            ancestor = self._parents[ancestor]
            if ancestor == self._current:
                logger.error("%s and %s form an extension cycle", self._current, parent)
                raise ExtensionCycleException(self._current, parent)

        self._parents[self._current] = parent

    async def element(
        self,
        name: str,
        data: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Optional[Markup]:
        """
        Render an element (a reusable template fragment)

        Args:
            name: Element name, `Plugin.name` for plugin elements
            data: Variables added to the view variables for this element
            options:
                callbacks: Fire View.beforeRender / View.afterRender (default False)
                ignore_missing: Return None instead of raising (default False)
                cache: True, or {'config': ..., 'key': ...}

        Raises:
            MissingElementException: Element not found and ignore_missing not set
        """
        data = dict(data or {})
        options = dict(options or {})
        options.setdefault('callbacks', False)

        cache_settings = None
        if options.get('cache'):
            contents, cache_settings = await self._element_cache(name, data, options)
            if contents is not None:
                return Markup(contents)

        element_file = self._get_element_file_name(name)
        if element_file is not None:
            return await self._render_element(element_file, data, options, cache_settings)

        if options.get('ignore_missing'):
            return None

        plugin, element = self.plugin_split(name)
        missing = self.resolver.default_path(f'{VIEW_ELEMENT_DIR}/{element}', plugin)
        logger.warning("Element not found: %s", missing)
        raise MissingElementException(missing)

    def element_exists(self, name: str) -> bool:
        return self._get_element_file_name(name) is not None

    async def _render(self, view_file: Path, data: Optional[Dict[str, Any]] = None) -> str:
        """
        Render one file, then the template it extends (if any)

        Raises:
            UnclosedBlockException: The file left a block open
        """
        if not data:
            data = self.view_vars

        self._current = view_file
        initial_blocks = len(self.view_blocks.unclosed())

        await self._dispatch('View.beforeRenderFile', view_file)
        content = await self._evaluate(view_file, data)

        after = await self._dispatch('View.afterRenderFile', view_file, content)
        if after.result is not None:
            content = after.result

        if len(self.view_blocks.unclosed()) != initial_blocks:
            logger.error("Block %s left open in %s", self.view_blocks.active(), view_file)
            raise UnclosedBlockException(self.view_blocks.active())

        if view_file in self._parents:
            self._stack.append(self.view_blocks.get('content'))
            self.view_blocks.set('content', content)

            content = await self._render(self._parents[view_file])
            self.view_blocks.set('content', self._stack.pop())

        return content

    async def _evaluate(self, view_file: Path, data: Dict[str, Any]) -> str:
        context = dict(data)
        context['view'] = self
        return await self.evaluator.evaluate(view_file, context)

    async def _render_element(
        self,
        element_file: Path,
        data: Dict[str, Any],
        options: Dict[str, Any],
        cache_settings: Optional[Dict[str, str]] = None
    ) -> Markup:
        if options['callbacks']:
            await self._dispatch('View.beforeRender', element_file)

        current = self._current
        restore = self._current_type
        self._current_type = self.TYPE_ELEMENT
        try:
            element = await self._render(element_file, {**self.view_vars, **data})
        finally:
            self._current_type = restore
            self._current = current

        if options['callbacks']:
            await self._dispatch('View.afterRender', element_file, element)

        if cache_settings is not None:
            await self.element_cache.write(cache_settings['key'], element, cache_settings['config'])

        return Markup(element)

    async def _element_cache(
        self,
        name: str,
        data: Dict[str, Any],
        options: Dict[str, Any]
    ) -> Tuple[Optional[str], Dict[str, str]]:
        """Cached output (or None) and the key/config it is stored under"""
        plugin, element = self.plugin_split(name)
        settings = self.element_cache.settings(plugin, element, data, options)
        # Last lookup only; nested elements overwrite it
        self.element_cache_settings = settings
        return await self.element_cache.read(settings['key'], settings['config']), settings

    # ==========================================================================
    # File resolution
    # ==========================================================================

    def plugin_split(self, name: str, fallback: bool = True) -> Tuple[Optional[str], str]:
        """
        Split `Plugin.name` when Plugin is registered

        Without an explicit plugin the view's own plugin is returned
        (unless `fallback` is False).
        """
        plugin = None
        if PLUGIN_SEPARATOR in name:
            first, second = name.split(PLUGIN_SEPARATOR, 1)
            if self.resolver.has_plugin(first):
                plugin, name = first, second

        if self.plugin and not plugin and fallback:
            plugin = self.plugin
        return plugin, name

    def _join(self, *parts: Optional[str]) -> str:
        return '/'.join(part.strip('/') for part in parts if part)

    def _get_view_file_name(self, name: Optional[str] = None) -> Path:
        """
        Resolve a view name to a file

        Raises:
            MissingViewException: No candidate exists
        """
        if name is None:
            name = self.view
        if not name:
            raise MissingViewException(self.resolver.default_path(self._join(self.view_path, 'index'), self.plugin))

        name = name.replace('\\', '/')
        plugin, name = self.plugin_split(name)

        if '/' not in name and not name.startswith('.'):
            name = self._join(self.view_path, self.sub_dir, Str.underscore(name))
        elif '/' in name:
            if name.startswith('/') or name[1:2] == ':':
                if Path(name).is_file():
                    return Path(name)
                name = name.strip('/')
            elif name.startswith('.'):
                name = name[3:]
            elif not plugin or self.view_path != self.name:
                name = self._join(self.view_path, self.sub_dir, name)

        view_file = self.resolver.find(name, plugin)
        if view_file is not None:
            return view_file

        missing = self.resolver.default_path(name, plugin)
        logger.warning("View not found: %s", missing)
        raise MissingViewException(missing)

    def _get_layout_file_name(self, name: Optional[str] = None) -> Path:
        """
        Resolve a layout name to a file

        Raises:
            MissingLayoutException: No candidate exists
        """
        if name is None:
            name = self.layout

        plugin, name = self.plugin_split(name)
        layout = self._join(VIEW_LAYOUT_DIR, self.layout_path, name)

        layout_file = self.resolver.find(layout, plugin)
        if layout_file is not None:
            return layout_file

        missing = self.resolver.first_path(plugin) / f'{layout}{self.resolver.extension}'
        logger.warning("Layout not found: %s", missing)
        raise MissingLayoutException(missing)

    def _get_element_file_name(self, name: str) -> Optional[Path]:
        plugin, name = self.plugin_split(name)
        return self.resolver.find(self._join(VIEW_ELEMENT_DIR, name), plugin)

    # ==========================================================================
    # Misc
    # ==========================================================================

    def uuid(self, prefix: str, url: str) -> str:
        """
        Unique DOM id for an object/url pair

        Example:
            view.uuid('form', '/posts/add')  # 'form3c1e9a2b7d'
        """
        counter = 1
        hash_ = prefix + hashlib.md5(f'{prefix}{url}'.encode()).hexdigest()[:10]
        while hash_ in self.uuids:
            hash_ = prefix + hashlib.md5(f'{prefix}{url}{counter}'.encode()).hexdigest()[:10]
            counter += 1
        self.uuids.append(hash_)
        return hash_
