"""
Template Evaluator
Runs one template file and captures everything it writes
"""
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

from jinja2 import Environment, FunctionLoader, TemplateNotFound

from larabake.logging import getLogger
from larabake.view.view_block import OutputBuffer

logger = getLogger(__name__)


def _finalize(value: Any) -> Any:
    # Helpers that produce nothing (e.g. a missing element with ignore_missing) print as ''
    return '' if value is None else value


def _load_file(name: str) -> Optional[Tuple[str, str, Callable[[], bool]]]:
    """Jinja loader for absolute template paths resolved by the view"""
    path = Path(name)
    try:
        mtime = path.stat().st_mtime
        source = path.read_text(encoding='utf-8')
    except FileNotFoundError:
        raise TemplateNotFound(name)

    def uptodate() -> bool:
        try:
            return os.path.getmtime(path) == mtime
        except OSError:
            return False

    return source, str(path), uptodate


class TemplateEvaluator:
    """
    Evaluates Jinja2 template files in async mode

    The template sees exactly the mapping it is given (the view passes its
    variables plus itself as `view`). Output is streamed chunk by chunk
    into the shared OutputBuffer, so `{% do view.start('name') %}` and
    `{% do view.end() %}` capture the output between them as it is
    produced.

    Example:
        evaluator = TemplateEvaluator(OutputBuffer())
        html = await evaluator.evaluate('/srv/templates/Pages/home.tpl', {'name': 'World'})
    """

    def __init__(
        self,
        buffer: Optional[OutputBuffer] = None,
        autoescape: bool = True,
        environment: Optional[Environment] = None
    ):
        self.buffer = buffer or OutputBuffer()
        self.environment = environment or self.create_environment(autoescape)

    @staticmethod
    def create_environment(autoescape: bool = True) -> Environment:
        return Environment(
            loader=FunctionLoader(_load_file),
            enable_async=True,
            autoescape=autoescape,
            extensions=['jinja2.ext.do'],
            finalize=_finalize,
            keep_trailing_newline=True,
        )

    async def evaluate(self, path: Union[str, Path], context: Dict[str, Any]) -> str:
        """
        Render a template file and return its output

        Errors raised by the template propagate unchanged; the output
        produced so far is discarded.
        """
        template = self.environment.get_template(str(path))
        level = self.buffer.start()

        try:
            async for chunk in template.generate_async(context):
                self.buffer.write(chunk)
        except Exception:
            self.buffer.discard(level)
            raise

        logger.debug("Evaluated %s", path)
        return self.buffer.end(level)
