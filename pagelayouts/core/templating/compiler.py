# pagelayouts/core/templating/compiler.py
"""
Compiles Handlebars template bodies with pybars and binds each compiled
template to the helper set it was compiled for.
"""
import threading
from typing import Any, Callable, Dict, Mapping, Optional

import pybars  # type: ignore
import structlog

from pagelayouts.exceptions import TemplateSyntaxError, TemplateExecutionError

log = structlog.get_logger(__name__)

HelperMap = Dict[str, Callable[..., Any]]

# pybars keeps its code builder on the Compiler class, so compilation is not
# safe to run from several threads at once.
_compile_lock = threading.Lock()
_handlebars_compiler = pybars.Compiler()


class CompiledTemplate:
    """A compiled Handlebars template plus the helpers it renders with."""

    def __init__(self, name: str, render_function: Callable[..., Any], helpers: Optional[Mapping[str, Callable[..., Any]]] = None):
        self.name = name
        self._render_function = render_function
        self._helpers: HelperMap = dict(helpers or {})

    def execute(self, data: Mapping[str, Any]) -> str:
        """Renders the template against `data` and returns the output string."""
        try:
            return str(self._render_function(data, helpers=self._helpers))
        except Exception as e:
            raise TemplateExecutionError(f"template {self.name or '<page>'!r} failed to render: {e}") from e

    def __repr__(self) -> str:
        return f"CompiledTemplate(name={self.name!r})"


def compile_template(name: str, source: str, helpers: Optional[Mapping[str, Callable[..., Any]]] = None) -> CompiledTemplate:
    """
    Compiles `source` under `name`. Raises TemplateSyntaxError if pybars
    rejects the template body.
    """
    try:
        with _compile_lock:
            render_function = _handlebars_compiler.compile(source)
    except Exception as e:
        log.debug("template_compilation_failed", template=name or "<page>", error=str(e))
        raise TemplateSyntaxError(f"failed to compile template {name or '<page>'!r}: {e}") from e
    return CompiledTemplate(name, render_function, helpers)
