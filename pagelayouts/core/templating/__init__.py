# pagelayouts/core/templating/__init__.py
"""
Templating module for pagelayouts.

Provides compile_template for turning a layout or page body into a
CompiledTemplate, and the builtin helpers every site gets.
"""
from .compiler import CompiledTemplate, compile_template
from .helpers import BUILTIN_HELPERS

__all__ = [
    "CompiledTemplate",
    "compile_template",
    "BUILTIN_HELPERS",
]
