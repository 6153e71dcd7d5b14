# pagelayouts/core/__init__.py
"""
Layout composition engine: layouts, the collection that chains them, and
the render cache.
"""
from .cache import RenderCache
from .context import FilePage, FileSignature, PageContext, Site, SiteContext
from .layouts import Layout, LayoutCollection

__all__ = [
    "FilePage",
    "FileSignature",
    "Layout",
    "LayoutCollection",
    "PageContext",
    "RenderCache",
    "Site",
    "SiteContext",
]
