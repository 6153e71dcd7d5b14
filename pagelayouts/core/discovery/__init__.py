# pagelayouts/core/discovery/__init__.py
"""
File discovery for pagelayouts.

iter_files visits every file in a directory tree (used to register layouts);
discover_pages does the same for page sources while honouring exclude
patterns.
"""
from .walker import discover_pages, iter_files

__all__ = ["discover_pages", "iter_files"]
