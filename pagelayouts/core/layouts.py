# pagelayouts/core/layouts.py
"""
Layouts and the collection that chains them.

A page is rendered through its own layout, whose output becomes the
`Content` of the parent layout, and so on until a layout without a parent
is reached. Every layout sees the same `Site` and `Page` data; only
`Content` changes as the chain ascends.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import structlog

from pagelayouts.core.cache import RenderCache
from pagelayouts.core.context import PageContext, SiteContext
from pagelayouts.core.discovery.walker import iter_files
from pagelayouts.core.metafile import read_metafile
from pagelayouts.core.templating.compiler import CompiledTemplate, compile_template
from pagelayouts.exceptions import LayoutCycleError, LayoutNotFoundError, MetadataTypeError
from pagelayouts.util import name_without_extension

log = structlog.get_logger(__name__)

LAYOUT_META_KEY = "layout"
NO_PARENT = "none"


def is_terminal(parent_name: str) -> bool:
    # both spellings end a chain.
    return parent_name == "" or parent_name == NO_PARENT


def layout_name_from_meta(meta: Mapping[str, Any]) -> str:
    """Returns the `layout` metadata value, or "" when the key is absent."""
    if LAYOUT_META_KEY not in meta:
        return ""
    name = meta[LAYOUT_META_KEY]
    if not isinstance(name, str):
        raise MetadataTypeError(f"`{LAYOUT_META_KEY}` must be a string, got {type(name).__name__}")
    return name


@dataclass(frozen=True)
class Layout:
    name: str
    parent_name: str
    template: CompiledTemplate

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self.parent_name)


class LayoutCollection:
    """
    Named layouts for one site.

    Registration (add_file / add_dir) mutates the collection without
    locking and must finish before rendering starts. render_page only reads
    the collection and may then be called from many threads at once.
    """

    def __init__(self, site: SiteContext, cache: Optional[RenderCache] = None, encoding: str = "utf-8"):
        self._layouts: Dict[str, Layout] = {}
        self.site = site
        self.cache = cache
        self.encoding = encoding

    def _new_layout(self, name: str, parent_name: str, body: str) -> Layout:
        template = compile_template(name, body, self.site.layout_funcs())
        return Layout(name=name, parent_name=parent_name, template=template)

    def add_file(self, path: Union[str, Path]) -> Layout:
        file_path = Path(path)
        metafile = read_metafile(file_path, encoding=self.encoding)
        name = name_without_extension(file_path)
        try:
            parent_name = layout_name_from_meta(metafile.meta)
        except MetadataTypeError as e:
            raise MetadataTypeError(f"{file_path}: {e}") from e
        layout = self._new_layout(name, parent_name, metafile.content)
        if name in self._layouts:
            log.debug("layout_replaced", name=name, path=str(file_path))
        self._layouts[name] = layout
        log.info("layout_registered", name=name, parent=parent_name or None, path=str(file_path))
        return layout

    def add_dir(self, path: Union[str, Path]) -> int:
        # the first failing file aborts the walk.
        count = 0
        for file_path in iter_files(path):
            self.add_file(file_path)
            count += 1
        log.info("layout_directory_registered", path=str(path), count=count)
        return count

    def get(self, name: str) -> Optional[Layout]:
        return self._layouts.get(name)

    def names(self) -> List[str]:
        return sorted(self._layouts)

    def __contains__(self, name: object) -> bool:
        return name in self._layouts

    def __len__(self) -> int:
        return len(self._layouts)

    def resolve_chain(self, start: Layout) -> List[Layout]:
        """
        Returns `start` followed by each of its ancestors up to the terminal
        layout. Raises LayoutNotFoundError for an unregistered parent and
        LayoutCycleError if a name repeats.
        """
        chain = [start]
        seen = {start.name} if start.name else set()
        current = start
        while not current.is_terminal:
            parent_name = current.parent_name
            if parent_name in seen:
                names = [layout.name or "<page>" for layout in chain] + [parent_name]
                raise LayoutCycleError(names)
            parent = self._layouts.get(parent_name)
            if parent is None:
                raise LayoutNotFoundError(parent_name)
            seen.add(parent_name)
            chain.append(parent)
            current = parent
        return chain

    def render_chain(self, chain: List[Layout], page: PageContext) -> str:
        content = page.content
        site_data = self.site.layout_data()
        for layout in chain:
            content = layout.template.execute({
                "Site": site_data,
                "Page": page.meta,
                "Content": content,
            })
        return content

    def render_page(self, page: PageContext, default_layout_name: str = "") -> str:
        cache = self.cache if self.cache is not None and self.cache.enabled else None
        signature = None
        if cache is not None:
            signature = page.signature()
            rendered, found = cache.get(page.url, signature)
            if found:
                log.debug("render_cache_hit", url=page.url)
                return rendered

        layout_name = layout_name_from_meta(page.meta) or default_layout_name
        page_layout = self._new_layout("", layout_name, page.content)
        chain = self.resolve_chain(page_layout)
        out = self.render_chain(chain, page)
        log.debug("page_rendered", url=page.url, chain=[layout.name or "<page>" for layout in chain])

        if cache is not None:
            cache.put(page.url, signature, out)
        return out
