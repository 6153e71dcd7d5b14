# pagelayouts/core/pipeline.py
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import structlog

from pagelayouts.config.settings import BuildConfig
from pagelayouts.core.cache import CacheStats, RenderCache
from pagelayouts.core.context import FilePage, Site
from pagelayouts.core.discovery.walker import discover_pages
from pagelayouts.core.layouts import LayoutCollection
from pagelayouts.core.output import write_to_file

log = structlog.get_logger(__name__)


@dataclass
class BuildReport:
    pages: List[str] = field(default_factory=list)
    layouts: List[str] = field(default_factory=list)
    cache: CacheStats = field(default_factory=CacheStats)
    elapsed_seconds: float = 0.0

    @property
    def page_count(self) -> int:
        return len(self.pages)


class SiteBuilder:
    # orchestrates the site build: register layouts, render pages, write output.
    def __init__(self, config: BuildConfig, site: Optional[Site] = None):
        self.config = config
        self.site = site or Site(data=config.site_data)
        self.cache = RenderCache(enabled=config.cache_enabled)
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}")
        self.collection: Optional[LayoutCollection] = None

    def load_layouts(self) -> LayoutCollection:
        """
        Registers every file in the layouts directory into a fresh collection.
        Cached pages were rendered with the previous layouts, so the cache
        starts over.
        """
        collection = LayoutCollection(self.site, cache=self.cache, encoding=self.config.encoding)
        collection.add_dir(self.config.layouts_dir)
        self.cache.enable(self.config.cache_enabled)
        self.collection = collection
        self.log.info("layouts_loaded", count=len(collection), layouts_dir=str(self.config.layouts_dir))
        return collection

    def _ensure_layouts(self) -> LayoutCollection:
        if self.collection is None:
            return self.load_layouts()
        return self.collection

    def output_path_for(self, page_path: Path) -> Path:
        return self.config.output_dir / page_path.relative_to(self.config.pages_dir)

    def render_one(self, page_path: Union[str, Path]) -> str:
        collection = self._ensure_layouts()
        page = FilePage.load(page_path, self.config.pages_dir, encoding=self.config.encoding)
        return collection.render_page(page, self.config.default_layout)

    def _render_and_write(self, page_path: Path) -> str:
        rendered = self.render_one(page_path)
        write_to_file(self.output_path_for(page_path), rendered, encoding=self.config.encoding)
        return "/" + page_path.relative_to(self.config.pages_dir).as_posix()

    def build(self) -> BuildReport:
        started = time.perf_counter()
        # registration must be complete before any worker starts rendering.
        collection = self._ensure_layouts()
        page_paths = discover_pages(self.config.pages_dir, self.config.exclude_patterns)
        self.log.info("rendering_pages", count=len(page_paths), workers=self.config.workers)

        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            futures = [executor.submit(self._render_and_write, path) for path in page_paths]
            try:
                # result() re-raises the first failure in submission order.
                urls = [future.result() for future in futures]
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

        report = BuildReport(
            pages=urls,
            layouts=collection.names(),
            cache=self.cache.stats(),
            elapsed_seconds=time.perf_counter() - started,
        )
        self.log.info("build_complete", pages=report.page_count, cache_hits=report.cache.hits,
                      elapsed=round(report.elapsed_seconds, 3))
        return report
