from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import structlog

log = structlog.get_logger(__name__)

DEFAULT_PAGES_DIR = Path("pages")
DEFAULT_LAYOUTS_DIR = Path("layouts")
DEFAULT_OUTPUT_DIR = Path("out")
DEFAULT_LAYOUT_NAME = "default"
DEFAULT_WORKERS = 4
DEFAULT_ENCODING = "utf-8"

@dataclass
class BuildConfig:
    # holds all configuration parameters for a single build.
    pages_dir: Path = DEFAULT_PAGES_DIR
    layouts_dir: Path = DEFAULT_LAYOUTS_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR
    default_layout: str = DEFAULT_LAYOUT_NAME
    cache_enabled: bool = True
    workers: int = DEFAULT_WORKERS
    exclude_patterns: List[str] = field(default_factory=list)
    site_data: Dict[str, Any] = field(default_factory=dict)
    encoding: str = DEFAULT_ENCODING
    base_dir: Optional[Path] = None

    def __post_init__(self):
        # resolves directories against base_dir (cwd when not given).
        self.base_dir = Path(self.base_dir or Path.cwd()).resolve()
        self.pages_dir = self._resolve(self.pages_dir)
        self.layouts_dir = self._resolve(self.layouts_dir)
        self.output_dir = self._resolve(self.output_dir)
        if self.workers < 1:
            log.warning("invalid_worker_count_using_one", workers=self.workers)
            self.workers = 1

    def _resolve(self, path: Path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.base_dir / path
