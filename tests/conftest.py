import pytest
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from pagelayouts.core.cache import RenderCache
from pagelayouts.core.context import FileSignature, Site
from pagelayouts.core.layouts import LayoutCollection


@dataclass
class FakePage:
    """In-memory page whose signature the test controls."""
    meta: Dict[str, Any] = field(default_factory=dict)
    content: str = ""
    url: str = "/index.html"
    sig: FileSignature = FileSignature(mtime_ns=1, size=1, mode=0o100644)

    def signature(self) -> FileSignature:
        return self.sig


def write_layout(directory: Path, file_name: str, body: str, parent: Any = None) -> Path:
    """Writes a layout file with optional `layout:` front matter."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / file_name
    header = f"---\nlayout: {parent}\n---\n" if parent is not None else ""
    path.write_text(header + body, encoding="utf-8")
    return path


@pytest.fixture
def site():
    return Site(data={"name": "Example"})


@pytest.fixture
def cache():
    return RenderCache(enabled=True)


@pytest.fixture
def collection(site, cache):
    return LayoutCollection(site, cache=cache)


@pytest.fixture
def layouts_dir(tmp_path: Path) -> Path:
    path = tmp_path / "layouts"
    path.mkdir()
    return path
