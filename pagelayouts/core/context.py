# pagelayouts/core/context.py
"""
The narrow capabilities the layout engine consumes.

A SiteContext supplies the data exposed to layouts as `Site` and the helper
functions templates may call. A PageContext supplies one page's metadata,
raw body, stable identity (its URL) and the signature used to notice that
its source file changed.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Union, runtime_checkable

import structlog

from pagelayouts.core.metafile import read_metafile
from pagelayouts.core.templating.helpers import BUILTIN_HELPERS

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FileSignature:
    # (modification time, size, permission bits) of a source file.
    mtime_ns: int
    size: int
    mode: int

    @classmethod
    def from_stat(cls, st: os.stat_result) -> "FileSignature":
        return cls(mtime_ns=st.st_mtime_ns, size=st.st_size, mode=st.st_mode)

    @classmethod
    def of(cls, path: Union[str, Path]) -> "FileSignature":
        return cls.from_stat(os.stat(path))


@runtime_checkable
class SiteContext(Protocol):
    def layout_data(self) -> Any: ...

    def layout_funcs(self) -> Mapping[str, Callable[..., Any]]: ...


@runtime_checkable
class PageContext(Protocol):
    meta: Mapping[str, Any]
    content: str
    url: str

    def signature(self) -> FileSignature: ...


class Site:
    """Site-wide data and helpers shared by every layout in a build."""

    def __init__(self, data: Any = None, helpers: Optional[Mapping[str, Callable[..., Any]]] = None):
        self.data = data if data is not None else {}
        self._helpers: Dict[str, Callable[..., Any]] = {**BUILTIN_HELPERS, **(helpers or {})}

    def layout_data(self) -> Any:
        return self.data

    def layout_funcs(self) -> Mapping[str, Callable[..., Any]]:
        return self._helpers


class FilePage:
    """A page read from a source file below a content root."""

    def __init__(self, path: Path, url: str, meta: Dict[str, Any], content: str, file_signature: FileSignature):
        self.path = path
        self.url = url
        self.meta = meta
        self.content = content
        self._signature = file_signature

    @classmethod
    def load(cls, path: Union[str, Path], root: Union[str, Path], encoding: str = "utf-8") -> "FilePage":
        file_path = Path(path)
        resolved, root_path = file_path.resolve(), Path(root).resolve()
        # pages outside the root are identified by file name alone.
        relative = resolved.relative_to(root_path) if resolved.is_relative_to(root_path) else Path(resolved.name)
        # stat before reading: an edit in between leaves an older signature, never a newer one.
        file_signature = FileSignature.of(file_path)
        metafile = read_metafile(file_path, encoding=encoding)
        return cls(file_path, "/" + relative.as_posix(), metafile.meta, metafile.content, file_signature)

    def signature(self) -> FileSignature:
        # the file as it was when meta and content were read.
        return self._signature

    def __repr__(self) -> str:
        return f"FilePage(url={self.url!r})"
