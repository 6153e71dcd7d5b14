# pagelayouts/core/discovery/walker.py
import os
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

import pathspec
import structlog

log = structlog.get_logger(__name__)


def _raise_walk_error(error: OSError) -> None:
    raise error


def iter_files(root: Union[str, Path]) -> Iterator[Path]:
    # every non-directory file below root, in sorted order. walk errors propagate.
    for dirpath, dirs, files in os.walk(str(root), topdown=True, onerror=_raise_walk_error):
        dirs.sort()
        for file_name in sorted(files):
            yield Path(dirpath, file_name)


def compile_exclude_spec(patterns: Sequence[str]) -> Optional[pathspec.PathSpec]:
    # compiles gitignore-style patterns; None when there is nothing to exclude.
    if not patterns:
        return None
    return pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, patterns)


def discover_pages(root: Union[str, Path], exclude_patterns: Sequence[str] = ()) -> List[Path]:
    """
    Lists the page source files below `root`, skipping paths (relative to
    `root`) that match any of `exclude_patterns`.
    """
    root_path = Path(root)
    log.info("page_discovery_started", root=str(root_path))
    exclude_spec = compile_exclude_spec(exclude_patterns)
    pages: List[Path] = []
    for file_path in iter_files(root_path):
        rel_path = file_path.relative_to(root_path).as_posix()
        if exclude_spec and exclude_spec.match_file(rel_path):
            log.debug("page_excluded", path=rel_path)
            continue
        pages.append(file_path)
    log.info("page_discovery_complete", root=str(root_path), count=len(pages))
    return pages
