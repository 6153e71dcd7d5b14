# pagelayouts/core/metafile.py
"""Reads source files made of optional YAML front matter followed by a body."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

import structlog
import yaml

from pagelayouts.exceptions import MetadataError
from pagelayouts.util import strip_utf8_bom

log = structlog.get_logger(__name__)

FRONT_MATTER_FENCE = "---"


@dataclass
class MetaFile:
    meta: Dict[str, Any] = field(default_factory=dict)
    content: str = ""


def parse_metafile(text: str, source: str = "<string>") -> MetaFile:
    """
    Splits `text` into front matter and body.

    Front matter is present only when the very first line is `---`; it runs
    up to the next `---` line and must be a YAML mapping. Without it, the
    whole text is the body and the metadata is empty.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != FRONT_MATTER_FENCE:
        return MetaFile({}, text)

    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n") == FRONT_MATTER_FENCE:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1:])
            break
    else:
        raise MetadataError(f"{source}: front matter is not terminated by '{FRONT_MATTER_FENCE}'")

    try:
        meta = yaml.safe_load(header)
    except yaml.YAMLError as e:
        raise MetadataError(f"{source}: invalid front matter: {e}") from e
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise MetadataError(f"{source}: front matter must be a mapping, got {type(meta).__name__}")
    return MetaFile(meta, body)


def read_metafile(path: Union[str, Path], encoding: str = "utf-8") -> MetaFile:
    # OSError from reading is left to propagate to the caller.
    file_path = Path(path)
    raw = strip_utf8_bom(file_path.read_bytes())
    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise MetadataError(f"{file_path}: cannot decode as {encoding}: {e}") from e
    metafile = parse_metafile(text, source=str(file_path))
    log.debug("metafile_read", path=str(file_path), meta_keys=[str(k) for k in metafile.meta])
    return metafile
