import sys
from pathlib import Path
import structlog
from pagelayouts.exceptions import OutputError

log = structlog.get_logger(__name__)

def write_page_to_stdout(rendered: str, encoding: str = "utf-8"):
    # emits a rendered page in the site's encoding, not the terminal's.
    stream = getattr(sys.stdout, "buffer", None)
    if stream is None:
        sys.stdout.write(rendered)
        sys.stdout.flush()
        return
    sys.stdout.flush()
    stream.write(rendered.encode(encoding, errors="replace"))
    stream.flush()

def write_to_file(output_file_path: Path, text_content: str, encoding: str = "utf-8"):
    # writes text content to the specified file path, creating parent directories.
    log.debug("writing_output_to_file", path=str(output_file_path))
    try:
        output_file_path.parent.mkdir(parents=True, exist_ok=True)
        output_file_path.write_text(text_content, encoding=encoding)
    except OSError as e:
        raise OutputError(f"failed to write to file '{output_file_path}': {e}") from e
