from pathlib import Path

utf8_bom = b"\xef\xbb\xbf"

def strip_utf8_bom(data: bytes) -> bytes:
    # removes the utf-8 byte order mark from byte data if present.
    if data.startswith(utf8_bom):
        return data[len(utf8_bom):]
    return data

def name_without_extension(path: Path) -> str:
    # base name of a file with its last extension removed ("post.html" -> "post").
    return Path(path).stem
