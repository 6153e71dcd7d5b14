import datetime

import pytest
from pathlib import Path

from pagelayouts.core.context import FilePage, FileSignature
from pagelayouts.core.metafile import parse_metafile, read_metafile
from pagelayouts.exceptions import MetadataError


def test_front_matter_and_body():
    mf = parse_metafile("---\nlayout: post\ntitle: Hello\n---\n<p>body</p>\n")
    assert mf.meta == {"layout": "post", "title": "Hello"}
    assert mf.content == "<p>body</p>\n"


def test_no_front_matter_means_whole_text_is_body():
    mf = parse_metafile("<p>just html</p>\n---\nnot: meta\n")
    assert mf.meta == {}
    assert mf.content == "<p>just html</p>\n---\nnot: meta\n"


def test_empty_front_matter():
    mf = parse_metafile("---\n---\nbody")
    assert mf.meta == {}
    assert mf.content == "body"


def test_yaml_values_keep_their_types():
    mf = parse_metafile("---\nlayout: 5\ndate: 2013-05-01\n---\n")
    assert mf.meta["layout"] == 5
    assert mf.meta["date"] == datetime.date(2013, 5, 1)


def test_crlf_fences():
    mf = parse_metafile("---\r\ntitle: x\r\n---\r\nbody")
    assert mf.meta == {"title": "x"}
    assert mf.content == "body"


@pytest.mark.parametrize("text", [
    "---\ntitle: x\nbody without closing fence",
    "---\n- a\n- b\n---\nbody",
    "---\ntitle: [unclosed\n---\nbody",
])
def test_malformed_front_matter(text):
    with pytest.raises(MetadataError):
        parse_metafile(text)


def test_read_strips_bom(tmp_path: Path):
    path = tmp_path / "page.html"
    path.write_bytes(b"\xef\xbb\xbf---\ntitle: bom\n---\nbody")
    mf = read_metafile(path)
    assert mf.meta == {"title": "bom"}
    assert mf.content == "body"


def test_read_missing_file_propagates(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        read_metafile(tmp_path / "missing.html")


def test_file_page_identity_and_signature(tmp_path: Path):
    root = tmp_path / "pages"
    (root / "blog").mkdir(parents=True)
    path = root / "blog" / "first.html"
    path.write_text("---\ntitle: First\n---\nhello")

    page = FilePage.load(path, root)
    assert page.url == "/blog/first.html"
    assert page.meta == {"title": "First"}
    assert page.content == "hello"
    assert page.signature() == FileSignature.from_stat(path.stat())
