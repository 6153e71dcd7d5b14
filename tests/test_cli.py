from pathlib import Path
from click.testing import CliRunner

from conftest import write_layout
from pagelayouts.cli.interface import main_cli_group


def _make_site(root: Path):
    write_layout(root / "layouts", "base.html", "<html>{{{Content}}}</html>")
    write_layout(root / "layouts", "post.html", "<article>{{{Content}}}</article>", parent="base")
    (root / "pages").mkdir()
    (root / "pages" / "hello.html").write_text("---\nlayout: post\n---\nHello")


def test_cli_build_end_to_end():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        root = Path(td)
        _make_site(root)
        result = runner.invoke(main_cli_group, ["build", "--default-layout", "base"], catch_exceptions=False)

        assert result.exit_code == 0
        assert (root / "out" / "hello.html").read_text() == "<html><article>Hello</article></html>"


def test_cli_build_reads_project_config():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        root = Path(td)
        _make_site(root)
        (root / ".pagelayouts.toml").write_text('output = "public"\n')
        result = runner.invoke(main_cli_group, ["build", "--no-summary"], catch_exceptions=False)

        assert result.exit_code == 0
        assert (root / "public" / "hello.html").exists()


def test_cli_render_to_stdout():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        _make_site(Path(td))
        result = runner.invoke(main_cli_group, ["render", "pages/hello.html"], catch_exceptions=False)

        assert result.exit_code == 0
        assert "<html><article>Hello</article></html>" in result.output


def test_cli_reports_missing_layout():
    runner = CliRunner()
    with runner.isolated_filesystem() as td:
        root = Path(td)
        _make_site(root)
        (root / "pages" / "orphan.html").write_text("---\nlayout: nowhere\n---\nx")
        result = runner.invoke(main_cli_group, ["build"])

        assert result.exit_code == 1
        assert "nowhere" in result.output
