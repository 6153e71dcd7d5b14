# pagelayouts/cli/interface.py
import sys
from pathlib import Path
from typing import Any, Optional, Tuple

import click
from click_option_group import optgroup
from rich.console import Console as RichConsole
from rich.table import Table
import structlog

from pagelayouts import __version__ as app_version
from pagelayouts.config.loader import load_build_config
from pagelayouts.config.settings import BuildConfig
from pagelayouts.core.output import write_page_to_stdout
from pagelayouts.core.pipeline import BuildReport, SiteBuilder
from pagelayouts.exceptions import PageLayoutsError
from pagelayouts.logging_setup import configure_logging

log = structlog.get_logger(__name__)


def _print_build_summary(config: BuildConfig, report: BuildReport):
    console = RichConsole(stderr=True)
    table = Table(title="build summary", show_header=False, title_style="cyan")
    table.add_row("pages written", str(report.page_count))
    table.add_row("layouts", ", ".join(report.layouts) or "-")
    table.add_row("output", str(config.output_dir))
    if config.cache_enabled:
        table.add_row("cache hits / misses", f"{report.cache.hits} / {report.cache.misses}")
    table.add_row("elapsed", f"{report.elapsed_seconds:.3f}s")
    console.print(table)


def _load_config(ctx: click.Context, **overrides: Any) -> BuildConfig:
    return load_build_config(
        base_dir=ctx.obj.get("base_dir"),
        config_path=ctx.obj.get("config_path"),
        **overrides,
    )


def _run(func, *args, **kwargs):
    # application errors end the command with a red message and exit status 1.
    try:
        return func(*args, **kwargs)
    except PageLayoutsError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except OSError as e:
        log.error("filesystem_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--config", "config_path", type=click.Path(path_type=Path, dir_okay=False), default=None, help="Read settings from this TOML file instead of searching the project directory.")
@click.option("-C", "--directory", "base_dir", type=click.Path(path_type=Path, file_okay=False, exists=True), default=None, help="Project directory. Default: current directory.")
@click.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@click.option("--json-logs", "force_json_logs", is_flag=True, default=False, help="Emit logs as JSON.")
@click.version_option(version=app_version, package_name="pagelayouts", prog_name="pagelayouts", help="Show version and exit.")
@click.pass_context
def main_cli_group(ctx: click.Context, config_path: Optional[Path], base_dir: Optional[Path], verbosity_level: int, force_json_logs: bool):
    """pagelayouts: render pages through chained template layouts."""
    log_level = "warning"
    if verbosity_level == 1: log_level = "info"
    elif verbosity_level >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=force_json_logs)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["base_dir"] = base_dir


@main_cli_group.command("build")
@click.option("--summary/--no-summary", "show_summary", default=True, help="Print a build summary to stderr.")
@optgroup.group("Source Options", help="Where pages and layouts are read from.")
@optgroup.option("--pages", "pages_dir", type=click.Path(path_type=Path, file_okay=False), default=None, help="Directory of page sources. Default: pages.")
@optgroup.option("--layouts", "layouts_dir", type=click.Path(path_type=Path, file_okay=False), default=None, help="Directory of layout files. Default: layouts.")
@optgroup.option("-e", "--exclude", "exclude_patterns", multiple=True, help="Gitignore-style pattern of pages to skip. Repeatable.")
@optgroup.group("Rendering Options", help="How pages are rendered and written.")
@optgroup.option("-o", "--output", "output_dir", type=click.Path(path_type=Path, file_okay=False), default=None, help="Output directory. Default: out.")
@optgroup.option("--default-layout", "default_layout", default=None, help="Layout for pages without a `layout` key. Default: default.")
@optgroup.option("--cache/--no-cache", "cache_enabled", default=None, help="Memoize rendered pages. Default: on.")
@optgroup.option("-j", "--workers", "workers", type=click.IntRange(min=1), default=None, help="Pages rendered in parallel. Default: 4.")
@click.pass_context
def build_command(ctx: click.Context, show_summary: bool, exclude_patterns: Tuple[str, ...], **overrides: Any):
    """Render every page and write the results to the output directory."""
    config = _run(_load_config, ctx, exclude_patterns=list(exclude_patterns), **overrides)
    log.debug("build_command_invoked", config=str(config))
    report = _run(SiteBuilder(config).build)
    if show_summary:
        _print_build_summary(config, report)


@main_cli_group.command("render")
@click.argument("page", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.option("--layouts", "layouts_dir", type=click.Path(path_type=Path, file_okay=False), default=None, help="Directory of layout files. Default: layouts.")
@click.option("--default-layout", "default_layout", default=None, help="Layout for pages without a `layout` key.")
@click.pass_context
def render_command(ctx: click.Context, page: Path, **overrides: Any):
    """Render a single PAGE to stdout."""
    config = _run(_load_config, ctx, **overrides)
    rendered = _run(SiteBuilder(config).render_one, page)
    write_page_to_stdout(rendered, config.encoding)
