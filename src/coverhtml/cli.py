"""coverhtml command line: render a Go coverage profile as HTML."""

from __future__ import annotations

import logging

import click
from rich.logging import RichHandler
from rich.markup import escape

from coverhtml import __version__
from coverhtml.config import load_config, validate_config
from coverhtml.errors import CoverHTMLError, UsageError
from coverhtml.pipeline import generate_html
from coverhtml.reporters.terminal import console, reporter

logger = logging.getLogger(__name__)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@click.command()
@click.option(
    "-p",
    "--profile",
    default="",
    help="Path to the coverage profile (go test -coverprofile output).",
)
@click.option(
    "-o",
    "--output",
    default="",
    help="HTML file to write. Without it the report goes to a temporary file "
    "and is opened in a browser.",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=True, resolve_path=True),
    help="Path to .coverhtml.yml (or its directory). Defaults to the current directory.",
)
@click.option(
    "--no-browser",
    is_flag=True,
    help="Never open a browser for temporary reports.",
)
@click.option(
    "--summary/--no-summary",
    default=True,
    help="Print a per-file coverage table (default: on).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="coverhtml")
@click.pass_context
def cli(
    ctx: click.Context,
    *,
    profile: str,
    output: str,
    config_path: str | None,
    no_browser: bool,
    summary: bool,
    verbose: bool,
) -> None:
    """Generate a static HTML coverage report from a Go coverage profile.

    Example:
      coverhtml -p coverage.out -o coverage.html
    """
    _configure_logging(verbose=verbose)

    if not profile:
        click.echo(ctx.get_help(), err=True)
        ctx.exit(2)

    try:
        config = load_config(config_path)
    except CoverHTMLError as e:
        reporter.print_error(f"Failed to load configuration: {e}")
        ctx.exit(1)

    errors = validate_config(config)
    if errors:
        reporter.print_error(f"Found {len(errors)} configuration error(s):")
        for idx, error in enumerate(errors, start=1):
            console.print(f"  {idx}. [red]{escape(error)}[/red]", highlight=False)
        ctx.exit(1)

    try:
        result = generate_html(profile, output, config, open_browser=not no_browser)
    except UsageError as e:
        reporter.print_error(str(e))
        click.echo(ctx.get_usage(), err=True)
        ctx.exit(2)
    except CoverHTMLError as e:
        logger.debug("Report generation failed", exc_info=True)
        reporter.print_error(str(e))
        ctx.exit(1)

    if summary:
        reporter.print_coverage_summary(result.report)

    if result.is_temporary and not result.opened:
        reporter.print_info(f"HTML output written to {result.path}")
    else:
        reporter.print_success(f"HTML output written to {result.path}")
