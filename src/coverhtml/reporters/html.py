"""HTML renderer for coverage reports.

Produces one self-contained page: all stylesheets and scripts are inlined
from a set of named asset blobs.
"""

from __future__ import annotations

import html
import logging
import re
from datetime import UTC, datetime
from importlib import resources
from typing import TYPE_CHECKING

from coverhtml.analyzers.coverage import aggregate_coverage
from coverhtml.errors import RenderError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

    from coverhtml.models.report import FileReport, Report

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Coverage Report"

# Bundled assets every page needs
REQUIRED_ASSETS = ("report.css", "report.js")

# Coverage thresholds
_COVERAGE_THRESHOLD_SUCCESS = 80
_COVERAGE_THRESHOLD_WARNING = 60

# Closing tags that would end an inlined element early
_STYLE_END_REGEX = re.compile(r"</(style)", re.IGNORECASE)
_SCRIPT_END_REGEX = re.compile(r"</(script)", re.IGNORECASE)


def _coverage_class(pct: float) -> str:
    if pct >= _COVERAGE_THRESHOLD_SUCCESS:
        return "success"
    if pct >= _COVERAGE_THRESHOLD_WARNING:
        return "warning"
    return "error"


class RenderAssets:
    """Named byte blobs inlined into the page.

    Names ending in ``.css`` become ``<style>`` blocks and names ending in
    ``.js`` become ``<script>`` blocks, in insertion order.
    """

    def __init__(self, blobs: Mapping[str, bytes] | None = None) -> None:
        self._blobs: dict[str, bytes] = dict(blobs or {})

    def __contains__(self, name: object) -> bool:
        return name in self._blobs

    def __getitem__(self, name: str) -> bytes:
        return self._blobs[name]

    def names(self) -> list[str]:
        """Return asset names in insertion order."""
        return list(self._blobs)

    def with_files(self, paths: Iterable[Path]) -> RenderAssets:
        """Return a copy with the given files added under their file names.

        Raises:
            RenderError: If a file cannot be read.
        """
        blobs = dict(self._blobs)
        for path in paths:
            try:
                blobs[path.name] = path.read_bytes()
            except OSError as e:
                raise RenderError(f"can't read asset {path}: {e}") from e
        return RenderAssets(blobs)

    def text(self, name: str) -> str:
        """Return an asset decoded as UTF-8.

        Raises:
            RenderError: If the asset is missing or not valid UTF-8.
        """
        try:
            return self._blobs[name].decode("utf-8")
        except KeyError as e:
            raise RenderError(f"asset {name!r} is not available") from e
        except UnicodeDecodeError as e:
            raise RenderError(f"asset {name!r} is not valid UTF-8: {e}") from e


def load_default_assets() -> RenderAssets:
    """Load the stylesheet and script bundled with coverhtml.

    Raises:
        RenderError: If a bundled asset is missing from the installation.
    """
    package = resources.files("coverhtml.resources")
    blobs: dict[str, bytes] = {}
    for name in REQUIRED_ASSETS:
        try:
            blobs[name] = package.joinpath(name).read_bytes()
        except OSError as e:
            raise RenderError(f"bundled asset {name!r} is missing: {e}") from e
    return RenderAssets(blobs)


class HtmlRenderer:
    """Render a Report as a complete HTML document."""

    def __init__(self, assets: RenderAssets, *, title: str = DEFAULT_TITLE) -> None:
        """Initialize the renderer.

        Args:
            assets: Stylesheets and scripts to inline.
            title: Page title.
        """
        self._assets = assets
        self._title = title

    def render(self, report: Report, *, has_destination: bool = True) -> str:
        """Render the report page.

        Args:
            report: Assembled report.
            has_destination: False when the page goes to a temporary file;
                the footer then notes that the file is temporary.

        Raises:
            RenderError: If a required asset is missing or unreadable.
        """
        missing = [name for name in REQUIRED_ASSETS if name not in self._assets]
        if missing:
            raise RenderError(f"missing required asset(s): {', '.join(missing)}")

        styles = "\n".join(
            f"<style>\n{self._style_text(name)}\n</style>"
            for name in self._assets.names()
            if name.endswith(".css")
        )
        scripts = "\n".join(
            f"<script>\n{self._script_text(name)}\n</script>"
            for name in self._assets.names()
            if name.endswith(".js")
        )

        total = aggregate_coverage(report)
        title = html.escape(self._title)
        generated_at = datetime.now(UTC).strftime("%Y-%m-%d %H:%M UTC")
        temp_note = "" if has_destination else " | temporary file"
        logger.debug("Rendering %d file(s), total %.1f%%", len(report.files), total)

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
{styles}
</head>
<body>
    <header class="topbar">
        <h1>{title}</h1>
        <span class="total {_coverage_class(total)}">Total: {total:.1f}%</span>
        {self._render_selector(report)}
        {self._render_legend(report)}
    </header>
    <main>
{self._render_files(report)}
    </main>
    <footer>
        <p>Generated {generated_at}{temp_note}</p>
    </footer>
{scripts}
</body>
</html>"""

    def _style_text(self, name: str) -> str:
        return _STYLE_END_REGEX.sub(r"<\\/\1", self._assets.text(name))

    def _script_text(self, name: str) -> str:
        return _SCRIPT_END_REGEX.sub(r"<\\/\1", self._assets.text(name))

    def _render_selector(self, report: Report) -> str:
        """Render the file drop-down."""
        if not report.files:
            return ""
        options = "\n".join(
            f'            <option value="file{f.id}">'
            f"{html.escape(f.name)} ({f.coverage:.1f}%)</option>"
            for f in report.files
        )
        return f"""<select id="files">
{options}
        </select>"""

    def _render_legend(self, report: Report) -> str:
        if report.set_mode:
            return (
                '<span class="legend"><span class="cov">covered</span> '
                '<span class="nocov">not covered</span></span>'
            )
        return (
            '<span class="legend"><span class="cov">executed</span> '
            '<span class="nocov">never executed</span></span>'
        )

    def _render_files(self, report: Report) -> str:
        if not report.files:
            return '        <p class="empty-state">No files in coverage profile</p>'
        return "\n".join(self._render_file(f) for f in report.files)

    def _render_file(self, file: FileReport) -> str:
        hidden = "" if file.id == 0 else " hidden"
        return f"""        <section class="file" id="file{file.id}"{hidden}>
            <h2>{html.escape(file.name)}
                <span class="pct {_coverage_class(file.coverage)}">{file.coverage:.1f}%</span>
            </h2>
            {file.body}
        </section>"""
