"""Profile-to-HTML pipeline.

Parse the profile, read every profiled source file, assemble the report,
render it in memory and only then write it out. Any failure aborts the run
before output is written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from coverhtml.adapters.cover_profile import parse_profile_file
from coverhtml.adapters.resolver import SourceResolver
from coverhtml.errors import UsageError
from coverhtml.reporters.assembler import build_report
from coverhtml.reporters.html import HtmlRenderer, load_default_assets
from coverhtml.reporters.output import start_browser, write_report

if TYPE_CHECKING:
    from coverhtml.config import CoverHTMLConfig
    from coverhtml.models.report import Report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one report generation."""

    report: Report
    path: Path
    """Where the HTML page was written."""

    is_temporary: bool = False
    opened: bool = False
    """Whether a browser was started for a temporary report."""


def resolver_from_config(config: CoverHTMLConfig) -> SourceResolver:
    """Build a source resolver from configured roots."""
    return SourceResolver(module_root=config.module_root, search_roots=config.search_roots)


def generate_report(
    profile_path: str | Path,
    resolver: SourceResolver,
    *,
    language: str | None = None,
) -> Report:
    """Parse a profile and assemble the report for every file in it.

    Raises:
        UsageError: If *profile_path* is empty.
        ParseError: If the profile is malformed.
        ResolutionError: If a profiled source file cannot be read.
    """
    if not profile_path:
        raise UsageError("a coverage profile path is required")

    profile = parse_profile_file(Path(profile_path))
    entries = []
    for file_profile in profile.files:
        logger.debug("Reading source for %s", file_profile.file_name)
        source = resolver.read(file_profile.file_name)
        entries.append((file_profile.file_name, source, file_profile))
    return build_report(entries, language=language)


def generate_html(
    profile_path: str | Path,
    outfile: str | Path | None,
    config: CoverHTMLConfig,
    *,
    open_browser: bool = True,
) -> GenerationResult:
    """Generate the HTML report and write it to *outfile*.

    With no *outfile* the page goes to a temporary file, which is opened in a
    browser when *open_browser* and the configuration allow it.
    """
    report = generate_report(
        profile_path,
        resolver_from_config(config),
        language=config.report.language or None,
    )

    assets = load_default_assets().with_files(config.asset_files)
    renderer = HtmlRenderer(assets, title=config.report.title)
    content = renderer.render(report, has_destination=bool(outfile))

    path = write_report(content, outfile)
    if outfile:
        return GenerationResult(report=report, path=path)

    opened = False
    if open_browser and config.report.open_browser:
        opened = start_browser(path.resolve().as_uri())
    return GenerationResult(report=report, path=path, is_temporary=True, opened=opened)
