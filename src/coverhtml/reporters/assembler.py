"""Assemble per-file and whole-report data for the HTML renderer."""

from __future__ import annotations

import html
import logging
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from coverhtml.analyzers.coverage import percent_covered, statement_counts
from coverhtml.analyzers.ranges import sorted_ranges, uncovered_ranges
from coverhtml.errors import SourceUnavailable
from coverhtml.models.profile import CoverageMode
from coverhtml.models.report import FileReport, Report

if TYPE_CHECKING:
    from collections.abc import Iterable

    from coverhtml.models.profile import FileProfile

logger = logging.getLogger(__name__)

_DEFAULT_LANGUAGE = "go"

# File extension -> syntax-highlighting language tag
_LANGUAGE_BY_SUFFIX = {
    ".go": "go",
    ".s": "asm",
    ".c": "c",
    ".h": "c",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".py": "python",
    ".js": "javascript",
    ".ts": "typescript",
    ".rs": "rust",
}

_BODY_TEMPLATE = (
    '<pre class="line-numbers" data-line="{ranges}">'
    '<code class="language-{language}">{source}</code></pre>'
)


def language_for(file_name: str) -> str:
    """Return the highlighting language tag for a file name."""
    suffix = PurePosixPath(file_name).suffix.lower()
    return _LANGUAGE_BY_SUFFIX.get(suffix, _DEFAULT_LANGUAGE)


def annotate_source(source: bytes, ranges: Iterable[str], language: str) -> str:
    """Wrap source text in a ``<pre>`` block carrying the uncovered ranges.

    The text is HTML-escaped and otherwise embedded verbatim.
    """
    text = source.decode("utf-8", errors="replace")
    return _BODY_TEMPLATE.format(
        ranges=html.escape(",".join(ranges)),
        language=html.escape(language),
        source=html.escape(text, quote=False),
    )


def build_file_report(
    file_name: str,
    source: bytes | None,
    profile: FileProfile,
    sequence_id: int,
    *,
    language: str | None = None,
) -> FileReport:
    """Build the report entry for one profiled file.

    Args:
        file_name: Name shown for the file.
        source: Source bytes from the resolver; None when unavailable.
        profile: Blocks recorded for the file.
        sequence_id: 0-based position of the file in the report.
        language: Highlighting tag; derived from the file extension if None.

    Raises:
        SourceUnavailable: If *source* is None.
    """
    if source is None:
        raise SourceUnavailable(f"no source available for {file_name}")

    ranges = sorted_ranges(uncovered_ranges(profile))
    covered, total = statement_counts(profile)

    logger.debug(
        "%s: %d/%d statements, %d uncovered range(s)", file_name, covered, total, len(ranges)
    )
    return FileReport(
        name=file_name,
        body=annotate_source(source, ranges, language or language_for(file_name)),
        coverage=percent_covered(profile),
        id=sequence_id,
        uncovered_ranges=tuple(ranges),
        covered_statements=covered,
        total_statements=total,
    )


def build_report(
    entries: Iterable[tuple[str, bytes | None, FileProfile]],
    *,
    language: str | None = None,
) -> Report:
    """Build the whole report, keeping the input order of files.

    The report is in set mode when any file profile is.
    """
    files: list[FileReport] = []
    set_mode = False
    for sequence_id, (file_name, source, profile) in enumerate(entries):
        if profile.mode is CoverageMode.SET:
            set_mode = True
        files.append(
            build_file_report(file_name, source, profile, sequence_id, language=language)
        )
    return Report(files=tuple(files), set_mode=set_mode)
