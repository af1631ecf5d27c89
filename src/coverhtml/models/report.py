"""Report models handed to the renderer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FileReport:
    """Rendered view of a single profiled file."""

    name: str
    """Profile file name, shown as the section title."""

    body: str
    """Annotated ``<pre>`` markup holding the escaped source."""

    coverage: float
    """Statement coverage percentage (0.0-100.0)."""

    id: int
    """0-based position in the report, used for page anchors."""

    uncovered_ranges: tuple[str, ...] = ()
    """``start-end`` line ranges highlighted as not executed."""

    covered_statements: int = 0
    total_statements: int = 0


@dataclass(frozen=True)
class Report:
    """All file reports in profile order plus the profile mode flag."""

    files: tuple[FileReport, ...] = ()
    set_mode: bool = False
