"""Statement coverage math."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from coverhtml.models.profile import FileProfile
    from coverhtml.models.report import Report


def statement_counts(profile: FileProfile) -> tuple[int, int]:
    """Return ``(covered, total)`` statement counts for a file.

    Blocks are summed as given; overlapping blocks are not merged.
    """
    total = 0
    covered = 0
    for block in profile.blocks:
        total += block.num_stmt
        if block.count > 0:
            covered += block.num_stmt
    return covered, total


def percent_covered(profile: FileProfile) -> float:
    """Return the percentage of the file's statements that were executed.

    A file without statements reports 0.0.
    """
    covered, total = statement_counts(profile)
    if total == 0:
        return 0.0
    return covered / total * 100


def aggregate_coverage(report: Report) -> float:
    """Return the mean of the per-file coverage percentages.

    Every file weighs the same regardless of its statement count. An empty
    report reports 0.0.
    """
    if not report.files:
        return 0.0
    return sum(f.coverage for f in report.files) / len(report.files)
