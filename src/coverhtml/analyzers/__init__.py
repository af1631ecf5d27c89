"""Coverage calculations over parsed profiles."""

from coverhtml.analyzers.coverage import aggregate_coverage, percent_covered, statement_counts
from coverhtml.analyzers.ranges import sorted_ranges, uncovered_ranges

__all__ = [
    "aggregate_coverage",
    "percent_covered",
    "sorted_ranges",
    "statement_counts",
    "uncovered_ranges",
]
