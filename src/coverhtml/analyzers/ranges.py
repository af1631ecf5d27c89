"""Uncovered line ranges used for highlighting."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from coverhtml.models.profile import FileProfile


def uncovered_ranges(profile: FileProfile) -> set[str]:
    """Return the distinct ``start-end`` line ranges of never-executed blocks.

    Only the hit count matters here: a zero-hit block with no statements is
    still reported.
    """
    return {
        f"{block.start_line}-{block.end_line}" for block in profile.blocks if block.count == 0
    }


def sorted_ranges(ranges: Iterable[str]) -> list[str]:
    """Order ``start-end`` strings by start line, then end line."""

    def _key(value: str) -> tuple[int, int]:
        start, _, end = value.partition("-")
        return int(start), int(end)

    return sorted(ranges, key=_key)
