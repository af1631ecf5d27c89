"""Coverage profile models: mode, blocks and per-file block lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class CoverageMode(Enum):
    """How hit counts in a profile are to be read."""

    SET = "set"
    """Counts only say whether a block ran (0 or 1)."""

    COUNT = "count"
    """Counts are literal execution counts (``count`` and ``atomic``)."""

    @classmethod
    def from_header(cls, value: str) -> CoverageMode:
        """Map a ``mode:`` header value to a mode.

        Raises:
            ValueError: If the value is not ``set``, ``count`` or ``atomic``.
        """
        if value == "set":
            return cls.SET
        if value in {"count", "atomic"}:
            return cls.COUNT
        raise ValueError(f"unknown coverage mode {value!r}")


@dataclass(frozen=True)
class Block:
    """A contiguous run of statements with one hit count."""

    start_line: int
    end_line: int
    num_stmt: int
    count: int
    start_col: int = 0
    end_col: int = 0

    @property
    def is_covered(self) -> bool:
        """Return True if the block was executed at least once."""
        return self.count > 0

    @property
    def position(self) -> tuple[int, int, int, int]:
        """Return the block's full source position, columns included."""
        return (self.start_line, self.start_col, self.end_line, self.end_col)


@dataclass(frozen=True)
class FileProfile:
    """Blocks recorded for one source file."""

    file_name: str
    """File token as written in the profile (import path + file name)."""

    blocks: tuple[Block, ...] = ()
    mode: CoverageMode = CoverageMode.COUNT


@dataclass(frozen=True)
class CoverProfile:
    """A whole parsed profile: one mode and the files in input order."""

    mode: CoverageMode = CoverageMode.COUNT
    files: tuple[FileProfile, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.files)
