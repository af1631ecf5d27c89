"""Go cover profile parser.

Parses the standard Go cover profile format (mode line + one
``file:startLine.startCol,endLine.endCol numStmts count`` record per block)
into a CoverProfile.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from coverhtml.errors import ParseError
from coverhtml.models.profile import Block, CoverageMode, CoverProfile, FileProfile

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────────

_MODE_PREFIX = "mode:"

# Cover profile: "file:startLine.startCol,endLine.endCol numStmts count"
_COVER_LINE_REGEX = re.compile(r"^(.+):(\d+)\.(\d+),(\d+)\.(\d+)\s+(\d+)\s+(\d+)\s*$")


# ── Parsing ──────────────────────────────────────────────────────


def _parse_mode(line: str, line_number: int) -> CoverageMode:
    value = line[len(_MODE_PREFIX) :].strip()
    if not value:
        raise ParseError(f"bad mode line: {line!r}", line_number)
    try:
        return CoverageMode.from_header(value)
    except ValueError as e:
        raise ParseError(str(e), line_number) from e


def _parse_block(line: str, line_number: int) -> tuple[str, Block]:
    match = _COVER_LINE_REGEX.match(line)
    if not match:
        raise ParseError(f"{line!r} doesn't match expected format", line_number)

    file_name, start_line, start_col, end_line, end_col, num_stmt, count = match.groups()
    block = Block(
        start_line=int(start_line),
        end_line=int(end_line),
        num_stmt=int(num_stmt),
        count=int(count),
        start_col=int(start_col),
        end_col=int(end_col),
    )
    if block.start_line > block.end_line:
        raise ParseError(
            f"block ends on line {block.end_line} before it starts on line {block.start_line}",
            line_number,
        )
    return file_name, block


def _merge(existing: Block, new: Block, mode: CoverageMode, line_number: int) -> Block:
    """Combine two records for the same block position."""
    if existing.num_stmt != new.num_stmt:
        raise ParseError(
            f"inconsistent NumStmt: changed from {existing.num_stmt} to {new.num_stmt}",
            line_number,
        )
    if mode is CoverageMode.SET:
        count = 1 if existing.count or new.count else 0
    else:
        count = existing.count + new.count
    return Block(
        start_line=existing.start_line,
        end_line=existing.end_line,
        num_stmt=existing.num_stmt,
        count=count,
        start_col=existing.start_col,
        end_col=existing.end_col,
    )


def parse_profile(text: str) -> CoverProfile:
    """Parse cover profile text.

    The first non-blank line must be ``mode: set|count|atomic``; later mode
    lines are accepted only when they repeat the same mode (concatenated
    profiles). Records with an identical position are merged into one block.

    Args:
        text: Raw profile contents.

    Returns:
        The parsed profile. Empty text yields an empty COUNT-mode profile.

    Raises:
        ParseError: On any malformed line.
    """
    mode: CoverageMode | None = None
    # file name -> block position -> block, both in first-seen order
    files: dict[str, dict[tuple[int, int, int, int], Block]] = {}

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith(_MODE_PREFIX):
            line_mode = _parse_mode(line, line_number)
            if mode is not None and line_mode is not mode:
                raise ParseError(
                    f"inconsistent coverage mode: {line_mode.value} after {mode.value}",
                    line_number,
                )
            mode = line_mode
            continue

        if mode is None:
            raise ParseError(f"bad mode line: {line!r}", line_number)

        file_name, block = _parse_block(line, line_number)
        blocks = files.setdefault(file_name, {})
        existing = blocks.get(block.position)
        blocks[block.position] = (
            block if existing is None else _merge(existing, block, mode, line_number)
        )

    if mode is None:
        logger.debug("Empty cover profile")
        return CoverProfile()

    profiles = tuple(
        FileProfile(file_name=name, blocks=tuple(blocks.values()), mode=mode)
        for name, blocks in files.items()
    )
    logger.debug("Parsed %d file(s) in %s mode", len(profiles), mode.value)
    return CoverProfile(mode=mode, files=profiles)


def parse_profile_file(profile_path: Path) -> CoverProfile:
    """Read and parse a cover profile file.

    Raises:
        ParseError: If the file cannot be read or is malformed.
    """
    try:
        text = profile_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"can't read profile {profile_path}: {e}") from e
    return parse_profile(text)
