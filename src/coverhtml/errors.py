"""Exception hierarchy for coverhtml.

Every failure in the profile-to-report pipeline is fatal: core code raises one
of these and only the CLI catches them.
"""

from __future__ import annotations


class CoverHTMLError(Exception):
    """Base class for all coverhtml errors."""


class ParseError(CoverHTMLError):
    """Raised when a coverage profile is malformed."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        """Initialize with error message and optional profile line.

        Args:
            message: Error description.
            line_number: 1-based line in the profile text, when known.
        """
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class ResolutionError(CoverHTMLError):
    """Raised when a profile file name cannot be located or read."""


class SourceUnavailable(ResolutionError):
    """Raised when no source text was supplied for a profiled file."""


class RenderError(CoverHTMLError):
    """Raised when the report page cannot be rendered or written."""


class UsageError(CoverHTMLError):
    """Raised when required input (such as the profile path) is missing."""
