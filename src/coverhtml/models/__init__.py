"""Data models for coverhtml."""

from coverhtml.models.profile import Block, CoverageMode, CoverProfile, FileProfile
from coverhtml.models.report import FileReport, Report

__all__ = [
    "Block",
    "CoverProfile",
    "CoverageMode",
    "FileProfile",
    "FileReport",
    "Report",
]
