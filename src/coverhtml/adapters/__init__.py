"""Input adapters: cover profile parsing and source lookup."""

from coverhtml.adapters.cover_profile import parse_profile, parse_profile_file
from coverhtml.adapters.resolver import SourceResolver, read_module_path

__all__ = [
    "SourceResolver",
    "parse_profile",
    "parse_profile_file",
    "read_module_path",
]
