"""Formats - resolve project files to codecs and discover them on disk."""

from .resolver import RULES, file_extension, match_rule, resolve
from .scanner import DiscoveredFile, matches, normalize_extensions, scan
from .types import FormatBinding, SniffInput, SniffRule

__all__ = [
    # Types
    "FormatBinding",
    "SniffInput",
    "SniffRule",
    # Resolver
    "RULES",
    "file_extension",
    "match_rule",
    "resolve",
    # Scanner
    "DiscoveredFile",
    "matches",
    "normalize_extensions",
    "scan",
]
