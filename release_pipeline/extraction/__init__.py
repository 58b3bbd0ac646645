"""Extraction of structured facts from release notes.

This module provides:
- ReleaseParser: maps a release record to ExtractedFacts
- extract_section: shared Business Impact / Technical Changes extraction
- first_match: ordered first-success matcher combinator
- Format checks for email addresses and ticket IDs
"""

from .parser import ReleaseParser
from .patterns import find_checked_files, first_match, is_valid_email, is_valid_ticket
from .sections import SectionFormat, SectionKind, extract_section, has_section_marker

__all__ = [
    "ReleaseParser",
    "SectionFormat",
    "SectionKind",
    "extract_section",
    "has_section_marker",
    "find_checked_files",
    "first_match",
    "is_valid_email",
    "is_valid_ticket",
]
