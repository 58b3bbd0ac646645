"""Section extraction shared by the parser and the renderer.

A section ("Business Impact", "Technical Changes") can be introduced three
ways, tried in order: a ``##`` heading, a colon label on its own line, or an
alternate label. The snippet runs until the next heading, the next field
label, a double blank line, or the end of the body.
"""

import re
import textwrap
from enum import Enum
from typing import Dict, List, Optional

from release_pipeline.utils.markup import convert_markdown_to_html

from .patterns import SECTION_BOUNDARY, Matcher, first_match


class SectionKind(str, Enum):
    """Sections the pipeline knows how to pull out of a release body."""

    BUSINESS_IMPACT = "business_impact"
    TECHNICAL_CHANGES = "technical_changes"


class SectionFormat(str, Enum):
    """Output form of an extracted section."""

    TEXT = "text"
    HTML = "html"


# kind -> (primary name, alternate label)
SECTION_NAMES: Dict[SectionKind, tuple] = {
    SectionKind.BUSINESS_IMPACT: ("Business Impact", "What's New"),
    SectionKind.TECHNICAL_CHANGES: ("Technical Changes", "Changes Made"),
}


def _section_patterns(kind: SectionKind) -> List[re.Pattern]:
    name, alternate = SECTION_NAMES[kind]
    flags = re.IGNORECASE | re.DOTALL | re.MULTILINE
    return [
        re.compile(rf"##[ \t]*{re.escape(name)}\s*\n(.*?){SECTION_BOUNDARY}", flags),
        re.compile(rf"{re.escape(name)}:\s*\n(.*?){SECTION_BOUNDARY}", flags),
        re.compile(rf"{re.escape(alternate)}:\s*\n(.*?){SECTION_BOUNDARY}", flags),
    ]


SECTION_PATTERNS: Dict[SectionKind, List[re.Pattern]] = {
    kind: _section_patterns(kind) for kind in SectionKind
}

# Any recognisable marker for either section, used by the content check
SECTION_MARKERS = re.compile(
    "|".join(
        rf"##[ \t]*{re.escape(name)}|{re.escape(name)}:|{re.escape(alternate)}:"
        for name, alternate in SECTION_NAMES.values()
    ),
    re.IGNORECASE,
)


def _section_matcher(pattern: re.Pattern) -> Matcher:
    def match(body: str) -> Optional[str]:
        found = pattern.search(body)
        if not found:
            return None
        # Release bodies pasted from indented sources keep a common margin
        return textwrap.dedent(found.group(1)).strip() or None

    return match


def extract_section(
    body: str, kind: SectionKind, output: SectionFormat = SectionFormat.TEXT
) -> str:
    """Extract a section snippet from a release body.

    Args:
        body: Raw release body
        kind: Which section to extract
        output: TEXT for the trimmed markdown, HTML for email-ready markup

    Returns:
        The snippet in the requested format, or "" when the section is absent
    """
    if not body:
        return ""

    snippet = first_match(
        [_section_matcher(pattern) for pattern in SECTION_PATTERNS[kind]], body
    )
    if not snippet:
        return ""

    if output == SectionFormat.HTML:
        return convert_markdown_to_html(snippet)
    return snippet


def has_section_marker(body: str) -> bool:
    """True if the body contains any Business Impact / Technical Changes marker."""
    return bool(body) and bool(SECTION_MARKERS.search(body))
