"""Pattern tables and matcher combinators for release-note extraction.

Every field is extracted by an ordered list of pure matcher functions. The
first matcher that produces a non-empty value wins and later matchers are
never consulted.
"""

import re
from typing import Callable, Iterable, List, Optional, Pattern, Sequence, Tuple

from release_pipeline.domain.models import ReleaseType

Matcher = Callable[[str], Optional[str]]

EMAIL_FORMAT = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

EMAIL_LABEL_PATTERNS = [
    re.compile(r"Customer Email\(s\):[ \t]*([^\n]+)", re.IGNORECASE),
    re.compile(r"Customer Emails:[ \t]*([^\n]+)", re.IGNORECASE),
    re.compile(r"Emails:[ \t]*([^\n]+)", re.IGNORECASE),
    # Line start only, so mailto: links and Reply-To: headers do not count
    re.compile(
        r"^[ \t]*(?:\*\*)?To:(?:\*\*)?[ \t]*([^\n]+)", re.IGNORECASE | re.MULTILINE
    ),
]

TICKET_LABEL_PATTERNS = [
    re.compile(r"Jira Tickets?:[ \t]*([^\n]+)", re.IGNORECASE),
    re.compile(r"Related Jira Tickets?:[ \t]*([^\n]+)", re.IGNORECASE),
    re.compile(r"Related Work:[ \t]*([^\n]+)", re.IGNORECASE),
    re.compile(r"Tickets?:[ \t]*([^\n]+)", re.IGNORECASE),
]

# Labels that open a new field; a section snippet stops at the next one
FIELD_LABELS = [
    r"Customer Email\(s\)",
    r"Customer Emails",
    r"Emails",
    r"To",
    r"(?:Related )?Jira Tickets?",
    r"Related Work",
    r"Tickets?",
    r"Business Impact",
    r"What's New",
    r"Technical Changes",
    r"Changes Made",
    r"Files Included",
    r"Attachments",
    r"Issue Summary",
    r"Resolution",
    r"Customer Actions Required",
]

# Line-anchored, so patterns using it need re.MULTILINE. A heading or label
# directly below the section header ends the snippet empty.
SECTION_BOUNDARY = (
    r"(?=^[ \t]*#{2,}"
    r"|\n[ \t]*\n[ \t]*\n"
    r"|^[ \t]*(?:\*\*)?(?:" + "|".join(FIELD_LABELS) + r"):"
    r"|\Z)"
)

# Checklist items that mark files shipped with a release, as (label, pattern)
CHECKLIST_ITEMS: List[Tuple[str, Pattern]] = [
    (label, re.compile(r"\[x\][ \t]*" + re.escape(label), re.IGNORECASE))
    for label in (
        "Updated drawings (PDF)",
        "3D models (STEP/SolidWorks)",
        "Documentation updates",
        "Test results",
    )
]

GENERIC_FILE_LABELS = [
    re.compile(r"Files Included:", re.IGNORECASE),
    re.compile(r"Attachments:", re.IGNORECASE),
]

# (release type, title keywords, body phrases) in precedence order
RELEASE_TYPE_RULES: List[Tuple[ReleaseType, Tuple[str, ...], Tuple[str, ...]]] = [
    (ReleaseType.MAJOR, ("major",), ("major release",)),
    (ReleaseType.MINOR, ("minor",), ("minor update",)),
    (ReleaseType.BUGFIX, ("bug", "fix"), ("bug fix",)),
    (ReleaseType.DOCUMENTATION, ("doc",), ("documentation",)),
]


def first_match(matchers: Iterable[Matcher], text: str) -> Optional[str]:
    """Return the first non-empty result of the matchers, or None.

    Example:
        >>> first_match([lambda t: None, lambda t: t.upper()], "pde")
        'PDE'
    """
    for matcher in matchers:
        result = matcher(text)
        if result:
            return result
    return None


def is_valid_email(email: str) -> bool:
    """Check an address is ``local@domain.tld`` shaped."""
    return bool(EMAIL_FORMAT.match(email or ""))


def is_valid_ticket(ticket: str, ticket_pattern: Pattern) -> bool:
    """Check a token is a ticket ID for the configured project key."""
    return bool(ticket_pattern.match(ticket or ""))


def email_label_matcher(pattern: Pattern) -> Matcher:
    """Build a matcher returning the comma-joined valid addresses after a label."""

    def match(body: str) -> Optional[str]:
        found = pattern.search(body)
        if not found:
            return None
        emails = [e.strip() for e in re.split(r"[,\s]+", found.group(1))]
        return ",".join(e for e in emails if is_valid_email(e)) or None

    return match


def ticket_label_matcher(pattern: Pattern, ticket_pattern: Pattern) -> Matcher:
    """Build a matcher returning the space-joined valid tickets after a label."""

    def match(body: str) -> Optional[str]:
        found = pattern.search(body)
        if not found:
            return None
        tickets = [t for t in found.group(1).split() if is_valid_ticket(t, ticket_pattern)]
        return " ".join(tickets) or None

    return match


def inline_ticket_matcher(inline_pattern: Pattern) -> Matcher:
    """Build a matcher scanning the whole body for ticket references.

    Repeated references are kept once, in order of first appearance.
    """

    def match(body: str) -> Optional[str]:
        seen = dict.fromkeys(inline_pattern.findall(body))
        return " ".join(seen) or None

    return match


def release_type_matcher(
    release_type: ReleaseType, title_keywords: Sequence[str], body_phrases: Sequence[str]
) -> Callable[[str, str], Optional[ReleaseType]]:
    """Build a classifier that fires on a title keyword or a body phrase."""

    def match(title: str, body: str) -> Optional[ReleaseType]:
        title_lower = title.lower()
        body_lower = body.lower()
        if any(k in title_lower for k in title_keywords) or any(
            p in body_lower for p in body_phrases
        ):
            return release_type
        return None

    return match


def find_checked_files(body: str) -> List[str]:
    """Return labels of checked file checklist items, in fixed order."""
    if not body:
        return []
    return [label for label, pattern in CHECKLIST_ITEMS if pattern.search(body)]
