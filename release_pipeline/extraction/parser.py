"""Release parser: turns a release record into ExtractedFacts.

The parser never raises. Missing or malformed data yields empty values and
it is the validator's job to flag the gaps.
"""

import logging
from typing import Optional

from release_pipeline.config.models import PipelineContext
from release_pipeline.domain.models import ExtractedFacts, RawRelease, ReleaseType
from release_pipeline.logging import get_logger

from .patterns import (
    EMAIL_LABEL_PATTERNS,
    GENERIC_FILE_LABELS,
    RELEASE_TYPE_RULES,
    TICKET_LABEL_PATTERNS,
    email_label_matcher,
    find_checked_files,
    first_match,
    inline_ticket_matcher,
    release_type_matcher,
    ticket_label_matcher,
)
from .sections import SectionKind, extract_section

logger = get_logger(__name__, component="parser")


class ReleaseParser:
    """Extracts structured facts from a free-form release body.

    Responsibilities:
    - Find customer emails and Jira tickets behind their labels
    - Classify the release type from title and body keywords
    - Pull out the Business Impact and Technical Changes snippets
    - Detect whether release files are attached
    """

    def __init__(
        self,
        context: Optional[PipelineContext] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize ReleaseParser.

        Args:
            context: Pipeline context (ticket prefix); defaults apply if None
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.context = context or PipelineContext()
        self.logger = logger_instance or logger

        self._email_matchers = [email_label_matcher(p) for p in EMAIL_LABEL_PATTERNS]
        self._ticket_matchers = [
            ticket_label_matcher(p, self.context.ticket_pattern) for p in TICKET_LABEL_PATTERNS
        ]
        self._ticket_matchers.append(inline_ticket_matcher(self.context.inline_ticket_pattern))
        self._type_matchers = [release_type_matcher(*rule) for rule in RELEASE_TYPE_RULES]

    def extract_customer_emails(self, body: str) -> str:
        """Return valid customer addresses comma-joined, or "" if none."""
        return first_match(self._email_matchers, body or "") or ""

    def extract_jira_tickets(self, body: str) -> str:
        """Return ticket IDs space-joined, or "" if none.

        Labeled fields are tried first; without one, the whole body is
        scanned for inline references.
        """
        return first_match(self._ticket_matchers, body or "") or ""

    def determine_release_type(self, title: str, body: str) -> ReleaseType:
        """Classify a release: major > minor > bugfix > documentation > update."""
        title = title or ""
        body = body or ""
        for matcher in self._type_matchers:
            release_type = matcher(title, body)
            if release_type is not None:
                return release_type
        return ReleaseType.UPDATE

    def extract_business_impact(self, body: str) -> str:
        return extract_section(body, SectionKind.BUSINESS_IMPACT)

    def extract_technical_changes(self, body: str) -> str:
        return extract_section(body, SectionKind.TECHNICAL_CHANGES)

    def has_file_attachments(self, body: str) -> bool:
        """True if a file checklist item is checked or a files label is present."""
        body = body or ""
        if find_checked_files(body):
            return True
        return any(pattern.search(body) for pattern in GENERIC_FILE_LABELS)

    def parse(self, release: RawRelease) -> ExtractedFacts:
        """Parse a release record into ExtractedFacts.

        Args:
            release: Release record to parse

        Returns:
            ExtractedFacts with defaults for anything not found
        """
        body = release.body
        customer_emails = self.extract_customer_emails(body)
        jira_tickets = self.extract_jira_tickets(body)

        facts = ExtractedFacts(
            customer_emails=customer_emails.split(",") if customer_emails else [],
            jira_tickets=jira_tickets.split() if jira_tickets else [],
            release_type=self.determine_release_type(release.title, body),
            business_impact=self.extract_business_impact(body),
            technical_changes=self.extract_technical_changes(body),
            has_file_attachments=self.has_file_attachments(body),
        )

        self.logger.info(
            f"Parsed release: {release.title or '<untitled>'}",
            extra={
                "event": "parser.completed",
                "release_type": facts.release_type.value,
                "email_count": len(facts.customer_emails),
                "ticket_count": len(facts.jira_tickets),
                "has_business_impact": bool(facts.business_impact),
                "has_technical_changes": bool(facts.technical_changes),
                "has_files": facts.has_file_attachments,
            },
        )

        return facts
