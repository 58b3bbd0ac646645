"""Data models for a pipeline run and its labeled outputs."""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from release_pipeline.domain.models import ExtractedFacts, RawRelease
from release_pipeline.rendering.models import RenderedContent
from release_pipeline.validation.models import ValidationResult

# Keys of the labeled-output map, in the order they are emitted
OUTPUT_KEYS = (
    "customer_emails",
    "jira_tickets",
    "release_type",
    "business_impact",
    "technical_changes",
    "has_files",
    "is_valid",
    "validation_errors",
    "validation_warnings",
    "email_subject",
    "email_body",
    "jira_comment",
)


def _flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class PipelineResult:
    """
    Everything produced by one pipeline run.

    The validation verdict is carried, not enforced: content is rendered even
    for an invalid release so reviewers can inspect the drafts.

    Attributes:
        run_id: Unique identifier for this run (also in log context)
        release: The release record that was processed
        facts: Facts extracted by the parser
        validation: Accept/reject verdict with reasons
        content: Rendered email and Jira artifacts
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
    """

    run_id: str
    release: RawRelease
    facts: ExtractedFacts
    validation: ValidationResult
    content: RenderedContent
    run_started_at: Optional[datetime] = None
    run_finished_at: Optional[datetime] = None

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid

    @property
    def duration_seconds(self) -> float:
        if self.run_started_at is None or self.run_finished_at is None:
            return 0.0
        return (self.run_finished_at - self.run_started_at).total_seconds()

    def to_outputs(self) -> Dict[str, str]:
        """Build the labeled-output map routed to delivery collaborators.

        Returns:
            Dict with exactly the keys in OUTPUT_KEYS, all string values.
            Booleans are "true"/"false"; errors and warnings are "; "-joined.
        """
        return {
            "customer_emails": self.facts.customer_emails_text,
            "jira_tickets": self.facts.jira_tickets_text,
            "release_type": self.facts.release_type.value,
            "business_impact": self.facts.business_impact,
            "technical_changes": self.facts.technical_changes,
            "has_files": _flag(self.facts.has_file_attachments),
            "is_valid": _flag(self.validation.is_valid),
            "validation_errors": "; ".join(self.validation.errors),
            "validation_warnings": "; ".join(self.validation.warnings),
            "email_subject": self.content.email_subject,
            "email_body": self.content.email_body_html,
            "jira_comment": self.content.jira_comment,
        }
