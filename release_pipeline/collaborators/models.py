"""Data models for collaborator hand-off payloads and status reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from release_pipeline.utils.timestamps import format_timestamp, utc_now


class CollaboratorStatus(str, Enum):
    """Outcome reported back by a delivery collaborator."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"
    SKIPPED = "skipped"
    UNKNOWN = "unknown"

    @property
    def emoji(self) -> str:
        return STATUS_EMOJI[self]

    @classmethod
    def parse(cls, value: Any) -> "CollaboratorStatus":
        """Coerce a raw status string; anything unrecognized is UNKNOWN."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.UNKNOWN


STATUS_EMOJI = {
    CollaboratorStatus.SUCCESS: "✅",
    CollaboratorStatus.PARTIAL: "⚠️",
    CollaboratorStatus.FAILED: "❌",
    CollaboratorStatus.SKIPPED: "⏭️",
    CollaboratorStatus.UNKNOWN: "❓",
}


@dataclass(frozen=True)
class TicketUpdate:
    """A comment to post on one Jira ticket."""

    ticket_id: str
    comment: str

    def to_payload(self) -> Dict[str, Any]:
        """Jira REST comment body in Atlassian Document Format.

        Each non-blank comment line becomes one paragraph; the first line
        (the headline) is bold.
        """
        paragraphs = []
        for index, line in enumerate(text for text in self.comment.split("\n") if text.strip()):
            node: Dict[str, Any] = {"type": "text", "text": line}
            if index == 0:
                node["marks"] = [{"type": "strong"}]
            paragraphs.append({"type": "paragraph", "content": [node]})
        return {"body": {"type": "doc", "version": 1, "content": paragraphs}}


@dataclass
class TeamStatusReport:
    """
    Summary of collaborator outcomes for the team chat notification.

    Attributes:
        release_title: Release title
        release_tag: Release tag
        release_url: Link to the published release
        email_status: Customer email delivery outcome
        jira_status: Jira update outcome
        drive_status: File sync outcome
        overall_status: Combined outcome (computed if not given)
        generated_at: UTC timestamp of the report
    """

    release_title: str
    release_tag: str
    release_url: str
    email_status: CollaboratorStatus = CollaboratorStatus.UNKNOWN
    jira_status: CollaboratorStatus = CollaboratorStatus.UNKNOWN
    drive_status: CollaboratorStatus = CollaboratorStatus.UNKNOWN
    overall_status: Optional[CollaboratorStatus] = None
    generated_at: Optional[datetime] = None

    def __post_init__(self):
        """Compute the overall status if not already set."""
        if self.overall_status is None:
            self.overall_status = overall_status(
                [self.email_status, self.jira_status, self.drive_status]
            )

    def to_message(self) -> str:
        """Format the chat notification text."""
        timestamp = format_timestamp(self.generated_at or utc_now())
        lines = [
            f"🚀 Release Automation Complete: {self.release_title}",
            "",
            f"Release: {self.release_title}",
            f"Tag: {self.release_tag}",
            "",
            "Automation Status:",
            f"{self.email_status.emoji} Customer Emails: {self.email_status.value}",
            f"{self.jira_status.emoji} Jira Updates: {self.jira_status.value}",
            f"{self.drive_status.emoji} Drive Sync: {self.drive_status.value}",
            "",
            f"Release Details: {self.release_url}",
            "",
            f"Automated by GitHub Actions • {timestamp}",
        ]
        return "\n".join(lines)

    def to_outputs(self) -> Dict[str, str]:
        return {
            "overall_status": self.overall_status.value,
            "email_status": self.email_status.value,
            "jira_status": self.jira_status.value,
            "drive_status": self.drive_status.value,
        }


def overall_status(statuses: List[CollaboratorStatus]) -> CollaboratorStatus:
    """Combine statuses: failed > partial > success > all skipped > unknown."""
    if CollaboratorStatus.FAILED in statuses:
        return CollaboratorStatus.FAILED
    if CollaboratorStatus.PARTIAL in statuses:
        return CollaboratorStatus.PARTIAL
    if CollaboratorStatus.SUCCESS in statuses:
        return CollaboratorStatus.SUCCESS
    if statuses and all(s == CollaboratorStatus.SKIPPED for s in statuses):
        return CollaboratorStatus.SKIPPED
    return CollaboratorStatus.UNKNOWN
