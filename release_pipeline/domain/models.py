"""Core domain models for release records and extracted facts.

This module defines the data structures shared by every pipeline stage:
- RawRelease: the release record as published (title, body, tag, url)
- ReleaseType: fixed classification of a release
- ExtractedFacts: structured facts parsed out of a release body
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReleaseType(str, Enum):
    """Classification of a release, in precedence order."""

    MAJOR = "major"
    MINOR = "minor"
    BUGFIX = "bugfix"
    DOCUMENTATION = "documentation"
    UPDATE = "update"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class RawRelease(BaseModel):
    """Release record captured once per invocation.

    Missing values (None) are stored as empty strings so downstream stages
    never have to guard against None.
    """

    title: str = Field("", description="Release title")
    body: str = Field("", description="Free-form markdown release notes")
    tag: str = Field("", description="Version tag, e.g. v2.0.0")
    url: str = Field("", description="Link to the published release")
    release_id: str = Field("", description="Identifier assigned by the release host")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {
            "title": "Major Release v2.0",
            "body": "## Business Impact\nFaster assembly.\n\nCustomer Email(s): ops@customer.com",
            "tag": "v2.0.0",
            "url": "https://github.com/example/repo/releases/tag/v2.0.0",
        }},
    )

    @field_validator("title", "body", "tag", "url", "release_id", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        """Coerce None to an empty string."""
        return "" if v is None else v


class ExtractedFacts(BaseModel):
    """Structured facts parsed from one release record.

    Lists keep the order in which items appeared in the release body.
    """

    customer_emails: List[str] = Field(default_factory=list)
    jira_tickets: List[str] = Field(default_factory=list)
    release_type: ReleaseType = ReleaseType.UPDATE
    business_impact: str = ""
    technical_changes: str = ""
    has_file_attachments: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def customer_emails_text(self) -> str:
        """Comma-joined addresses, the form collaborators exchange."""
        return ",".join(self.customer_emails)

    @property
    def jira_tickets_text(self) -> str:
        """Space-joined ticket IDs, the form collaborators exchange."""
        return " ".join(self.jira_tickets)
