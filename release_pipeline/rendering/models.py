"""Data models and exceptions for content rendering."""

from dataclasses import dataclass, field
from typing import List


class RenderingError(Exception):
    """Base exception for rendering-related errors."""

    pass


class TemplateRenderError(RenderingError):
    """Raised when a packaged template is missing, broken or lacks a variable."""

    pass


@dataclass
class RenderedContent:
    """Audience-specific artifacts rendered for one release.

    Attributes:
        email_subject: Customer email subject line
        email_body_html: Customer email body fragment (HTML)
        email_body_text: Plain-text alternative of the email body
        jira_comment: Internal Jira comment (plain text)
        business_impact_html: Business Impact snippet as HTML ("" if absent)
        technical_changes_html: Technical Changes snippet as HTML ("" if absent)
        file_labels: Checked release-file checklist labels
    """

    email_subject: str
    email_body_html: str
    email_body_text: str
    jira_comment: str
    business_impact_html: str = ""
    technical_changes_html: str = ""
    file_labels: List[str] = field(default_factory=list)
