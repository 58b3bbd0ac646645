"""Content renderer: produces the customer email and the Jira comment.

The renderer re-derives the sections it needs from the raw body through the
shared section extraction, so it never depends on parser output beyond the
release type and the recipient list.
"""

import logging
from typing import Dict, Optional, Sequence, Tuple, Union

from markupsafe import Markup

from release_pipeline.config.models import PipelineContext
from release_pipeline.domain.models import RawRelease, ReleaseType
from release_pipeline.extraction.patterns import find_checked_files
from release_pipeline.extraction.sections import SectionFormat, SectionKind, extract_section
from release_pipeline.logging import get_logger
from release_pipeline.utils.markup import convert_markdown_to_html, html_to_text, truncate_text

from .models import RenderedContent
from .templates import TemplateRenderer

logger = get_logger(__name__, component="renderer")

SUBJECT_MAX_TITLE_LENGTH = 50

# release type -> (emoji, label)
SUBJECT_LABELS: Dict[str, Tuple[str, str]] = {
    ReleaseType.MAJOR.value: ("🚀", "Major Release"),
    ReleaseType.MINOR.value: ("📦", "Minor Update"),
    ReleaseType.BUGFIX.value: ("🐛", "Bug Fix"),
    ReleaseType.DOCUMENTATION.value: ("📚", "Documentation Update"),
}
DEFAULT_SUBJECT_LABEL = ("📋", "Update")

NO_FILES_HTML = "No specific files included in this release."
NO_FILES_TEXT = "No specific files"
NOT_SPECIFIED = "Not specified"


class ContentRenderer:
    """Renders audience-specific artifacts for a release.

    Never raises for release data; every method degrades to placeholder text
    when its input is empty. A missing or broken packaged template raises
    TemplateRenderError.
    """

    def __init__(
        self,
        context: Optional[PipelineContext] = None,
        template_renderer: Optional[TemplateRenderer] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.context = context or PipelineContext()
        self.template_renderer = template_renderer or TemplateRenderer()
        self.logger = logger_instance or logger

    def generate_email_subject(
        self, title: str, release_type: Union[ReleaseType, str, None]
    ) -> str:
        """Build ``"{emoji} {label}: {title}"`` with the title cut to 50 chars.

        Example:
            >>> ContentRenderer().generate_email_subject("Widget v2", "minor")
            '📦 Minor Update: Widget v2'
        """
        value = release_type.value if isinstance(release_type, ReleaseType) else release_type
        emoji, label = SUBJECT_LABELS.get(value or "", DEFAULT_SUBJECT_LABEL)
        short_title = truncate_text(title or "", SUBJECT_MAX_TITLE_LENGTH)
        return f"{emoji} {label}: {short_title}"

    def convert_markdown_to_html(self, text: str) -> str:
        return convert_markdown_to_html(text)

    def extract_business_impact_for_email(self, body: str) -> str:
        return extract_section(body, SectionKind.BUSINESS_IMPACT, output=SectionFormat.HTML)

    def extract_technical_changes_for_email(self, body: str) -> str:
        return extract_section(body, SectionKind.TECHNICAL_CHANGES, output=SectionFormat.HTML)

    def generate_file_list(self, body: str) -> str:
        """HTML list of checked release files, or a placeholder sentence."""
        labels = find_checked_files(body)
        if not labels:
            return NO_FILES_HTML
        items = "".join(f"<li>{Markup.escape(label)}</li>" for label in labels)
        return f'<ul class="file-list">{items}</ul>'

    def generate_file_list_text(self, body: str) -> str:
        labels = find_checked_files(body)
        return ", ".join(labels) if labels else NO_FILES_TEXT

    def _body_context(self, release: RawRelease) -> Dict:
        body = release.body
        return {
            "title": release.title,
            "url": release.url,
            "business_impact": extract_section(body, SectionKind.BUSINESS_IMPACT),
            "technical_changes": extract_section(body, SectionKind.TECHNICAL_CHANGES),
            # Already rendered from markdown; must not be escaped again
            "business_impact_html": Markup(self.extract_business_impact_for_email(body)),
            "technical_changes_html": Markup(self.extract_technical_changes_for_email(body)),
            "file_list_html": Markup(self.generate_file_list(body)),
            "file_labels": find_checked_files(body),
        }

    def generate_email_body(self, release: RawRelease) -> str:
        """Render the customer email body fragment.

        Sections, in order: title and greeting, What's New (only if the
        impact is present), Technical Changes (only if present), Release
        Files, Complete Details with the release link.
        """
        return self.template_renderer.render_html_body(self._body_context(release))

    def generate_email_text(self, release: RawRelease) -> str:
        """Render the plain-text alternative of the email body."""
        return self.template_renderer.render_text_body(self._body_context(release))

    def generate_email_document(self, subject: str, body_html: str, tag: str) -> str:
        """Wrap a body fragment in the styled email document with header and footer."""
        return self.template_renderer.render_document(
            {
                "subject": subject,
                "body_html": Markup(body_html or ""),
                "tag": tag or "",
                "company_name": self.context.company_name,
            }
        )

    def generate_jira_comment(
        self, release: RawRelease, customer_emails: Union[str, Sequence[str], None]
    ) -> str:
        """Build the internal Jira comment as plain text.

        Args:
            release: Release record
            customer_emails: Recipients, comma-joined string or list

        Returns:
            Multi-line comment; absent sections read 'Not specified'
        """
        if customer_emails and not isinstance(customer_emails, str):
            customer_emails = ",".join(customer_emails)

        impact = html_to_text(self.extract_business_impact_for_email(release.body))
        changes = html_to_text(self.extract_technical_changes_for_email(release.body))

        lines = [
            f"🚀 Released to Customer: {release.title}",
            "",
            f"Business Impact: {impact or NOT_SPECIFIED}",
            "",
            f"Technical Changes: {changes or NOT_SPECIFIED}",
            "",
            f"📎 Release Package: {self.generate_file_list_text(release.body)}",
            "",
            f"🔗 Release Details: {release.url}",
        ]
        if customer_emails:
            lines.append(f"📧 Customer Email: Sent to {customer_emails}")
        else:
            lines.append("📧 Customer Email: No emails specified")

        return "\n".join(lines)

    def process(
        self,
        release: RawRelease,
        release_type: Union[ReleaseType, str, None],
        customer_emails: Union[str, Sequence[str], None],
    ) -> RenderedContent:
        """Render every artifact for a release.

        Args:
            release: Release record
            release_type: Release type used for the subject line
            customer_emails: Recipients listed in the Jira comment

        Returns:
            RenderedContent with subject, bodies, comment and section HTML
        """
        content = RenderedContent(
            email_subject=self.generate_email_subject(release.title, release_type),
            email_body_html=self.generate_email_body(release),
            email_body_text=self.generate_email_text(release),
            jira_comment=self.generate_jira_comment(release, customer_emails),
            business_impact_html=self.extract_business_impact_for_email(release.body),
            technical_changes_html=self.extract_technical_changes_for_email(release.body),
            file_labels=find_checked_files(release.body),
        )

        self.logger.info(
            f"Rendered content: {content.email_subject}",
            extra={
                "event": "renderer.completed",
                "has_business_impact": bool(content.business_impact_html),
                "has_technical_changes": bool(content.technical_changes_html),
                "file_count": len(content.file_labels),
            },
        )

        return content
