"""Hand-off payloads for the delivery collaborators.

Builds exactly what the email, Jira and chat collaborators consume from the
labeled-output map. Nothing here performs network I/O.
"""

from datetime import datetime
from email.message import EmailMessage
from email.utils import formataddr
from typing import Dict, List, Optional, Union

from email_validator import EmailNotValidError, validate_email

from release_pipeline.config.models import PipelineContext
from release_pipeline.domain.models import RawRelease
from release_pipeline.logging import get_logger
from release_pipeline.rendering.renderer import ContentRenderer
from release_pipeline.utils.markup import html_to_text

from .models import CollaboratorStatus, TeamStatusReport, TicketUpdate

logger = get_logger(__name__, component="collaborators")


def parse_recipients(customer_emails: str) -> List[str]:
    """Parse and normalize comma-separated customer addresses.

    Invalid entries are dropped and logged rather than failing the batch;
    the validator has already reported them.

    Args:
        customer_emails: Comma-separated email addresses

    Returns:
        Normalized addresses in their original order, without duplicates
    """
    recipients: List[str] = []
    for email in (customer_emails or "").split(","):
        email = email.strip()
        if not email:
            continue
        try:
            validated = validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            logger.warning(
                f"Dropping invalid recipient '{email}': {e}",
                extra={"event": "collaborators.recipient.invalid"},
            )
            continue
        if validated.normalized not in recipients:
            recipients.append(validated.normalized)
    return recipients


def build_sender_address(context: PipelineContext) -> str:
    """Build the From header, e.g. ``Release Notifications <releases@pde.com>``."""
    return formataddr((context.sender_name, context.sender_address))


def build_customer_emails(
    outputs: Dict[str, str],
    context: PipelineContext,
    release: RawRelease,
    renderer: Optional[ContentRenderer] = None,
) -> List[EmailMessage]:
    """Build one customer email per recipient.

    Args:
        outputs: Labeled-output map from the pipeline
        context: Pipeline context (sender identity, company name)
        release: Release record (tag for the footer, body for the text part)
        renderer: Renderer used for the document wrapper (built if None)

    Returns:
        EmailMessage list with a plain-text part and an HTML alternative
    """
    renderer = renderer or ContentRenderer(context)
    subject = outputs.get("email_subject", "")
    document = renderer.generate_email_document(
        subject, outputs.get("email_body", ""), release.tag
    )
    text_body = renderer.generate_email_text(release) or html_to_text(document)
    sender = build_sender_address(context)

    messages = []
    for recipient in parse_recipients(outputs.get("customer_emails", "")):
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = sender
        message["To"] = recipient
        message.set_content(text_body)
        message.add_alternative(document, subtype="html")
        messages.append(message)

    logger.info(
        f"Built {len(messages)} customer email(s)",
        extra={"event": "collaborators.emails.built", "recipient_count": len(messages)},
    )
    return messages


def build_ticket_updates(outputs: Dict[str, str]) -> List[TicketUpdate]:
    """Build one Jira comment update per referenced ticket."""
    comment = outputs.get("jira_comment", "")
    tickets = dict.fromkeys((outputs.get("jira_tickets") or "").split())
    return [TicketUpdate(ticket_id=ticket, comment=comment) for ticket in tickets]


def build_team_report(
    release: RawRelease,
    email: Union[CollaboratorStatus, str, None],
    jira: Union[CollaboratorStatus, str, None],
    drive: Union[CollaboratorStatus, str, None],
    generated_at: Optional[datetime] = None,
) -> TeamStatusReport:
    """Summarize collaborator outcomes for the team notification.

    Raw status strings are accepted; unrecognized values become UNKNOWN.
    """
    report = TeamStatusReport(
        release_title=release.title,
        release_tag=release.tag,
        release_url=release.url,
        email_status=CollaboratorStatus.parse(email),
        jira_status=CollaboratorStatus.parse(jira),
        drive_status=CollaboratorStatus.parse(drive),
        generated_at=generated_at,
    )

    logger.info(
        f"Release automation status: {report.overall_status.value}",
        extra={"event": "collaborators.report.built", **report.to_outputs()},
    )
    return report
