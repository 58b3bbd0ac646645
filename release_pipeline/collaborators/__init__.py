"""Hand-off payloads for email, Jira and team-chat collaborators."""

from .models import CollaboratorStatus, TeamStatusReport, TicketUpdate, overall_status
from .payloads import (
    build_customer_emails,
    build_sender_address,
    build_team_report,
    build_ticket_updates,
    parse_recipients,
)

__all__ = [
    "CollaboratorStatus",
    "TeamStatusReport",
    "TicketUpdate",
    "overall_status",
    "parse_recipients",
    "build_sender_address",
    "build_customer_emails",
    "build_ticket_updates",
    "build_team_report",
]
