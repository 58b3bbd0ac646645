"""Release validator: decides whether extracted facts are publishable.

Four independent checks are combined with a logical AND:
1. Customer emails are present and all well formed
2. Jira tickets, if any, all match the configured project key
3. Release type is a member of the fixed classification
4. The body has content and a Business Impact or Technical Changes section
"""

import logging
from typing import Optional

from release_pipeline.config.models import PipelineContext
from release_pipeline.domain.models import ExtractedFacts, ReleaseType
from release_pipeline.extraction.patterns import is_valid_email, is_valid_ticket
from release_pipeline.extraction.sections import has_section_marker
from release_pipeline.logging import get_logger

from .models import CheckResult, IssueKind, ValidationResult

logger = get_logger(__name__, component="validator")


class ReleaseValidator:
    """Validates ExtractedFacts-shaped data against publishing rules.

    Inputs use the joined wire forms collaborators exchange: emails
    comma-separated, tickets space-separated. Unlike the parser, the
    validator does not filter bad entries; a single bad entry fails its check.
    """

    def __init__(
        self,
        context: Optional[PipelineContext] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.context = context or PipelineContext()
        self.logger = logger_instance or logger

    def validate_customer_emails(self, customer_emails: str) -> CheckResult:
        if not customer_emails:
            return CheckResult.fail(
                IssueKind.MISSING_DATA, "No customer emails found in release"
            )

        emails = [email.strip() for email in customer_emails.split(",")]
        invalid = [email for email in emails if not is_valid_email(email)]
        if invalid:
            return CheckResult.fail(
                IssueKind.FORMAT, f"Invalid email format(s): {', '.join(invalid)}"
            )

        return CheckResult.ok()

    def validate_jira_tickets(self, jira_tickets: str) -> CheckResult:
        tickets = (jira_tickets or "").split()
        # Tickets are optional
        if not tickets:
            return CheckResult.ok(warning="No Jira tickets referenced")

        invalid = [t for t in tickets if not is_valid_ticket(t, self.context.ticket_pattern)]
        if invalid:
            return CheckResult.fail(
                IssueKind.FORMAT, f"Invalid Jira ticket format(s): {', '.join(invalid)}"
            )

        return CheckResult.ok()

    def validate_release_type(self, release_type: Optional[str]) -> CheckResult:
        value = release_type.value if isinstance(release_type, ReleaseType) else release_type
        if not value:
            return CheckResult.fail(
                IssueKind.CLASSIFICATION, "Release type could not be determined"
            )

        valid_types = ReleaseType.values()
        if value not in valid_types:
            return CheckResult.fail(
                IssueKind.CLASSIFICATION,
                f"Invalid release type: {value}. Valid types: {', '.join(valid_types)}",
            )

        return CheckResult.ok()

    def validate_release_content(self, body: str) -> CheckResult:
        if not body or not body.strip():
            return CheckResult.fail(IssueKind.MISSING_DATA, "Release body is empty")

        if not has_section_marker(body):
            return CheckResult.fail(
                IssueKind.MISSING_DATA,
                "Release must contain either Business Impact or Technical Changes section",
            )

        return CheckResult.ok()

    def validate(
        self,
        customer_emails: str,
        jira_tickets: str,
        release_type: Optional[str],
        body: str,
    ) -> ValidationResult:
        """Run all checks and combine them into a verdict.

        Args:
            customer_emails: Comma-separated addresses
            jira_tickets: Space-separated ticket IDs
            release_type: Release type value
            body: Raw release body

        Returns:
            ValidationResult with errors and warnings in check order
        """
        result = ValidationResult.from_checks([
            self.validate_customer_emails(customer_emails or ""),
            self.validate_jira_tickets(jira_tickets or ""),
            self.validate_release_type(release_type),
            self.validate_release_content(body or ""),
        ])

        extra = {
            "event": "validation.completed",
            "is_valid": result.is_valid,
            "error_count": len(result.errors),
            "warning_count": len(result.warnings),
        }
        if result.is_valid:
            self.logger.info("Release validation passed", extra=extra)
        else:
            self.logger.warning(
                f"Release validation failed: {'; '.join(result.errors)}", extra=extra
            )
        for warning in result.warnings:
            self.logger.debug(f"Validation warning: {warning}", extra={"event": "validation.warning"})

        return result

    def validate_facts(self, facts: ExtractedFacts, body: str) -> ValidationResult:
        """Validate parser output against the raw body."""
        return self.validate(
            facts.customer_emails_text,
            facts.jira_tickets_text,
            facts.release_type.value,
            body,
        )
