"""Acceptance gating of extracted release facts."""

from .models import CheckResult, IssueKind, ValidationIssue, ValidationResult
from .validator import ReleaseValidator

__all__ = [
    "ReleaseValidator",
    "ValidationResult",
    "ValidationIssue",
    "CheckResult",
    "IssueKind",
]
