"""Data models for release validation results.

The validator never raises; problems are reported as issues tagged with one
of three kinds and surfaced as descriptive strings.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class IssueKind(str, Enum):
    """Taxonomy of validation problems."""

    MISSING_DATA = "missing_data"  # absent required field, e.g. no emails, empty body
    FORMAT = "format"  # syntactically invalid email or ticket token
    CLASSIFICATION = "classification"  # unrecognized or missing release type


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation error with its kind."""

    kind: IssueKind
    message: str


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one validation check.

    Attributes:
        valid: Whether the check passed
        issue: Error found by the check (only when valid is False)
        warning: Non-blocking remark (may accompany a passing check)
    """

    valid: bool
    issue: Optional[ValidationIssue] = None
    warning: Optional[str] = None

    @classmethod
    def ok(cls, warning: Optional[str] = None) -> "CheckResult":
        return cls(valid=True, warning=warning)

    @classmethod
    def fail(cls, kind: IssueKind, message: str) -> "CheckResult":
        return cls(valid=False, issue=ValidationIssue(kind, message))


@dataclass
class ValidationResult:
    """Accept/reject verdict for a release, with reasons.

    Attributes:
        is_valid: True only if every check passed
        errors: Error messages in check order
        warnings: Warning messages in check order
        issues: Errors with their taxonomy kind, parallel to ``errors``
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)

    @classmethod
    def from_checks(cls, checks: List[CheckResult]) -> "ValidationResult":
        """Combine independent checks; the verdict is their logical AND."""
        issues = [check.issue for check in checks if check.issue is not None]
        return cls(
            is_valid=all(check.valid for check in checks),
            errors=[issue.message for issue in issues],
            warnings=[check.warning for check in checks if check.warning],
            issues=issues,
        )

    def has_issue(self, kind: IssueKind) -> bool:
        return any(issue.kind == kind for issue in self.issues)
