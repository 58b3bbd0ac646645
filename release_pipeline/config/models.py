"""Configuration schema models using Pydantic."""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

TICKET_PREFIX_PATTERN = re.compile(r"^[A-Z][A-Z0-9]*$")


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


def normalize_ticket_prefix(value: str) -> str:
    """Uppercase and validate a Jira project key such as ``PDE``.

    Raises:
        ValueError: If the key is empty or not alphanumeric starting with a letter
    """
    prefix = (value or "").strip().upper()
    if not TICKET_PREFIX_PATTERN.match(prefix):
        raise ValueError(
            f"Invalid Jira ticket prefix: '{value}'. "
            "Use letters and digits starting with a letter (e.g. PDE)"
        )
    return prefix


class JiraConfig(BaseModel):
    """Jira ticket settings."""

    ticket_prefix: str = Field(
        "PDE", description="Project key that ticket IDs must start with (PDE-123)"
    )

    @field_validator("ticket_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        return normalize_ticket_prefix(v)


class EmailConfig(BaseModel):
    """Customer email presentation settings."""

    sender_name: str = Field(
        "Release Notifications", min_length=1, description="Display name for the From header"
    )
    sender_address: str = Field(
        "releases@pde.com", min_length=3, description="Address used in the From header"
    )
    company_name: str = Field(
        "Pacific Design Engineering",
        min_length=1,
        description="Company name shown in the email footer",
    )

    @field_validator("sender_name", "sender_address", "company_name")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string fields."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the release pipeline.

    Every section has defaults, so an empty configuration file (or no file at
    all) yields a working pipeline.
    """

    jira: JiraConfig = Field(default_factory=JiraConfig, description="Jira settings")
    email: EmailConfig = Field(default_factory=EmailConfig, description="Email settings")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )


class PipelineContext(BaseModel):
    """Immutable settings handed to every pipeline component at construction.

    Components never read the process environment themselves; the CLI builds
    one context per invocation with ``build_context``.
    """

    ticket_prefix: str = "PDE"
    sender_name: str = "Release Notifications"
    sender_address: str = "releases@pde.com"
    company_name: str = "Pacific Design Engineering"

    model_config = ConfigDict(frozen=True)

    @field_validator("ticket_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        return normalize_ticket_prefix(v)

    @property
    def ticket_pattern(self) -> re.Pattern:
        """Anchored pattern for a single ticket token (``^PDE-\\d+$``)."""
        return re.compile(rf"^{re.escape(self.ticket_prefix)}-\d+$")

    @property
    def inline_ticket_pattern(self) -> re.Pattern:
        """Unanchored pattern used to scan free text for ticket references."""
        return re.compile(rf"\b{re.escape(self.ticket_prefix)}-\d+\b")
