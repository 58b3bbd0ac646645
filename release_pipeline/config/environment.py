"""Environment variable loading and validation."""

import os
from typing import Mapping, Optional

from .exceptions import ConfigurationError
from .models import normalize_ticket_prefix


class EnvironmentConfig:
    """Environment variable configuration holder.

    Holds the release record handed over by the release-publication event
    plus a few runtime overrides.
    """

    def __init__(
        self,
        release_title: str = "",
        release_body: str = "",
        release_tag: str = "",
        release_url: str = "",
        release_id: str = "",
        jira_ticket_prefix: Optional[str] = None,
        log_level: Optional[str] = None,
        github_output: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.release_title = release_title
        self.release_body = release_body
        self.release_tag = release_tag
        self.release_url = release_url
        self.release_id = release_id
        self.jira_ticket_prefix = jira_ticket_prefix
        self.log_level = log_level
        self.github_output = github_output


def load_environment_config(environ: Optional[Mapping[str, str]] = None) -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Release variables (all optional, missing values become empty strings):
    - RELEASE_TITLE, RELEASE_BODY, RELEASE_TAG, RELEASE_URL, RELEASE_ID

    Optional overrides:
    - JIRA_TICKET_PREFIX: Jira project key, overrides jira.ticket_prefix
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - GITHUB_OUTPUT: File that labeled outputs are appended to

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If an override has an invalid value
    """
    env = os.environ if environ is None else environ
    errors = []

    jira_ticket_prefix = env.get("JIRA_TICKET_PREFIX") or None
    log_level = env.get("LOG_LEVEL") or None

    if jira_ticket_prefix:
        try:
            jira_ticket_prefix = normalize_ticket_prefix(jira_ticket_prefix)
        except ValueError as e:
            errors.append(f"Invalid JIRA_TICKET_PREFIX: {e}")

    if log_level:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if log_level.upper() not in valid_levels:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(valid_levels)}"
            )
        else:
            log_level = log_level.upper()

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Unset the variable to fall back to the configuration file",
                "Use an uppercase Jira project key such as PDE",
            ],
        )

    return EnvironmentConfig(
        release_title=env.get("RELEASE_TITLE", ""),
        release_body=env.get("RELEASE_BODY", ""),
        release_tag=env.get("RELEASE_TAG", ""),
        release_url=env.get("RELEASE_URL", ""),
        release_id=env.get("RELEASE_ID", ""),
        jira_ticket_prefix=jira_ticket_prefix,
        log_level=log_level,
        github_output=env.get("GITHUB_OUTPUT") or None,
    )
