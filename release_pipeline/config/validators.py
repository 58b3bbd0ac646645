"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

KNOWN_SECTIONS = {"jira", "email", "logging"}


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    # Sections from older release_config.yml files are accepted but unused
    unknown = sorted(key for key in config_dict if key not in KNOWN_SECTIONS)
    if unknown:
        warning_messages.append(
            f"Ignoring unknown configuration sections: {', '.join(unknown)}"
        )

    jira = config_dict.get("jira", {})
    if isinstance(jira, dict):
        prefix = jira.get("ticket_prefix")
        if isinstance(prefix, str) and prefix.strip() and prefix.strip() != prefix.strip().upper():
            warning_messages.append(
                f"jira.ticket_prefix '{prefix}' will be uppercased to '{prefix.strip().upper()}'"
            )
        if "ticket_pattern" in jira:
            warning_messages.append(
                "jira.ticket_pattern is not supported; ticket IDs are matched as "
                "<ticket_prefix>-<digits>"
            )

    email = config_dict.get("email", {})
    if isinstance(email, dict):
        address = email.get("sender_address")
        if isinstance(address, str) and "@" not in address:
            warning_messages.append(
                f"email.sender_address '{address}' does not look like an email address"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
