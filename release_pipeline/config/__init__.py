"""Configuration management module for the release pipeline."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import build_context, load_config, validate_config_file
from .models import (
    AppConfig,
    EmailConfig,
    JiraConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    PipelineContext,
)

__all__ = [
    # Main loader functions
    "load_config",
    "build_context",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "JiraConfig",
    "EmailConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    "PipelineContext",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
