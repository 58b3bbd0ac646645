"""Logging configuration for the release pipeline."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Mapping, Optional, TextIO

from .context import get_log_context

LogFormat = Literal["json", "key-value"]

SERVICE_NAME = "release-content-pipeline"

# GitHub Actions variables identifying the workflow run behind a release
CI_RUN_FIELDS = {
    "GITHUB_REPOSITORY": "repository",
    "GITHUB_RUN_ID": "workflow_run_id",
    "GITHUB_RUN_ATTEMPT": "workflow_run_attempt",
}

# Attributes every LogRecord carries; anything else came from extra/context
STANDARD_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
    "processName", "relativeCreated", "thread", "threadName", "asctime",
    "exc_info", "exc_text", "stack_info", "taskName",
})


def _extra_fields(record: logging.LogRecord, skip=STANDARD_ATTRS) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in skip and not key.startswith("_")
    }


def ci_run_fields(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect workflow run fields for release logs.

    Outside GitHub Actions this returns an empty dict.
    """
    environ = os.environ if environ is None else environ
    return {field: environ[var] for var, field in CI_RUN_FIELDS.items() if environ.get(var)}


def detect_environment(environ: Optional[Mapping[str, str]] = None) -> str:
    """ENVIRONMENT if set, "ci" inside GitHub Actions, otherwise "local"."""
    environ = os.environ if environ is None else environ
    if environ.get("ENVIRONMENT"):
        return environ["ENVIRONMENT"]
    return "ci" if environ.get("GITHUB_ACTIONS") == "true" else "local"


class ContextualFilter(logging.Filter):
    """Filter that enriches log records with static metadata and active context.

    Static fields (service, environment) go on every record. Default fields
    (ticket prefix, workflow run) and fields from the active ``log_context``
    are added unless the call already set them; context wins over defaults.
    """

    def __init__(
        self,
        service: str = SERVICE_NAME,
        environment: str = "local",
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__()
        self.service = service
        self.environment = environment
        self.defaults = dict(defaults or {})

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        record.environment = self.environment

        for key, value in {**self.defaults, **get_log_context()}.items():
            if not hasattr(record, key):
                setattr(record, key, value)

        return True


class JSONFormatter(logging.Formatter):
    """Single-line JSON formatter with stable field names."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": self._format_timestamp(record.created),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        for key, value in _extra_fields(record).items():
            if isinstance(value, datetime):
                log_obj[key] = value.isoformat()
            elif isinstance(value, (str, int, float, bool, type(None), list, dict)):
                log_obj[key] = value
            else:
                log_obj[key] = str(value)

        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False)

    @staticmethod
    def _format_timestamp(created: float) -> str:
        """Format a unix timestamp as ISO-8601 UTC with millisecond precision."""
        dt = datetime.fromtimestamp(created, tz=timezone.utc)
        return dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class KeyValueFormatter(logging.Formatter):
    """Human-readable formatter.

    Produces logs in format:
    timestamp [level] logger: message key1=value1 key2=value2
    """

    SKIP_ATTRS = STANDARD_ATTRS | {"service", "environment"}

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        extras = [
            f"{key}={self._format_value(value)}"
            for key, value in sorted(_extra_fields(record, self.SKIP_ATTRS).items())
        ]

        return f"{base} {' '.join(extras)}" if extras else base

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, str):
            # Quote strings with spaces or separators
            if " " in value or "=" in value or "," in value:
                return f'"{value}"'
            return value
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, bool):
            return str(value).lower()
        if value is None:
            return "null"
        return str(value)


def configure_logging(
    level: str = "INFO",
    format_type: LogFormat = "key-value",
    environment: str = "local",
    stream: Optional[TextIO] = None,
    defaults: Optional[Mapping[str, Any]] = None,
) -> None:
    """
    Configure the root logger with the specified level and format.

    Logs go to stderr by default so that stdout stays free for the labeled
    output map.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'json' for JSON logs or 'key-value' for human-readable
        environment: Environment label (ci, local, ...)
        stream: Optional stream override
        defaults: Fields stamped on every record, e.g. ticket_prefix and
            the workflow run from ci_run_fields()

    Raises:
        ValueError: If level or format_type is invalid
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    if format_type not in ("json", "key-value"):
        raise ValueError(f"Invalid log format: {format_type}. Must be 'json' or 'key-value'")

    handler = logging.StreamHandler(stream or sys.stderr)

    if format_type == "json":
        formatter = JSONFormatter()
    else:
        formatter = KeyValueFormatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    handler.addFilter(
        ContextualFilter(service=SERVICE_NAME, environment=environment, defaults=defaults)
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        "Logging configured",
        extra={
            "event": "logging.configured",
            "component": "logging",
            "log_level": level.upper(),
            "log_format": format_type,
        },
    )
