"""Context propagation for structured logging of release runs.

Fields pushed here (release tag, run id) are injected into every log record
emitted inside the scope by ``ContextualFilter``.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the current logging context."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the logging context.

    Returns:
        Token for ``pop_log_context`` to restore the previous state

    Example:
        >>> token = push_log_context(release_tag="v2.0.0")
        >>> pop_log_context(token)
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the logging context saved by ``push_log_context``."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Clear all logging context fields (used by tests)."""
    LogContextVar.set({})


class log_context:
    """Context manager for scoped logging context.

    Example:
        >>> with log_context(run_id="abc123", release_tag="v2.0.0"):
        ...     logger.info("Parsing release")  # includes run_id and release_tag
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
        return False


def release_log_context(run_id: str, release_tag: Optional[str] = None, **fields) -> log_context:
    """Scope for one pipeline run over a release.

    Every record inside carries ``run_id``. ``release_tag`` is only added
    when the release has one, so draft runs do not log an empty tag.

    Example:
        >>> with release_log_context(run_id, release.tag):
        ...     parser.parse(release)
    """
    if release_tag:
        fields["release_tag"] = release_tag
    return log_context(run_id=run_id, **fields)
