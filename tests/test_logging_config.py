"""Tests for logging configuration and formatters."""

import io
import json
import logging

import pytest

from release_pipeline.logging import ComponentLoggerAdapter, get_logger
from release_pipeline.logging.config import (
    SERVICE_NAME,
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    ci_run_fields,
    configure_logging,
    detect_environment,
)
from release_pipeline.logging.context import log_context


@pytest.fixture
def record_factory():
    """Build LogRecords without emitting them."""
    test_logger = logging.getLogger("test_release_logger")

    def make(message="Test message", extra=None, level=logging.INFO):
        return test_logger.makeRecord(
            "test", level, "test.py", 1, message, (), None, extra=extra
        )

    return make


@pytest.fixture
def restore_root_logger():
    """Restore root handlers and level replaced by configure_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJSONFormatter:
    def test_mandatory_fields(self, record_factory):
        log_obj = json.loads(JSONFormatter().format(record_factory()))

        assert log_obj["level"] == "INFO"
        assert log_obj["message"] == "Test message"
        assert log_obj["timestamp"].endswith("Z")
        assert len(log_obj["timestamp"]) == 24  # 2025-11-04T10:30:00.123Z

    def test_extra_fields(self, record_factory):
        record = record_factory(
            extra={"event": "parser.completed", "email_count": 2, "has_files": True}
        )
        log_obj = json.loads(JSONFormatter().format(record))

        assert log_obj["event"] == "parser.completed"
        assert log_obj["email_count"] == 2
        assert log_obj["has_files"] is True
        assert "lineno" not in log_obj

    def test_non_serializable_extra_is_stringified(self, record_factory):
        record = record_factory(extra={"path": io.StringIO})
        log_obj = json.loads(JSONFormatter().format(record))
        assert isinstance(log_obj["path"], str)

    def test_unicode_kept(self, record_factory):
        output = JSONFormatter().format(record_factory("🚀 Major Release: Widget"))
        assert "🚀" in output


class TestContextualFilter:
    def test_static_fields(self, record_factory):
        record = record_factory()
        assert ContextualFilter(environment="ci").filter(record) is True

        assert record.service == SERVICE_NAME
        assert record.environment == "ci"

    def test_context_fields(self, record_factory):
        with log_context(run_id="abc123", release_tag="v2.0.0"):
            record = record_factory()
            ContextualFilter().filter(record)

        assert record.run_id == "abc123"
        assert record.release_tag == "v2.0.0"

    def test_explicit_extra_wins_over_context(self, record_factory):
        with log_context(release_tag="v2.0.0"):
            record = record_factory(extra={"release_tag": "override"})
            ContextualFilter().filter(record)

        assert record.release_tag == "override"

    def test_default_fields(self, record_factory):
        record = record_factory()
        ContextualFilter(defaults={"ticket_prefix": "ENG", "workflow_run_id": "42"}).filter(record)

        assert record.ticket_prefix == "ENG"
        assert record.workflow_run_id == "42"

    def test_context_wins_over_defaults(self, record_factory):
        with log_context(release_type="major"):
            record = record_factory()
            ContextualFilter(defaults={"release_type": "update"}).filter(record)

        assert record.release_type == "major"


class TestRunEnvironment:
    def test_ci_run_fields(self):
        environ = {
            "GITHUB_REPOSITORY": "pde/widgets",
            "GITHUB_RUN_ID": "9001",
            "GITHUB_RUN_ATTEMPT": "",
            "HOME": "/root",
        }
        assert ci_run_fields(environ) == {
            "repository": "pde/widgets",
            "workflow_run_id": "9001",
        }

    def test_ci_run_fields_outside_actions(self):
        assert ci_run_fields({}) == {}

    @pytest.mark.parametrize(
        "environ, expected",
        [
            ({}, "local"),
            ({"GITHUB_ACTIONS": "true"}, "ci"),
            ({"GITHUB_ACTIONS": "true", "ENVIRONMENT": "staging"}, "staging"),
        ],
    )
    def test_detect_environment(self, environ, expected):
        assert detect_environment(environ) == expected


class TestKeyValueFormatter:
    def test_extras_as_pairs(self, record_factory):
        formatter = KeyValueFormatter("[%(levelname)s] %(name)s: %(message)s")
        record = record_factory(
            extra={"event": "validation.completed", "is_valid": False, "reason": "no emails"}
        )

        output = formatter.format(record)

        assert output.startswith("[INFO] test: Test message")
        assert "event=validation.completed" in output
        assert "is_valid=false" in output
        assert 'reason="no emails"' in output

    def test_static_fields_skipped(self, record_factory):
        formatter = KeyValueFormatter("%(message)s")
        record = record_factory()
        ContextualFilter().filter(record)

        assert formatter.format(record) == "Test message"


class TestConfigureLogging:
    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(level="LOUD")

    def test_invalid_format(self):
        with pytest.raises(ValueError, match="Invalid log format"):
            configure_logging(format_type="xml")

    def test_json_output_with_context(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging(level="INFO", format_type="json", environment="test", stream=stream)

        with log_context(run_id="run-1"):
            get_logger("release_pipeline.test", component="parser").info(
                "Parsed release", extra={"event": "parser.completed"}
            )

        log_obj = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert log_obj["message"] == "Parsed release"
        assert log_obj["component"] == "parser"
        assert log_obj["event"] == "parser.completed"
        assert log_obj["run_id"] == "run-1"
        assert log_obj["environment"] == "test"

    def test_json_output_with_defaults(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging(
            format_type="json",
            stream=stream,
            defaults={"ticket_prefix": "PDE", "repository": "pde/widgets"},
        )

        get_logger("release_pipeline.test").info("Validated release")

        log_obj = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert log_obj["ticket_prefix"] == "PDE"
        assert log_obj["repository"] == "pde/widgets"

    def test_key_value_handler(self, restore_root_logger):
        configure_logging(level="WARNING", format_type="key-value", stream=io.StringIO())

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, KeyValueFormatter)
        assert root.level == logging.WARNING


class TestGetLogger:
    def test_component_adapter(self):
        logger = get_logger("release_pipeline.test", component="renderer")
        assert isinstance(logger, ComponentLoggerAdapter)
        assert logger.extra == {"component": "renderer"}

    def test_plain_logger(self):
        assert isinstance(get_logger("release_pipeline.test"), logging.Logger)

    def test_call_extra_merged(self):
        logger = get_logger("release_pipeline.test", component="renderer")
        _, kwargs = logger.process("msg", {"extra": {"event": "renderer.completed"}})
        assert kwargs["extra"] == {"component": "renderer", "event": "renderer.completed"}
