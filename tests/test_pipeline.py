"""Unit tests for pipeline orchestration."""

import logging
from unittest.mock import MagicMock

import pytest

from release_pipeline.config.models import PipelineContext
from release_pipeline.domain.models import ExtractedFacts, RawRelease, ReleaseType
from release_pipeline.extraction.parser import ReleaseParser
from release_pipeline.logging.context import get_log_context
from release_pipeline.pipeline import OUTPUT_KEYS, PipelineResult, ReleasePipeline
from release_pipeline.rendering.models import RenderedContent
from release_pipeline.validation.models import ValidationResult
from release_pipeline.validation.validator import ReleaseValidator


@pytest.fixture
def pipeline(context):
    return ReleasePipeline(context)


class TestReleasePipeline:
    def test_run_valid_release(self, pipeline, valid_release):
        result = pipeline.run(valid_release)

        assert isinstance(result, PipelineResult)
        assert result.is_valid is True
        assert result.facts.release_type == ReleaseType.MAJOR
        assert result.content.email_subject == "🚀 Major Release: Major Release v2.0"
        assert len(result.run_id) == 32
        assert result.run_finished_at >= result.run_started_at

    def test_invalid_release_still_rendered(self, pipeline, invalid_release):
        result = pipeline.run(invalid_release)

        assert result.is_valid is False
        assert result.content.email_subject == "📋 Update: Quick build"
        assert "Released to Customer: Quick build" in result.content.jira_comment
        assert result.content.email_body_html

    def test_empty_release_never_raises(self, pipeline, empty_release):
        result = pipeline.run(empty_release)

        assert result.is_valid is False
        assert "Release body is empty" in result.validation.errors

    def test_stages_injected(self, context, valid_release):
        facts = ExtractedFacts(customer_emails=["a@b.com"], release_type=ReleaseType.MINOR)
        parser = MagicMock(spec=ReleaseParser)
        parser.parse.return_value = facts

        result = ReleasePipeline(context, parser=parser).run(valid_release)

        parser.parse.assert_called_once_with(valid_release)
        assert result.facts is facts
        assert result.content.email_subject.startswith("📦 Minor Update:")
        assert result.content.jira_comment.endswith("Sent to a@b.com")

    def test_context_reaches_every_stage(self, valid_release):
        pipeline = ReleasePipeline(PipelineContext(ticket_prefix="ENG"))
        result = pipeline.run(valid_release)

        # PDE tickets are not valid for the ENG project
        assert result.facts.jira_tickets == []
        assert result.validation.warnings == ["No Jira tickets referenced"]

    def test_stages_log_under_release_context(self, context, valid_release):
        seen = {}
        validator = ReleaseValidator(context)

        def validate_facts(facts, body):
            seen.update(get_log_context())
            return ReleaseValidator.validate_facts(validator, facts, body)

        validator.validate_facts = validate_facts
        result = ReleasePipeline(context, validator=validator).run(valid_release)

        assert seen == {
            "run_id": result.run_id,
            "release_tag": "v2.0.0",
            "release_type": "major",
        }
        assert get_log_context() == {}

    def test_run_logs_events(self, pipeline, valid_release, caplog):
        with caplog.at_level(logging.INFO, logger="release_pipeline.pipeline.runner"):
            pipeline.run(valid_release)

        events = {getattr(r, "event", None): r for r in caplog.records}
        assert "pipeline.run.started" in events
        completed = events["pipeline.run.completed"]
        assert completed.is_valid is True
        assert completed.component == "pipeline"


class TestPipelineResultOutputs:
    def _result(self, **overrides):
        values = dict(
            run_id="abc",
            release=RawRelease(title="Widget"),
            facts=ExtractedFacts(
                customer_emails=["a@b.com", "c@d.com"],
                jira_tickets=["PDE-1", "PDE-2"],
                release_type=ReleaseType.BUGFIX,
                business_impact="Faster",
                technical_changes="",
                has_file_attachments=True,
            ),
            validation=ValidationResult(
                is_valid=False,
                errors=["first error", "second error"],
                warnings=["a warning"],
            ),
            content=RenderedContent(
                email_subject="🐛 Bug Fix: Widget",
                email_body_html="<div>body</div>",
                email_body_text="body",
                jira_comment="comment",
            ),
        )
        values.update(overrides)
        return PipelineResult(**values)

    def test_exact_keys(self):
        outputs = self._result().to_outputs()
        assert tuple(outputs) == OUTPUT_KEYS
        assert len(outputs) == 12

    def test_values(self):
        outputs = self._result().to_outputs()

        assert outputs["customer_emails"] == "a@b.com,c@d.com"
        assert outputs["jira_tickets"] == "PDE-1 PDE-2"
        assert outputs["release_type"] == "bugfix"
        assert outputs["business_impact"] == "Faster"
        assert outputs["technical_changes"] == ""
        assert outputs["has_files"] == "true"
        assert outputs["is_valid"] == "false"
        assert outputs["validation_errors"] == "first error; second error"
        assert outputs["validation_warnings"] == "a warning"
        assert outputs["email_subject"] == "🐛 Bug Fix: Widget"
        assert outputs["email_body"] == "<div>body</div>"
        assert outputs["jira_comment"] == "comment"

    def test_all_values_are_strings(self):
        assert all(isinstance(v, str) for v in self._result().to_outputs().values())

    def test_duration_without_timestamps(self):
        assert self._result().duration_seconds == 0.0
