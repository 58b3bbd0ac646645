"""Pipeline orchestration: parse, validate and render one release."""

from typing import Optional
from uuid import uuid4

from release_pipeline.config.models import PipelineContext
from release_pipeline.domain.models import RawRelease
from release_pipeline.extraction.parser import ReleaseParser
from release_pipeline.logging import get_logger
from release_pipeline.logging.context import log_context, release_log_context
from release_pipeline.rendering.renderer import ContentRenderer
from release_pipeline.utils.timestamps import utc_now
from release_pipeline.validation.validator import ReleaseValidator

from .models import PipelineResult

logger = get_logger(__name__, component="pipeline")


class ReleasePipeline:
    """
    Runs Parser → Validator → Renderer over a single release record.

    Stages share one immutable PipelineContext. The renderer always runs so
    that drafts exist even for releases that fail validation; callers decide
    what to do with an invalid verdict.
    """

    def __init__(
        self,
        context: Optional[PipelineContext] = None,
        parser: Optional[ReleaseParser] = None,
        validator: Optional[ReleaseValidator] = None,
        renderer: Optional[ContentRenderer] = None,
    ):
        """
        Initialize the release pipeline.

        Args:
            context: Settings shared by every stage; defaults apply if None
            parser: Parser stage (built from context if None)
            validator: Validator stage (built from context if None)
            renderer: Renderer stage (built from context if None)
        """
        self.context = context or PipelineContext()
        self.parser = parser or ReleaseParser(self.context)
        self.validator = validator or ReleaseValidator(self.context)
        self.renderer = renderer or ContentRenderer(self.context)

    def run(self, release: RawRelease) -> PipelineResult:
        """
        Process one release end to end.

        Args:
            release: Release record to process

        Returns:
            PipelineResult carrying facts, verdict and rendered content
        """
        run_started_at = utc_now()
        run_id = uuid4().hex

        with release_log_context(run_id, release.tag):
            logger.info(
                "Pipeline run started",
                extra={
                    "event": "pipeline.run.started",
                    "release_title": release.title,
                    "ticket_prefix": self.context.ticket_prefix,
                },
            )

            facts = self.parser.parse(release)

            # Later stages log under the classified release type
            with log_context(release_type=facts.release_type.value):
                validation = self.validator.validate_facts(facts, release.body)
                content = self.renderer.process(
                    release, facts.release_type, facts.customer_emails_text
                )

            result = PipelineResult(
                run_id=run_id,
                release=release,
                facts=facts,
                validation=validation,
                content=content,
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
            )

            logger.info(
                f"Pipeline run completed: is_valid={result.is_valid}",
                extra={
                    "event": "pipeline.run.completed",
                    "is_valid": result.is_valid,
                    "release_type": facts.release_type.value,
                    "error_count": len(validation.errors),
                    "warning_count": len(validation.warnings),
                    "duration_seconds": round(result.duration_seconds, 3),
                },
            )

        return result
