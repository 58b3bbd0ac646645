"""Pipeline orchestration and output serialization."""

from .models import OUTPUT_KEYS, PipelineResult
from .outputs import format_github_outputs, format_outputs_json, write_github_outputs
from .runner import ReleasePipeline

__all__ = [
    "ReleasePipeline",
    "PipelineResult",
    "OUTPUT_KEYS",
    "write_github_outputs",
    "format_github_outputs",
    "format_outputs_json",
]
