"""Domain models shared across the pipeline."""

from .models import ExtractedFacts, RawRelease, ReleaseType

__all__ = ["ExtractedFacts", "RawRelease", "ReleaseType"]
