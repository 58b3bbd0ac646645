"""Test helper utilities for release pipeline tests."""

from .releases import (
    CONFIGS_DIR,
    FIXTURES_DIR,
    RELEASES_DIR,
    load_release_body,
    make_release,
    parse_github_outputs,
)

__all__ = [
    "CONFIGS_DIR",
    "FIXTURES_DIR",
    "RELEASES_DIR",
    "load_release_body",
    "make_release",
    "parse_github_outputs",
]
