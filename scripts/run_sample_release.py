#!/usr/bin/env python3
"""Sample release harness for manual end-to-end checks.

Runs the pipeline over the sample release notes in tests/fixtures/releases
and prints the verdict and rendered content, without touching any delivery
collaborator.

Usage:
    python scripts/run_sample_release.py
    python scripts/run_sample_release.py --release tests/fixtures/releases/valid-release.md \
        --title "Major Release v2.0" --show-email
"""

import argparse
import sys
from pathlib import Path

from release_pipeline.config import build_context, load_config
from release_pipeline.domain.models import RawRelease
from release_pipeline.logging.config import configure_logging
from release_pipeline.pipeline import ReleasePipeline

REPO_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_RELEASES_DIR = REPO_ROOT / "tests" / "fixtures" / "releases"


def run_release(pipeline: ReleasePipeline, path: Path, title: str, show_email: bool) -> bool:
    release = RawRelease(
        title=title,
        body=path.read_text(encoding="utf-8"),
        tag="v0.0.0-sample",
        url=f"https://example.com/releases/{path.stem}",
    )
    result = pipeline.run(release)
    outputs = result.to_outputs()

    status = "✓ valid" if result.is_valid else "✗ invalid"
    print(f"\n=== {path.name}: {status} ===")
    for key in ("customer_emails", "jira_tickets", "release_type", "has_files"):
        print(f"  {key}: {outputs[key] or '-'}")
    for error in result.validation.errors:
        print(f"  error: {error}")
    for warning in result.validation.warnings:
        print(f"  warning: {warning}")

    print(f"\n  Subject: {result.content.email_subject}")
    print("\n  Jira comment:")
    for line in result.content.jira_comment.split("\n"):
        print(f"    {line}")

    if show_email:
        print("\n  Email (text):")
        for line in result.content.email_body_text.split("\n"):
            print(f"    {line}")

    return result.is_valid


def main() -> int:
    parser = argparse.ArgumentParser(description="Run sample releases through the pipeline")
    parser.add_argument(
        "--release",
        type=Path,
        action="append",
        help="Release body file (repeatable; default: every sample release)",
    )
    parser.add_argument("--title", default="Sample Release", help="Release title to use")
    parser.add_argument("--config", type=Path, default=None, help="Configuration file")
    parser.add_argument("--show-email", action="store_true", help="Print the email text body")
    args = parser.parse_args()

    configure_logging(level="WARNING")
    app_config, env_config = load_config(args.config)
    pipeline = ReleasePipeline(build_context(app_config, env_config))

    releases = args.release or sorted(DEFAULT_RELEASES_DIR.glob("*.md"))
    results = [run_release(pipeline, path, args.title, args.show_email) for path in releases]

    print(f"\n{sum(results)}/{len(results)} sample releases valid")
    return 0


if __name__ == "__main__":
    sys.exit(main())
