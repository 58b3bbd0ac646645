"""Command-line entry point for the release content pipeline.

Reads a release record from the environment (or CLI overrides), runs the
parse → validate → render pipeline and emits the labeled-output map either
as JSON on stdout or in the GitHub Actions output format.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from release_pipeline.config.environment import EnvironmentConfig
from release_pipeline.config.exceptions import ConfigurationError
from release_pipeline.config.loader import build_context, load_config
from release_pipeline.config.models import AppConfig
from release_pipeline.domain.models import RawRelease
from release_pipeline.logging import get_logger
from release_pipeline.logging.config import ci_run_fields, configure_logging, detect_environment
from release_pipeline.pipeline import (
    ReleasePipeline,
    format_github_outputs,
    format_outputs_json,
    write_github_outputs,
)

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INVALID_RELEASE = 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="release-pipeline",
        description="Release Content Pipeline - parse, validate and render release notes "
        "into customer email and Jira content",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: release_config.yaml if present)",
    )
    parser.add_argument(
        "--body-file",
        type=Path,
        default=None,
        help="Read the release body from this file instead of RELEASE_BODY",
    )
    parser.add_argument("--title", default=None, help="Release title (overrides RELEASE_TITLE)")
    parser.add_argument("--tag", default=None, help="Release tag (overrides RELEASE_TAG)")
    parser.add_argument("--url", default=None, help="Release URL (overrides RELEASE_URL)")
    parser.add_argument(
        "--format",
        choices=["json", "github"],
        default="json",
        help="Output format for the labeled outputs (default: json)",
    )
    parser.add_argument(
        "--github-output",
        type=Path,
        default=None,
        help="File to append outputs to in github format (default: $GITHUB_OUTPUT, else stdout)",
    )
    parser.add_argument(
        "--allow-invalid",
        action="store_true",
        help="Exit 0 even when the release fails validation",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Log level priority: CLI > LOG_LEVEL > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def read_release(args: argparse.Namespace, env_config: EnvironmentConfig) -> RawRelease:
    """
    Assemble the release record from environment values and CLI overrides.

    Raises:
        ConfigurationError: If --body-file cannot be read
    """
    body = env_config.release_body
    if args.body_file is not None:
        try:
            body = args.body_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read release body file: {e}",
                suggestions=[f"Ensure {args.body_file} exists and is readable"],
            )

    return RawRelease(
        title=args.title if args.title is not None else env_config.release_title,
        body=body,
        tag=args.tag if args.tag is not None else env_config.release_tag,
        url=args.url if args.url is not None else env_config.release_url,
        release_id=env_config.release_id,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the release pipeline CLI.

    Returns:
        Exit code: 0 when the release is valid (or --allow-invalid),
        2 when validation fails, 1 on configuration errors.
    """
    load_dotenv(find_dotenv(usecwd=True))
    args = build_arg_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        context = build_context(app_config, env_config)

        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=detect_environment(),
            defaults={"ticket_prefix": context.ticket_prefix, **ci_run_fields()},
        )

        release = read_release(args, env_config)

        logger.info(
            "Release pipeline starting",
            extra={
                "event": "cli.starting",
                "config_path": str(args.config) if args.config else None,
                "output_format": args.format,
                "ticket_prefix": context.ticket_prefix,
            },
        )

        result = ReleasePipeline(context).run(release)
        outputs = result.to_outputs()

        if args.format == "github":
            output_path = args.github_output or env_config.github_output
            if output_path:
                write_github_outputs(outputs, output_path)
            else:
                sys.stdout.write(format_github_outputs(outputs))
        else:
            print(format_outputs_json(outputs))

        if not result.is_valid:
            for error in result.validation.errors:
                print(f"Validation error: {error}", file=sys.stderr)
            if not args.allow_invalid:
                return EXIT_INVALID_RELEASE

        return EXIT_OK

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e.message}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
