#!/usr/bin/env python3
"""Verify a release pipeline configuration file before committing it.

Usage:
    python verify_config.py [path]   # defaults to release_config.example.yaml
"""

import sys
from pathlib import Path

from release_pipeline.config import validate_config_file


def main() -> int:
    config_file = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("release_config.example.yaml")

    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return 1

    return 0 if validate_config_file(config_file) else 1


if __name__ == "__main__":
    sys.exit(main())
