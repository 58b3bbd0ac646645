"""Serialization of the labeled-output map.

Two forms are supported: the GitHub Actions ``$GITHUB_OUTPUT`` file, where
every value is written with a heredoc-style delimiter so multi-line HTML
survives intact, and plain JSON for local runs.
"""

import json
from pathlib import Path
from typing import Dict, Optional, Union
from uuid import uuid4

from release_pipeline.logging import get_logger

logger = get_logger(__name__, component="outputs")


def _delimiter(key: str, value: str) -> str:
    delimiter = f"ghadelimiter_{uuid4().hex}"
    # A delimiter occurring in the value would end the block early
    while delimiter in value or delimiter in key:
        delimiter = f"ghadelimiter_{uuid4().hex}"
    return delimiter


def format_github_outputs(outputs: Dict[str, str]) -> str:
    """Render outputs in the ``key<<DELIMITER`` multi-line format.

    Example:
        key<<ghadelimiter_3f2a...
        value line 1
        value line 2
        ghadelimiter_3f2a...
    """
    chunks = []
    for key, value in outputs.items():
        value = "" if value is None else str(value)
        delimiter = _delimiter(key, value)
        chunks.append(f"{key}<<{delimiter}\n{value}\n{delimiter}\n")
    return "".join(chunks)


def write_github_outputs(outputs: Dict[str, str], path: Union[str, Path]) -> None:
    """Append outputs to a GitHub Actions output file.

    Args:
        outputs: Labeled-output map
        path: Path of the ``$GITHUB_OUTPUT`` file (created if missing)
    """
    path = Path(path)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(format_github_outputs(outputs))

    logger.info(
        f"Wrote {len(outputs)} outputs to {path}",
        extra={"event": "outputs.written", "output_count": len(outputs)},
    )


def format_outputs_json(outputs: Dict[str, str], indent: Optional[int] = 2) -> str:
    """Render outputs as a JSON object, keeping key order and unicode."""
    return json.dumps(outputs, indent=indent, ensure_ascii=False)
