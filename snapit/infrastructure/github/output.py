"""GitHub Actions output helpers."""

from __future__ import annotations

import json
import os
import uuid


def write_github_output(key: str, value: str | bool | list) -> None:
    """Write a key-value pair to GITHUB_OUTPUT for job outputs.

    Lists are written as JSON arrays and booleans as `true`/`false` so that
    workflows can read them with `fromJSON()`. Multiline values use heredoc
    syntax with a random delimiter.

    Args:
        key: Output variable name
        value: Output value
    """
    text = _format_output_value(value)
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        print(f"GITHUB_OUTPUT not set, would output: {key}={text[:100]}")
        return
    with open(output_file, "a", encoding="utf-8") as f:
        if "\n" in text:
            delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
            f.write(f"{key}<<{delimiter}\n{text}\n{delimiter}\n")
        else:
            f.write(f"{key}={text}\n")


def write_github_step_summary(content: str) -> bool:
    """Append markdown to GITHUB_STEP_SUMMARY for the job summary.

    Returns:
        True if written successfully, False otherwise
    """
    summary_path = os.environ.get("GITHUB_STEP_SUMMARY")
    if not summary_path:
        return False
    try:
        with open(summary_path, "a", encoding="utf-8") as f:
            f.write(content)
        return True
    except OSError as e:
        print(f"Failed to write job summary: {e}")
        return False


def _format_output_value(value: str | bool | list) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return json.dumps(value)
    return str(value)
