"""
Glue for the Actions runner: workflow-command logging and PATH export.
"""

import logging
import os
from collections.abc import MutableMapping
from pathlib import Path

# Levels rendered as workflow commands; INFO stays plain output.
_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def escape_data(message: str) -> str:
    """Escape a message so the runner reads it as a single command payload."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def in_actions(environ: MutableMapping[str, str] | None = None) -> bool:
    environ = os.environ if environ is None else environ
    return environ.get("GITHUB_ACTIONS") == "true"


class WorkflowCommandFormatter(logging.Formatter):
    """
    Formats records as ``::debug::``/``::warning::``/``::error::`` commands.

    The runner only shows ``::debug::`` lines when step debugging is on, which
    matches how probe faults should surface.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def add_path(
    directory: str | Path,
    environ: MutableMapping[str, str] | None = None,
) -> None:
    """
    Prepend ``directory`` to PATH for this process and, when running under the
    runner, for the job's later steps via ``$GITHUB_PATH``.
    """
    environ = os.environ if environ is None else environ
    directory = str(directory)

    path_file = environ.get("GITHUB_PATH")
    if path_file:
        with open(path_file, "a", encoding="utf-8") as f:
            f.write(f"{directory}{os.linesep}")

    current = environ.get("PATH", "")
    environ["PATH"] = f"{directory}{os.pathsep}{current}" if current else directory
