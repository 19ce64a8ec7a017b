"""
Command-line entry point.

Usage:
    anvil-action                              # Inputs from INPUT_* variables
    anvil-action -i mode=fork -i forkUrl=URL  # Override individual inputs
"""

import argparse
import logging
import os
import sys

from anvil_action.actions import WorkflowCommandFormatter, in_actions
from anvil_action.config import ChainedConfigSource, EnvConfigSource, MappingConfigSource
from anvil_action.runner import run

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("anvil_action")


def setup_logging(level: str | None = None) -> None:
    """Configure root logger."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
        if os.getenv("RUNNER_DEBUG") == "1":
            level = "DEBUG"
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        force=True,
    )
    if in_actions():
        formatter = WorkflowCommandFormatter("%(message)s")
        for handler in logging.getLogger().handlers:
            handler.setFormatter(formatter)


def _parse_input(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got: {raw!r}")
    return name, value


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="anvil-action",
        description="Download, start and health-check an anvil-zksync node",
    )
    parser.add_argument(
        "-i",
        "--input",
        action="append",
        type=_parse_input,
        default=[],
        metavar="NAME=VALUE",
        help="Set an input, taking precedence over INPUT_* variables",
    )
    parser.add_argument(
        "--log-level",
        help="Log level (defaults to LOG_LEVEL, or DEBUG when RUNNER_DEBUG=1)",
    )
    return parser.parse_args(argv[1:])


def main(argv: list[str]) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    source = ChainedConfigSource(MappingConfigSource(dict(args.input)), EnvConfigSource())

    try:
        run(source)
    except Exception as e:
        # One failure line for the job; the traceback only in debug output
        logger.debug("launch failed", exc_info=True)
        logger.error(str(e) or type(e).__name__)
        return 1

    return 0


def cli() -> None:
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    cli()
