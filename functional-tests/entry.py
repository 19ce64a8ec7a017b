#!/usr/bin/env python3
"""
Functional test runner.

Usage:
    ./entry.py                    # Run all tests
    ./entry.py -t test_fork_mode  # Run specific test
"""

import argparse
import logging
import os
import sys

import flexitest

from common.constants import FORK_URL, ServiceType
from envconfigs.anvil import AnvilEnvConfig
from factories.anvil import AnvilFactory


def setup_logging() -> None:
    """Configure root logger."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="entry.py",
        description="Run functional tests",
    )
    parser.add_argument(
        "-t",
        "--test",
        nargs="*",
        help="Run specific test(s)",
    )
    return parser.parse_args(argv[1:])


def filter_tests(selected: list[str] | None, modules: dict[str, str]) -> dict[str, str]:
    """Keep the modules named on the command line, or all of them."""
    if not selected:
        return modules
    wanted = frozenset(os.path.basename(t).removesuffix(".py") for t in selected)
    return {name: path for name, path in modules.items() if name.split(".")[-1] in wanted}


def main(argv: list[str]) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging()

    factories: dict[ServiceType, flexitest.Factory] = {
        ServiceType.Anvil: AnvilFactory(range(18011, 18111)),
    }

    global_envs: dict[str, flexitest.EnvConfig] = {
        "basic": AnvilEnvConfig(),
        "fork": AnvilEnvConfig(
            {
                "mode": "fork",
                "forkUrl": FORK_URL,
                "forkBlockNumber": "42",
                "chainId": "324",
                "verbosity": "2",
            }
        ),
    }

    root_dir = os.path.dirname(os.path.abspath(__file__))
    datadir = flexitest.create_datadir_in_workspace(os.path.join(root_dir, "_dd"))
    runtime = flexitest.TestRuntime(global_envs, datadir, factories)

    test_dir = os.path.join(root_dir, "tests")
    modules = filter_tests(args.test, flexitest.runtime.scan_dir_for_modules(test_dir))
    tests = flexitest.runtime.load_candidate_modules(modules)

    runtime.prepare_registered_tests()
    results = runtime.run_tests(tests)

    runtime.save_json_file("results.json", results)
    flexitest.dump_results(results)

    flexitest.fail_on_error(results)

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
