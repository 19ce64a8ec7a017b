"""
Constants used throughout the launcher.
"""

from enum import Enum

TOOL_NAME = "anvil-zksync"
RELEASE_REPO = "matter-labs/anvil-zksync"
GITHUB_API_URL = "https://api.github.com"

# Probe tuning, each overridable through inputs.
HEALTH_CHECK_RETRIES = 3
HEALTH_CHECK_DELAY = 8.0  # seconds
HEALTH_CHECK_TIMEOUT = 3.0  # seconds, per attempt


class Mode(str, Enum):
    """
    Launch mode of the node, emitted as the trailing subcommand.

    Using str Enum allows direct string comparison against raw inputs.
    """

    Run = "run"
    Fork = "fork"

    def __str__(self) -> str:
        """Allow direct use in f-strings and format operations."""
        return self.value


DEFAULTS: dict[str, str] = {
    "releaseTag": "latest",
    "target": "x86_64-unknown-linux-gnu",
    "mode": Mode.Run.value,
    "port": "8011",
    "host": "127.0.0.1",
    "verbosity": "0",
    "healthCheckRetries": str(HEALTH_CHECK_RETRIES),
    "healthCheckWarmup": str(HEALTH_CHECK_DELAY),
    "healthCheckInterval": str(HEALTH_CHECK_DELAY),
}
