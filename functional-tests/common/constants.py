"""
Constants used throughout the functional test suite.
"""

from enum import Enum


class ServiceType(str, Enum):
    """
    Service type identifiers for test environments.

    Using str Enum allows direct string comparison while providing
    IDE autocomplete and type safety.
    """

    Anvil = "anvil"

    def __str__(self) -> str:
        """Allow direct use in f-strings and format operations."""
        return self.value

# Fork source handed to the stand-in node; never contacted.
FORK_URL = "https://mainnet.era.zksync.io"
