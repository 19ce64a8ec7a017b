"""Environment configurations."""

from envconfigs.anvil import AnvilEnvConfig

__all__ = ["AnvilEnvConfig"]
