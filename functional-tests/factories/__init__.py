"""Service factories for creating test services."""

from factories.anvil import AnvilFactory

__all__ = ["AnvilFactory"]
