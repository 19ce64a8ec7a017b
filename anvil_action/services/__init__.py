"""
Process wrappers for the launched node.
"""

from anvil_action.services.anvil import AnvilProps, AnvilService, launch, make_service
from anvil_action.services.base import DetachedProcService

__all__ = [
    "DetachedProcService",
    "AnvilService",
    "AnvilProps",
    "launch",
    "make_service",
]
