"""
Base test class with common utilities.
"""

import flexitest

from anvil_action.services import AnvilService
from common.constants import ServiceType


class BaseTest(flexitest.Test):
    """
    Base class for all functional tests.

    Tests should explicitly:
    - Get the node from get_node()
    - Create RPC clients
    """

    def get_node(self, ctx: flexitest.RunContext) -> AnvilService:
        svc = ctx.get_service(ServiceType.Anvil)
        if svc is None:
            raise RuntimeError(
                f"Service '{ServiceType.Anvil}' not found. Available services: "
                f"{list(ctx.env.services.keys())}"  # type: ignore[union-attr]
            )
        return svc

    def main(self, ctx) -> bool:  # type: ignore[override]
        raise NotImplementedError
