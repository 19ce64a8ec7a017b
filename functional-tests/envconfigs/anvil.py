"""Environment configurations."""

from typing import cast

import flexitest

from common.constants import ServiceType
from factories.anvil import AnvilFactory


class AnvilEnvConfig(flexitest.EnvConfig):
    """
    Single anvil-zksync node started through the launcher stages.

    Parameters:
        inputs: Action inputs for the node (port is assigned by the factory)
    """

    def __init__(self, inputs: dict[str, str] | None = None):
        self.inputs = inputs or {}

    def init(self, ectx: flexitest.EnvContext) -> flexitest.LiveEnv:
        factory = cast(AnvilFactory, ectx.get_factory(ServiceType.Anvil))

        # Returns once the node passed the readiness probe
        node = factory.create_node(self.inputs)

        return flexitest.LiveEnv({ServiceType.Anvil: node})
