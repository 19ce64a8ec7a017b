"""Node launched in run mode answers the readiness call."""

import logging

import flexitest

from common.base_test import BaseTest

logger = logging.getLogger(__name__)


@flexitest.register
class TestNodeReady(BaseTest):
    """The launched node serves eth_blockNumber and received a trailing run subcommand."""

    def __init__(self, ctx: flexitest.InitContext):
        ctx.set_env("basic")

    def main(self, ctx):
        node = self.get_node(ctx)
        rpc = node.create_rpc()

        assert node.check_health(), "node not healthy"
        assert node.get_block_number() == 0

        argv = rpc.fake_argv()
        logger.info(f"node argv: {argv}")
        assert argv[-1] == "run", f"expected trailing run subcommand, got {argv}"
        assert ["--host", "127.0.0.1"] == argv[argv.index("--host") : argv.index("--host") + 2]
        return True
