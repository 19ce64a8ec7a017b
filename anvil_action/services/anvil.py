"""
anvil-zksync service wrapper and the fire-and-forget launcher.
"""

import logging
from typing import TypedDict

from anvil_action.args import format_command
from anvil_action.config.constants import TOOL_NAME
from anvil_action.rpc import JsonRpcClient
from anvil_action.services.base import DetachedProcService

logger = logging.getLogger(__name__)


class AnvilProps(TypedDict):
    """Properties for the anvil-zksync service."""

    host: str
    port: int
    rpc_url: str


class AnvilService(DetachedProcService):
    """
    Detached anvil-zksync node with an Ethereum JSON-RPC endpoint.
    """

    props: AnvilProps

    def create_rpc(self, timeout: float = 30) -> JsonRpcClient:
        return JsonRpcClient(self.props["rpc_url"], name=self._name, timeout=timeout)

    def _rpc_health_check(self, rpc: JsonRpcClient):
        """Check health by calling eth_blockNumber."""
        rpc.eth_blockNumber()

    def check_health(self) -> bool:
        if not self.check_status():
            return False
        try:
            self._rpc_health_check(self.create_rpc(timeout=3))
            return True
        except Exception as e:
            self._logger.debug(f"health check failed: {e}")
            return False

    def get_block_number(self) -> int:
        return int(self.create_rpc().eth_blockNumber(), 16)


def make_service(
    executable: str,
    args: list[str],
    host: str,
    port: int,
    stdout: str | None = None,
    forward_output: bool = False,
) -> AnvilService:
    props: AnvilProps = {
        "host": host,
        "port": port,
        "rpc_url": f"http://{host}:{port}",
    }
    return AnvilService(
        dict(props),
        [executable, *args],
        stdout=stdout,
        name=TOOL_NAME,
        forward_output=forward_output,
    )


def launch(
    executable: str,
    args: list[str],
    host: str = "127.0.0.1",
    port: int = 8011,
    stdout: str | None = None,
    forward_output: bool = False,
) -> None:
    """
    Start the node in the background and return immediately.

    The process handle is released right after spawning; the node keeps
    running after this process exits.

    Raises:
        LaunchError: If the binary cannot be started
    """
    logger.info(f"Starting {TOOL_NAME} with args: {format_command(executable, args)}")
    svc = make_service(executable, args, host, port, stdout, forward_output)
    svc.start()
    svc.release()
