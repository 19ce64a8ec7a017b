"""
Readiness probe for a freshly launched node.
"""

import logging
import time
from collections.abc import Callable
from enum import Enum

import requests

from anvil_action.config.constants import (
    HEALTH_CHECK_DELAY,
    HEALTH_CHECK_RETRIES,
    HEALTH_CHECK_TIMEOUT,
)
from anvil_action.errors import HealthCheckError
from anvil_action.rpc import JsonRpcClient, RpcError

logger = logging.getLogger(__name__)


class ProbeState(str, Enum):
    Waiting = "waiting"
    Probing = "probing"
    Ready = "ready"
    Exhausted = "exhausted"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES = frozenset({ProbeState.Ready, ProbeState.Exhausted})


class ReadinessProbe:
    """
    Polls the node with ``eth_blockNumber`` until it answers or retries run out.

    Waiting --warmup--> Probing --healthy--> Ready
                        Probing --fault, attempts left--> (interval) Probing
                        Probing --fault, none left--> Exhausted

    The delay between attempts is fixed. Faults during probing are logged at
    debug level and never escape; only exhaustion raises.

    Usage:
        probe = ReadinessProbe("127.0.0.1", 8011)
        probe.run()
    """

    def __init__(
        self,
        host: str,
        port: int | str,
        retries: int = HEALTH_CHECK_RETRIES,
        warmup: float = HEALTH_CHECK_DELAY,
        interval: float = HEALTH_CHECK_DELAY,
        timeout: float = HEALTH_CHECK_TIMEOUT,
        sleep: Callable[[float], None] = time.sleep,
        rpc: JsonRpcClient | None = None,
    ):
        if retries < 1:
            raise ValueError(f"retries must be at least 1, got: {retries}")
        self.host = host
        self.port = port
        self.retries = retries
        self.warmup = warmup
        self.interval = interval
        self._sleep = sleep
        self.rpc = rpc or JsonRpcClient(f"http://{host}:{port}", name="probe", timeout=timeout)
        self.state = ProbeState.Waiting
        self.attempts = 0

    def check(self) -> bool:
        """Single probe. True iff the node replied with a result in time."""
        try:
            self.rpc.eth_blockNumber()
            return True
        except (requests.RequestException, RpcError) as e:
            logger.debug(f"Health check failed for {self.host}:{self.port} - {e}")
            return False

    def step(self) -> ProbeState:
        """Advance by one transition and return the new state."""
        if self.state == ProbeState.Waiting:
            self._sleep(self.warmup)
            self.state = ProbeState.Probing
        elif self.state == ProbeState.Probing:
            self.attempts += 1
            if self.check():
                logger.info(f"Health check passed on attempt {self.attempts}")
                self.state = ProbeState.Ready
            elif self.attempts >= self.retries:
                self.state = ProbeState.Exhausted
            else:
                logger.info(
                    f"Health check attempt {self.attempts} failed. "
                    f"Retrying in {self.interval}s..."
                )
                self._sleep(self.interval)
        return self.state

    def run(self) -> ProbeState:
        """
        Drive the probe to a terminal state.

        Raises:
            HealthCheckError: If every attempt failed
        """
        while self.state not in TERMINAL_STATES:
            self.step()
        if self.state == ProbeState.Exhausted:
            raise HealthCheckError(self.host, self.port, self.attempts)
        return self.state
