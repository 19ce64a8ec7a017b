"""
anvil-zksync node factory.
Runs the launcher's stages against a pre-seeded tool cache holding the stand-in node.
"""

import contextlib
from pathlib import Path

import flexitest

from anvil_action.args import build_args
from anvil_action.config import MappingConfigSource, resolve_inputs, validate_inputs
from anvil_action.config.constants import TOOL_NAME
from anvil_action.services import AnvilService, make_service
from anvil_action.tool_cache import ToolCache, ToolProvisioner
from anvil_action.wait import ReadinessProbe

FAKE_NODE_DIR = Path(__file__).resolve().parent.parent / "fake_node"
FAKE_VERSION = "v0.0.0-functional"


class AnvilFactory(flexitest.Factory):
    """
    Factory for creating anvil-zksync nodes.

    Usage:
        factory = AnvilFactory(range(18011, 18111))
        node = factory.create_node({"mode": "run"})
        rpc = node.create_rpc()
    """

    def __init__(self, port_range: range):
        ports = list(port_range)
        if any(p < 1024 or p > 65535 for p in ports):
            raise ValueError(
                f"AnvilFactory: Port range must be between 1024 and 65535. "
                f"Got: {port_range.start}-{port_range.stop - 1}"
            )
        super().__init__(ports)

    @flexitest.with_ectx("ctx")
    def create_node(self, inputs: dict[str, str] | None = None, **kwargs) -> AnvilService:
        """
        Resolve ``inputs``, provision the stand-in binary, start it and probe it.

        The port is always taken from the factory's range.
        """
        ctx: flexitest.EnvContext = kwargs["ctx"]

        datadir = Path(ctx.make_service_dir(TOOL_NAME))
        port = self.next_port()
        logfile = datadir / "service.log"

        raw = dict(inputs or {})
        raw.update(
            releaseTag=FAKE_VERSION,
            port=str(port),
            healthCheckWarmup="0.5",
            healthCheckInterval="1",
        )
        record = resolve_inputs(MappingConfigSource(raw))
        validate_inputs(record)

        cache = ToolCache(datadir / "toolcache")
        cache.cache_dir(FAKE_NODE_DIR, TOOL_NAME, FAKE_VERSION)
        provisioner = ToolProvisioner(cache=cache, workdir=datadir)
        tool_dir = provisioner.provision(record.release_tag, record.target)

        svc = make_service(
            str(provisioner.binary_path(tool_dir)),
            build_args(record),
            record.host,
            port,
            stdout=str(logfile),
        )
        svc.stop_timeout = 10
        try:
            svc.start()
            ReadinessProbe(
                record.host,
                port,
                retries=int(record.health_check_retries),
                warmup=float(record.health_check_warmup),
                interval=float(record.health_check_interval),
            ).run()
        except Exception as e:
            # Ensure cleanup on failure to prevent resource leaks
            with contextlib.suppress(Exception):
                svc.stop()
            raise RuntimeError(f"Failed to start {TOOL_NAME} on port {port}: {e}") from e

        return svc
