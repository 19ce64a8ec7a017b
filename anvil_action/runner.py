"""
The launch sequence: inputs, tool, command line, process, readiness.
"""

import logging

from anvil_action.args import build_args
from anvil_action.config import ConfigSource, resolve_inputs, validate_inputs
from anvil_action.config.constants import HEALTH_CHECK_TIMEOUT, TOOL_NAME
from anvil_action.config.validate import parse_port
from anvil_action.services import launch
from anvil_action.tool_cache import ToolProvisioner
from anvil_action.wait import ReadinessProbe

logger = logging.getLogger(__name__)


def run(
    source: ConfigSource,
    provisioner: ToolProvisioner | None = None,
    probe_cls: type[ReadinessProbe] = ReadinessProbe,
) -> None:
    """
    Provision, start and probe the node described by ``source``.

    Any stage failure aborts the rest of the sequence; nothing already done
    (e.g. a cached download) is rolled back.
    """
    inputs = resolve_inputs(source)
    logger.debug(f"Resolved inputs:\n{inputs.as_toml_string()}")
    validate_inputs(inputs)

    provisioner = provisioner or ToolProvisioner()
    tool_dir = provisioner.provision(inputs.release_tag, inputs.target)

    args = build_args(inputs)
    logger.debug(f"Constructed command-line arguments: {' '.join(args)}")

    port = parse_port(inputs.port)
    executable = str(provisioner.binary_path(tool_dir))
    launch(executable, args, host=inputs.host, port=port)

    probe = probe_cls(
        inputs.host,
        port,
        retries=int(inputs.health_check_retries),
        warmup=float(inputs.health_check_warmup),
        interval=float(inputs.health_check_interval),
        timeout=HEALTH_CHECK_TIMEOUT,
    )
    probe.run()

    logger.info(f"{TOOL_NAME} started successfully on {inputs.host}:{inputs.port}")
