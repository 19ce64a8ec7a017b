"""
Consistency checks over resolved inputs.
"""

import math

from anvil_action.config.constants import Mode
from anvil_action.config.inputs import ActionInputs
from anvil_action.errors import ConfigurationError

VALID_MODES = tuple(m.value for m in Mode)


def parse_port(raw: str) -> int | None:
    """Port as an int, or ``None`` when it is not an integer in 1..65535."""
    try:
        port = int(raw)
    except (TypeError, ValueError):
        return None
    if not 1 <= port <= 65535:
        return None
    return port


def _parse_non_negative(raw: str, cast):
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def validate_inputs(inputs: ActionInputs) -> None:
    """
    Reject inputs that cannot produce a launchable node.

    Raises:
        ConfigurationError: On the first violated condition.
    """
    if inputs.mode not in VALID_MODES:
        raise ConfigurationError(
            f"Invalid mode '{inputs.mode}'. Valid options: {', '.join(VALID_MODES)}"
        )

    if parse_port(inputs.port) is None:
        raise ConfigurationError(f"Invalid port '{inputs.port}'. Must be between 1 and 65535.")

    if inputs.mode == Mode.Fork and not inputs.fork_url:
        raise ConfigurationError("forkUrl is required when mode is set to 'fork'.")

    if _parse_non_negative(inputs.verbosity, int) is None:
        raise ConfigurationError(
            f"Invalid verbosity '{inputs.verbosity}'. Must be a non-negative integer."
        )

    retries = _parse_non_negative(inputs.health_check_retries, int)
    if not retries:
        raise ConfigurationError(
            f"Invalid healthCheckRetries '{inputs.health_check_retries}'. "
            f"Must be a positive integer."
        )

    for name, raw in (
        ("healthCheckWarmup", inputs.health_check_warmup),
        ("healthCheckInterval", inputs.health_check_interval),
    ):
        if _parse_non_negative(raw, float) is None:
            raise ConfigurationError(f"Invalid {name} '{raw}'. Must be a non-negative number.")
