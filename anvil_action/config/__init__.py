"""
Input resolution and validation.
"""

from anvil_action.config.constants import (
    DEFAULTS,
    HEALTH_CHECK_DELAY,
    HEALTH_CHECK_RETRIES,
    HEALTH_CHECK_TIMEOUT,
    RELEASE_REPO,
    TOOL_NAME,
    Mode,
)
from anvil_action.config.inputs import (
    ActionInputs,
    ChainedConfigSource,
    ConfigSource,
    EnvConfigSource,
    MappingConfigSource,
    resolve_inputs,
)
from anvil_action.config.validate import parse_port, validate_inputs

__all__ = [
    # constants.py
    "DEFAULTS",
    "HEALTH_CHECK_DELAY",
    "HEALTH_CHECK_RETRIES",
    "HEALTH_CHECK_TIMEOUT",
    "RELEASE_REPO",
    "TOOL_NAME",
    "Mode",
    # inputs.py
    "ActionInputs",
    "ConfigSource",
    "EnvConfigSource",
    "MappingConfigSource",
    "ChainedConfigSource",
    "resolve_inputs",
    # validate.py
    "parse_port",
    "validate_inputs",
]
