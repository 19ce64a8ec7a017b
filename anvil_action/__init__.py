"""
Provisions an anvil-zksync node for a CI job, starts it in the background and
waits until it answers JSON-RPC.
"""

from .args import build_args
from .config import ActionInputs, resolve_inputs, validate_inputs
from .errors import (
    ActionError,
    AssetNotFoundError,
    ConfigurationError,
    HealthCheckError,
    LaunchError,
    ReleaseLookupError,
)
from .rpc import JsonRpcClient, RpcError
from .runner import run
from .services import launch
from .tool_cache import ToolProvisioner
from .wait import ProbeState, ReadinessProbe

__all__ = [
    "ActionInputs",
    "resolve_inputs",
    "validate_inputs",
    "build_args",
    "ToolProvisioner",
    "launch",
    "ReadinessProbe",
    "ProbeState",
    "run",
    "JsonRpcClient",
    "RpcError",
    "ActionError",
    "ConfigurationError",
    "ReleaseLookupError",
    "AssetNotFoundError",
    "LaunchError",
    "HealthCheckError",
]
