"""
Error kinds surfaced by the launcher.

Every error here is fatal for the run; the entry point reports its message as
the single failure line of the job.
"""


class ActionError(Exception):
    """Base class for all launcher failures."""


class ConfigurationError(ActionError):
    """Raised when the resolved inputs cannot describe a launchable node."""


class ReleaseLookupError(ActionError):
    """Raised when the release registry cannot describe the requested tag."""


class AssetNotFoundError(ActionError):
    """Raised when no release asset matches the requested platform target."""

    def __init__(self, target: str, tag: str, available: list[str]):
        self.target = target
        self.tag = tag
        self.available = available
        super().__init__(
            f"Asset with architecture {target} not found for tag {tag}. "
            f"Available assets: {', '.join(available) or 'none'}"
        )


class LaunchError(ActionError):
    """Raised when the node process could not be spawned."""


class HealthCheckError(ActionError):
    """Raised when the node never answered the readiness probe."""

    def __init__(self, host: str, port: str | int, attempts: int):
        self.host = host
        self.port = port
        self.attempts = attempts
        super().__init__(
            f"Health check failed: anvil-zksync is not running on {host}:{port} "
            f"(after {attempts} attempts)."
        )
