"""
Service wrapper extending flexitest.service.ProcService for detached processes.

The launcher starts the node and walks away from it: the process runs in its
own session, nothing waits on it and nothing kills it at exit.
"""

import logging
import os
import subprocess
import threading
from typing import IO, Any

import flexitest

from anvil_action.errors import LaunchError


def _popen_detach_kwargs() -> dict[str, Any]:
    if os.name == "nt":
        flags = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
        return {"creationflags": flags}
    return {"start_new_session": True}


def _forward_lines(stream: IO[str], logger: logging.Logger, level: int) -> None:
    with stream:
        for line in stream:
            logger.log(level, line.rstrip("\n"))


class DetachedProcService(flexitest.service.ProcService):
    """
    ProcService whose process outlives the caller.

    Output goes to ``stdout`` when it is a log file path, to this service's
    logger when ``forward_output`` is set (stdout at INFO, stderr at ERROR),
    and is discarded otherwise.

    Usage:
        svc = DetachedProcService({}, ["anvil-zksync", "run"], name="anvil")
        svc.start()
        svc.release()
    """

    def __init__(
        self,
        props: dict[str, Any],
        cmd: list[str],
        stdout: str | None = None,
        name: str | None = None,
        env: dict[str, str] | None = None,
        forward_output: bool = False,
    ):
        """
        Args:
            props: Service properties (ports, URLs, etc.)
            cmd: Command and arguments to execute
            stdout: Path to log file for stdout/stderr
            name: Service name for logging
            env: Environment for the process, inherited when None
            forward_output: Forward output lines to the logger
        """
        super().__init__(props, cmd, stdout)
        self._name = name or os.path.basename(cmd[0])
        self._env = env
        self._forward_output = forward_output
        self._logger = logging.getLogger(f"service.{self._name}")
        self.pid: int | None = None

    def start(self):
        """
        Spawn the process in the background.

        Raises:
            LaunchError: If the executable cannot be started
        """
        if self.is_started():
            raise RuntimeError("already running")

        self._reset_state()

        kwargs: dict[str, Any] = _popen_detach_kwargs()
        kwargs["stdin"] = subprocess.DEVNULL
        logfile = None
        if isinstance(self.stdout, str):
            logfile = open(self.stdout, "a")  # noqa: SIM115
            logfile.write(f"(process started as: {self.cmd})\n")
            logfile.flush()
            kwargs["stdout"] = logfile
            kwargs["stderr"] = logfile
        elif self._forward_output:
            kwargs["stdout"] = subprocess.PIPE
            kwargs["stderr"] = subprocess.PIPE
            kwargs["text"] = True
        else:
            kwargs["stdout"] = subprocess.DEVNULL
            kwargs["stderr"] = subprocess.DEVNULL

        if self._env is not None:
            kwargs["env"] = self._env

        try:
            p = subprocess.Popen(self.cmd, **kwargs)
        except OSError as e:
            raise LaunchError(f"Failed to start {self._name} ({self.cmd[0]}): {e}") from e
        finally:
            # The child holds its own descriptor
            if logfile is not None:
                logfile.close()

        if self._forward_output and logfile is None:
            for stream, level in ((p.stdout, logging.INFO), (p.stderr, logging.ERROR)):
                threading.Thread(
                    target=_forward_lines,
                    args=(stream, self._logger, level),
                    name=f"{self._name}-output",
                    daemon=True,
                ).start()

        self.proc = p
        self.pid = p.pid
        self._update_status_msg()
        self._logger.info(f"started {self._name} (pid {p.pid})")

    def check_status(self) -> bool:
        """True while we still hold the handle and the process is alive."""
        return self.proc is not None and self.proc.poll() is None

    def release(self) -> None:
        """
        Hand the process over to the host environment.

        Drops the handle without waiting or signalling; from here on the
        process lifetime belongs to the surrounding job.
        """
        if self.proc is None:
            return
        self._logger.debug(f"releasing {self._name} (pid {self.pid})")
        self.proc = None
