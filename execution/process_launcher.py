"""
Process Launcher
================
Runs the external collector and reports how it ended.

The child inherits stdin/stdout/stderr, so the collector's own output shows
up in the runner's terminal or journal. The call blocks until the child
exits; there is no timeout, so a hung collector hangs the runner.
"""

import os
import shlex
import subprocess
from typing import Dict, Optional, Protocol

from core.types import Invocation
from observability.logger import get_logger
from utils.errors import LaunchError

logger = get_logger("execution.process_launcher")


class ProcessLauncher(Protocol):
    """Port: run an invocation to completion and return its exit status."""

    def launch(self, invocation: Invocation) -> int:
        """
        Returns the exit status (0 = success).

        Raises:
            LaunchError: the program could not be started.
        """
        ...


class SubprocessLauncher:
    """Launches invocations with subprocess, inheriting the standard streams."""

    def __init__(self, env: Optional[Dict[str, str]] = None):
        self.env = {**os.environ, **(env or {})}

    def launch(self, invocation: Invocation) -> int:
        argv = list(invocation.argv)
        logger.debug("[RUN] " + " ".join(shlex.quote(s) for s in argv))

        try:
            completed = subprocess.run(argv, env=self.env)
        except OSError as e:
            # FileNotFoundError / PermissionError included
            raise LaunchError(
                f"Could not start {invocation.program}: {e}",
                program=invocation.program,
                operation="launch",
                cause=e,
            ) from e

        logger.debug(f"{invocation.program} exited with {completed.returncode}")
        return completed.returncode
