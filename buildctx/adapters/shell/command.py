"""
Shell command adapter — run a command inside a project directory.

Commands never raise: the outcome, including timeouts and spawn
errors, is captured in a CommandReceipt.
"""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path
from typing import Literal

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class CommandReceipt(BaseModel):
    """Result of one command run in one project."""

    app: str
    command: str
    cwd: str
    status: Literal["ok", "failed"] = "ok"
    return_code: int | None = None
    duration_ms: int = 0
    output: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def run_command(command: str, cwd: Path, app: str, timeout: int = 300) -> CommandReceipt:
    """Run ``command`` through the shell in ``cwd``.

    Args:
        command: Shell command line.
        cwd: Working directory.
        app: Project the command runs for (recorded on the receipt).
        timeout: Seconds before the command is killed.
    """
    logger.debug("Executing: %s (cwd=%s)", command, cwd)
    start = time.monotonic()

    try:
        result = subprocess.run(
            command,
            shell=True,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return CommandReceipt(
            app=app, command=command, cwd=str(cwd), status="failed",
            error=f"Command timed out after {timeout}s",
        )
    except OSError as e:
        return CommandReceipt(
            app=app, command=command, cwd=str(cwd), status="failed",
            error=f"Command execution error: {e}",
        )

    elapsed_ms = int((time.monotonic() - start) * 1000)
    output = result.stdout.strip()
    stderr = result.stderr.strip()

    if result.returncode == 0:
        return CommandReceipt(
            app=app, command=command, cwd=str(cwd),
            return_code=0, duration_ms=elapsed_ms, output=output,
        )

    return CommandReceipt(
        app=app, command=command, cwd=str(cwd), status="failed",
        return_code=result.returncode, duration_ms=elapsed_ms, output=output,
        error=stderr or f"Command exited with code {result.returncode}",
    )
