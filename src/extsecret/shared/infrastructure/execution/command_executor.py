"""
Command Executor Service.

Runs the external CLIs (vault, gcloud) that some secret editors drive.
Handles timeouts and output capturing. Arguments can carry secret values, so
only the program name is ever logged.
"""

import os
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path

from extsecret.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Result of a command execution."""
    command: str
    exit_code: int
    stdout: str
    stderr: str
    duration: float
    is_timeout: bool = False

    @property
    def is_success(self) -> bool:
        """Check if command succeeded."""
        return self.exit_code == 0 and not self.is_timeout


class CommandExecutor:
    """
    Command executor wrapper.
    """

    def __init__(self, default_timeout: float = 60.0):
        self.default_timeout = default_timeout

    def run(
        self,
        args: list[str],
        input_text: str | None = None,
        cwd: str | Path | None = None,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        """
        Execute a command.

        Args:
            args: Program and arguments
            input_text: Text written to the process stdin
            cwd: Working directory
            env: Environment variables (merges with os.environ)
            timeout: Execution timeout in seconds

        Returns:
            CommandResult object
        """
        start_time = time.perf_counter()
        timeout_val = timeout if timeout is not None else self.default_timeout
        program = args[0] if args else ""

        run_env = os.environ.copy()
        if env:
            run_env.update(env)

        logger.debug("executing_command", program=program, cwd=str(cwd) if cwd else "cwd", timeout=timeout_val)

        try:
            completed = subprocess.run(
                args,
                input=input_text,
                capture_output=True,
                text=True,
                cwd=cwd,
                env=run_env,
                timeout=timeout_val,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning("command_timeout", program=program, timeout=timeout_val)
            return CommandResult(
                command=program,
                exit_code=-1,
                stdout="",
                stderr="Command timed out",
                duration=time.perf_counter() - start_time,
                is_timeout=True,
            )
        except OSError as e:
            logger.error("command_execution_error", program=program, error=str(e))
            return CommandResult(
                command=program,
                exit_code=-2,
                stdout="",
                stderr=f"Execution error: {e!s}",
                duration=time.perf_counter() - start_time,
            )

        duration = time.perf_counter() - start_time
        if completed.returncode != 0:
            logger.warning("command_failed", program=program, exit_code=completed.returncode)
        else:
            logger.debug("command_success", program=program, duration=duration)

        return CommandResult(
            command=program,
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            duration=duration,
        )
