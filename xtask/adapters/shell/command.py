"""
Shell command adapter — run cargo/rustc and capture their output.

Commands are run as argv lists (no shell), synchronously, in the
workspace root. Exit status decides pass or fail.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path

from xtask.adapters.base import Adapter, ExecutionContext
from xtask.core.models.step import StepResult
from xtask.core.models.toolchain import ToolchainSpec

logger = logging.getLogger(__name__)


def _diagnostic(stderr: str, returncode: int) -> str:
    stderr = stderr.strip()
    tail = f"exit code {returncode}"
    return f"{stderr}\n({tail})" if stderr else tail


class ShellCommandAdapter(Adapter):
    """Execute pipeline steps as external processes.

    Args:
        timeout: Optional per-command timeout in seconds. None waits forever.
    """

    def __init__(self, timeout: float | None = None):
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self) -> bool:
        return shutil.which("cargo") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.step.program:
            return False, "Missing program for step"
        if not Path(context.project_root).is_dir():
            return False, f"Working directory does not exist: {context.project_root}"
        return True, ""

    def execute(self, context: ExecutionContext) -> StepResult:
        valid, error = self.validate(context)
        if not valid:
            return StepResult.failure(command=context.command_line, diagnostic=error, launch_error=True)
        return self._run(context.argv, Path(context.project_root), context.timeout or self._timeout)

    def probe(self, toolchain: ToolchainSpec, project_root: Path) -> StepResult:
        return self._run(["rustc", toolchain.toolchain_arg(), "--version"], Path(project_root), self._timeout)

    def _run(self, argv: list[str], cwd: Path, timeout: float | None) -> StepResult:
        command = " ".join(argv)
        logger.debug("Executing: %s (cwd=%s)", command, cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return StepResult.failure(
                command=command,
                diagnostic=f"Command timed out after {timeout}s",
                launch_error=True,
            )
        except OSError as e:
            # Missing binary, permission denied, bad cwd
            logger.warning("Could not launch %s: %s", argv[0], e)
            return StepResult.failure(
                command=command,
                diagnostic=f"Could not launch '{argv[0]}': {e}",
                launch_error=True,
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.returncode == 0:
            return StepResult.passed(
                command=command,
                output=result.stdout.strip(),
                duration_ms=elapsed_ms,
            )

        logger.info("%s exited with %d", command, result.returncode)
        return StepResult.failure(
            command=command,
            diagnostic=_diagnostic(result.stderr, result.returncode),
            exit_code=result.returncode,
            output=result.stdout.strip(),
            duration_ms=elapsed_ms,
        )
