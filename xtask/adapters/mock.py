"""
Mock adapter — test double for pipeline execution.

Simulates step execution without launching cargo. Configurable to
fail particular steps or to fail the toolchain probe.
"""

from __future__ import annotations

from pathlib import Path

from xtask.adapters.base import Adapter, ExecutionContext
from xtask.core.models.step import StepResult
from xtask.core.models.toolchain import ToolchainSpec


class MockAdapter(Adapter):
    """Mock adapter for testing.

    By default every step and every probe passes. Failures are keyed by
    step name, optionally narrowed to one toolchain version.
    """

    def __init__(self, adapter_name: str = "mock", available: bool = True):
        self._name = adapter_name
        self._available = available
        self._failures: dict[tuple[str, str | None], StepResult] = {}
        self._probe_failures: set[str] = set()
        self._call_log: list[ExecutionContext] = []
        self._probe_log: list[ToolchainSpec] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def probe_log(self) -> list[ToolchainSpec]:
        return self._probe_log

    def executed_steps(self) -> list[str]:
        """Step names in the order they were executed."""
        return [ctx.step.name for ctx in self._call_log]

    def is_available(self) -> bool:
        return self._available

    def set_failure(
        self,
        step_name: str,
        diagnostic: str = "Mock failure",
        exit_code: int = 1,
        toolchain: str | None = None,
    ) -> None:
        """Configure a step to fail, for every toolchain or just one."""
        self._failures[(step_name, toolchain)] = StepResult.failure(
            diagnostic=diagnostic,
            exit_code=exit_code,
        )

    def set_probe_failure(self, toolchain: str) -> None:
        """Make the probe for a toolchain version fail."""
        self._probe_failures.add(toolchain)

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> StepResult:
        self._call_log.append(context)
        command = context.command_line

        for key in ((context.step.name, context.toolchain.version), (context.step.name, None)):
            if key in self._failures:
                return self._failures[key].model_copy(update={"command": command})

        return StepResult.passed(command=command, output="[mock] executed", metadata={"mock": True})

    def probe(self, toolchain: ToolchainSpec, project_root: Path) -> StepResult:
        self._probe_log.append(toolchain)
        command = f"rustc {toolchain.toolchain_arg()} --version"
        if toolchain.version in self._probe_failures:
            return StepResult.failure(
                command=command,
                diagnostic=f"toolchain '{toolchain.version}' is not installed",
                launch_error=True,
            )
        return StepResult.passed(command=command)

    def reset(self) -> None:
        """Clear call logs and configured failures."""
        self._call_log.clear()
        self._probe_log.clear()
        self._failures.clear()
        self._probe_failures.clear()
