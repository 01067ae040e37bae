"""
Adapter base — the protocol contract between the pipeline and tools.

This defines the abstract interface that every adapter must implement.
The orchestrator only talks to external tools through this protocol.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from xtask.core.models.step import PipelineStep, StepResult
from xtask.core.models.toolchain import ToolchainSpec


class ExecutionContext(BaseModel):
    """Everything an adapter needs to run one step.

    The step to run, the toolchain it is pinned to, and the workspace
    root the command runs in.
    """

    model_config = ConfigDict(frozen=True)

    step: PipelineStep
    toolchain: ToolchainSpec
    project_root: Path = Path(".")
    timeout: float | None = None

    @property
    def argv(self) -> list[str]:
        """Full command line, toolchain included."""
        return self.step.command(self.toolchain.toolchain_arg())

    @property
    def command_line(self) -> str:
        return " ".join(self.argv)


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform external side effects and return step results.
    They NEVER raise exceptions — failures are captured in the result.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the adapter's underlying tool can be found.

        Should be fast and never raise.
        """

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the step can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> StepResult:
        """Run the step and return its result.

        MUST never raise exceptions. Non-zero exits and launch failures
        are captured in the StepResult with status='failed'.
        """

    @abstractmethod
    def probe(self, toolchain: ToolchainSpec, project_root: Path) -> StepResult:
        """Check that ``toolchain`` can be launched at all.

        A failed probe means every step for that toolchain would fail
        for the same reason.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
