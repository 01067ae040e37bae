"""
Step and StepResult models — the execution contract.

Steps describe one external command the pipeline runs. Results capture
what happened. This is the I/O contract between the orchestrator and
adapters: the orchestrator sends steps, adapters return results. Never
exceptions.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from xtask.core.models.toolchain import Channel


class StepKind(str, Enum):
    """The kinds of verification a pipeline knows how to run."""

    FMT = "fmt"
    LINT = "lint"
    TEST = "test"
    BUILD = "build"
    DOC = "doc"
    RELEASE_TEST = "release_test"
    UDEPS = "udeps"


class PipelineStep(BaseModel):
    """One externally observable unit of verification.

    ``argv`` is the cargo sub-command and its arguments; the toolchain
    is spliced in at execution time (``cargo +<version> <argv...>``).
    """

    model_config = ConfigDict(frozen=True)

    kind: StepKind
    name: str
    program: str = "cargo"
    args: tuple[str, ...] = ()
    slow: bool = False
    nightly_only: bool = False

    def command(self, toolchain_arg: str | None = None) -> list[str]:
        """Full argv for this step, optionally pinned to a toolchain."""
        argv = [self.program]
        if toolchain_arg:
            argv.append(toolchain_arg)
        argv.extend(self.args)
        return argv

    def display(self) -> str:
        """The command as written in the CI workflow."""
        return " ".join([self.program, *self.args])


class PipelineStage(BaseModel):
    """A named, ordered group of steps run against one toolchain channel."""

    model_config = ConfigDict(frozen=True)

    name: str
    channel: Channel
    steps: tuple[PipelineStep, ...] = ()
    installs: tuple[str, ...] = ()     # cargo crates installed in CI before the steps
    components: tuple[str, ...] = ()   # rustup components the stage needs


class StepResult(BaseModel):
    """Outcome of a pipeline step.

    Adapters NEVER raise — failures, including failure to launch the
    process at all, are captured here.
    """

    status: Literal["passed", "failed", "skipped"] = "passed"
    command: str = ""
    exit_code: int | None = None
    diagnostic: str = ""
    reason: str = ""
    output: str = ""
    duration_ms: int = 0
    launch_error: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "passed"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @classmethod
    def passed(cls, command: str = "", output: str = "", **kwargs: Any) -> StepResult:
        """Create a passed result."""
        return cls(status="passed", command=command, output=output, exit_code=0, **kwargs)

    @classmethod
    def failure(
        cls,
        command: str = "",
        diagnostic: str = "",
        exit_code: int | None = None,
        **kwargs: Any,
    ) -> StepResult:
        """Create a failed result."""
        return cls(
            status="failed",
            command=command,
            diagnostic=diagnostic,
            exit_code=exit_code,
            **kwargs,
        )

    @classmethod
    def skip(cls, reason: str, command: str = "", **kwargs: Any) -> StepResult:
        """Create a skipped result."""
        return cls(status="skipped", command=command, reason=reason, **kwargs)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", exclude={"output"})
