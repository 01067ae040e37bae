"""
Pipeline steps — the standard stage layout and single-step execution.

The same stage list drives both the local ``xtask ci`` run and the
generated GitHub Actions workflow, so CI and local verification run the
same commands.
"""

from __future__ import annotations

import logging
from pathlib import Path

from xtask.adapters.base import Adapter, ExecutionContext
from xtask.core.models.step import PipelineStage, PipelineStep, StepKind, StepResult
from xtask.core.models.toolchain import ToolchainSpec

logger = logging.getLogger(__name__)

FAST_MODE_REASON = "fast mode"

STEPS: dict[StepKind, PipelineStep] = {
    StepKind.LINT: PipelineStep(
        kind=StepKind.LINT,
        name="clippy",
        args=("clippy", "--all-targets", "--", "-D", "warnings", "-D", "clippy::all"),
    ),
    StepKind.TEST: PipelineStep(kind=StepKind.TEST, name="test", args=("test",)),
    StepKind.BUILD: PipelineStep(kind=StepKind.BUILD, name="build", args=("build", "--all-targets")),
    StepKind.DOC: PipelineStep(kind=StepKind.DOC, name="doc", args=("doc",), slow=True),
    StepKind.RELEASE_TEST: PipelineStep(
        kind=StepKind.RELEASE_TEST,
        name="release-test",
        args=("test", "--benches", "--tests", "--release"),
        slow=True,
    ),
    StepKind.FMT: PipelineStep(
        kind=StepKind.FMT,
        name="fmt",
        args=("fmt", "--all", "--", "--check"),
    ),
    StepKind.UDEPS: PipelineStep(
        kind=StepKind.UDEPS,
        name="udeps",
        args=("udeps", "--all-targets"),
        slow=True,
        nightly_only=True,
    ),
}


def standard_stages() -> list[PipelineStage]:
    """Stable tests, stable release tests, then nightly lints."""
    return [
        PipelineStage(
            name="tests",
            channel="stable",
            steps=(
                STEPS[StepKind.LINT],
                STEPS[StepKind.TEST],
                STEPS[StepKind.BUILD],
                STEPS[StepKind.DOC],
            ),
            components=("clippy",),
        ),
        PipelineStage(
            name="release-tests",
            channel="stable",
            steps=(STEPS[StepKind.RELEASE_TEST],),
        ),
        PipelineStage(
            name="lints",
            channel="nightly",
            steps=(STEPS[StepKind.FMT], STEPS[StepKind.UDEPS]),
            installs=("cargo-udeps",),
            components=("rustfmt",),
        ),
    ]


def stages_for(channel: str, stages: list[PipelineStage] | None = None) -> list[PipelineStage]:
    """The stages belonging to one toolchain channel, in declared order."""
    return [s for s in (stages if stages is not None else standard_stages()) if s.channel == channel]


def execute_step(
    step: PipelineStep,
    toolchain: ToolchainSpec,
    fast: bool,
    adapter: Adapter,
    project_root: Path,
) -> StepResult:
    """Run one step against a toolchain and classify the outcome.

    Slow steps are skipped in fast mode without invoking the adapter.
    Nightly-only steps are skipped on non-nightly toolchains. Anything
    the adapter raises is folded into a failed result.
    """
    context = ExecutionContext(step=step, toolchain=toolchain, project_root=project_root)

    if fast and step.slow:
        logger.debug("Skipping %s: %s", step.name, FAST_MODE_REASON)
        return StepResult.skip(FAST_MODE_REASON, command=context.command_line)

    if step.nightly_only and not toolchain.is_nightly:
        return StepResult.skip("nightly only", command=context.command_line)

    logger.info("Running %s on %s", step.name, toolchain.label)
    try:
        return adapter.execute(context)
    except Exception as e:
        # Adapters should never raise
        logger.error("Adapter %s raised during %s: %s", adapter.name, step.name, e)
        return StepResult.failure(
            command=context.command_line,
            diagnostic=f"Unexpected error: {e}",
            launch_error=True,
        )
