"""
Pipeline orchestrator — the local CI run.

The orchestrator takes a toolchain selection, verifies generated files,
then runs every stage for each selected toolchain, collecting results
into a single report.

Flow:
    codegen check → stable stages → nightly stages → report

Codegen staleness and an unlaunchable toolchain abort the run: results
gathered against stale files or a missing compiler would be misleading.
Everything else is collected, so one run lists every failing step.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Literal

from xtask.adapters.base import Adapter
from xtask.core.engine.steps import execute_step, stages_for, standard_stages
from xtask.core.models.artifact import SyncOutcome
from xtask.core.models.config import XtaskConfig
from xtask.core.models.report import PipelineReport, ReportEntry
from xtask.core.models.step import PipelineStage, StepResult
from xtask.core.models.toolchain import ToolchainSpec
from xtask.core.services.renderer import RenderError
from xtask.core.services.toolchain import pinned_toolchains, resolve

logger = logging.getLogger(__name__)

Selection = Literal["all", "stable", "nightly"]

CodegenCheck = Callable[[], list[SyncOutcome]]


class PipelineOrchestrator:
    """Runs codegen verification and the per-toolchain stages.

    Args:
        config: Pinned versions for the run.
        project_root: Workspace root where commands run.
        adapter: Executes steps (ShellCommandAdapter in real runs).
        codegen_check: Returns the check-mode outcome of every generated
            artifact. May raise RenderError or OSError.
        stages: Stage layout; defaults to the standard stages.
    """

    def __init__(
        self,
        config: XtaskConfig,
        project_root: Path,
        adapter: Adapter,
        codegen_check: CodegenCheck,
        stages: list[PipelineStage] | None = None,
    ):
        self._config = config
        self._project_root = Path(project_root)
        self._adapter = adapter
        self._codegen_check = codegen_check
        self._stages = stages if stages is not None else standard_stages()

    @staticmethod
    def channels(selection: Selection, fast: bool) -> list[str]:
        """Toolchain channels a run visits, in order."""
        channels = []
        if selection in ("all", "stable"):
            channels.append("stable")
        if selection in ("all", "nightly") and not fast:
            channels.append("nightly")
        return channels

    def run(
        self,
        selection: Selection = "all",
        fast: bool = False,
        stable_override: str | None = None,
        nightly_override: str | None = None,
    ) -> PipelineReport:
        """Execute the pipeline and return its report. Never raises for
        step failures; those are recorded in the report."""
        report = PipelineReport()

        # ── Codegen verification ─────────────────────────────────
        if not self._verify_codegen(report):
            return report

        # ── Toolchain stages ─────────────────────────────────────
        pinned = pinned_toolchains(self._config)
        overrides = {"stable": stable_override, "nightly": nightly_override}

        for channel in self.channels(selection, fast):
            toolchain = resolve(pinned[channel], overrides[channel])

            probe = self._probe(toolchain)
            if probe.failed:
                report.abort(f"cannot launch {toolchain.label} toolchain: {probe.diagnostic}")
                logger.error("Aborting: %s", report.abort_reason)
                return report

            for stage in stages_for(channel, self._stages):
                logger.info("Stage %s on %s", stage.name, toolchain.label)
                for step in stage.steps:
                    result = execute_step(step, toolchain, fast, self._adapter, self._project_root)
                    report.append(ReportEntry(toolchain=toolchain, stage=stage.name, step=step, result=result))

        logger.info(
            "Pipeline finished: %d passed, %d failed, %d skipped",
            report.passed,
            len(report.failures),
            report.skipped,
        )
        return report

    def _probe(self, toolchain: ToolchainSpec) -> StepResult:
        try:
            return self._adapter.probe(toolchain, self._project_root)
        except Exception as e:
            logger.error("Adapter %s raised while probing %s: %s", self._adapter.name, toolchain.label, e)
            return StepResult.failure(diagnostic=f"Unexpected error: {e}", launch_error=True)

    def _verify_codegen(self, report: PipelineReport) -> bool:
        try:
            outcomes = self._codegen_check()
        except RenderError as e:
            report.abort(f"codegen failed: {e}")
            return False
        except OSError as e:
            report.abort(f"codegen could not read generated files: {e}")
            return False

        mismatches = [o for o in outcomes if o.mismatch]
        if mismatches:
            report.mismatches.extend(mismatches)
            report.abort(f"{len(mismatches)} generated file(s) are out of date")
            logger.error("Aborting: %s", report.abort_reason)
            return False

        logger.info("Codegen verified: %d file(s) up to date", len(outcomes))
        return True
