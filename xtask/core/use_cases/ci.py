"""
CI use case — run the local pipeline end to end.

Wires configuration, codegen verification and the adapter into a
PipelineOrchestrator and returns its report.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from xtask.adapters.base import Adapter
from xtask.adapters.shell.command import ShellCommandAdapter
from xtask.core.engine.pipeline import PipelineOrchestrator, Selection
from xtask.core.models.artifact import SyncMode
from xtask.core.models.config import XtaskConfig
from xtask.core.models.report import PipelineReport
from xtask.core.use_cases.codegen import run_codegen

logger = logging.getLogger(__name__)


def run_ci(
    config: XtaskConfig,
    project_root: Path,
    selection: Selection = "all",
    fast: bool = False,
    stable_override: str | None = None,
    nightly_override: str | None = None,
    adapter: Adapter | None = None,
    today: date | None = None,
) -> PipelineReport:
    """Run codegen verification and the selected toolchain stages.

    Args:
        config: Pinned versions and codegen settings.
        project_root: Workspace root.
        selection: ``all`` (stable then nightly), ``stable`` or ``nightly``.
        fast: Skip slow steps and the nightly stages.
        stable_override: Replaces the pinned stable version for this run.
        nightly_override: Replaces the pinned nightly version for this run.
        adapter: Step executor (default: real subprocesses).
        today: Date for copyright ranges during the codegen check.

    Returns:
        PipelineReport for the run.
    """
    root = Path(project_root)

    def codegen_check():
        return run_codegen(config, root, SyncMode.CHECK, today=today).outcomes

    orchestrator = PipelineOrchestrator(
        config=config,
        project_root=root,
        adapter=adapter or ShellCommandAdapter(),
        codegen_check=codegen_check,
    )
    logger.debug("Running CI selection=%s fast=%s in %s", selection, fast, root)
    return orchestrator.run(
        selection=selection,
        fast=fast,
        stable_override=stable_override,
        nightly_override=nightly_override,
    )
