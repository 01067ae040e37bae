"""
Codegen use case — regenerate or verify every derived file.

Collects the READMEs, boilerplate and CI workflow, then pushes all of
them through the synchronizer with one mode. In check mode every stale
file is reported, not just the first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from xtask.core.models.artifact import RenderedArtifact, SyncMode, SyncOutcome
from xtask.core.models.config import XtaskConfig
from xtask.core.services.boilerplate import generate_open_source_files
from xtask.core.services.generators.github_workflow import generate_workflow
from xtask.core.services.renderer import render_readme
from xtask.core.services.sync import synchronize_all

logger = logging.getLogger(__name__)


@dataclass
class CodegenResult:
    """Outcome of one codegen invocation."""

    mode: SyncMode = SyncMode.WRITE
    outcomes: list[SyncOutcome] = field(default_factory=list)

    @property
    def mismatches(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if o.mismatch]

    @property
    def written(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if o.written]

    @property
    def ok(self) -> bool:
        return not self.mismatches

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "ok": self.ok,
            "files": [o.to_dict() for o in self.outcomes],
            "mismatches": [str(o.path) for o in self.mismatches],
        }


def collect_artifacts(
    config: XtaskConfig,
    project_root: Path,
    today: date | None = None,
) -> list[RenderedArtifact]:
    """Render every generated file for the workspace.

    Raises:
        RenderError: If a README template is malformed or includes a
            missing file. Nothing is synchronized in that case.
    """
    root = Path(project_root)
    artifacts: list[RenderedArtifact] = []

    for readme_dir in config.codegen.readme_dirs:
        artifacts.append(render_readme(root / readme_dir))

    artifacts.extend(generate_open_source_files(config, root, today=today))
    artifacts.append(generate_workflow(config, root))
    return artifacts


def run_codegen(
    config: XtaskConfig,
    project_root: Path,
    mode: SyncMode,
    today: date | None = None,
) -> CodegenResult:
    """Render every artifact, then write or check all of them.

    Rendering happens before any file is touched, so a render error
    leaves the workspace as it was.
    """
    artifacts = collect_artifacts(config, project_root, today=today)
    outcomes = synchronize_all(artifacts, mode)

    result = CodegenResult(mode=mode, outcomes=outcomes)
    logger.info(
        "Codegen (%s): %d file(s), %d written, %d stale",
        mode.value,
        len(outcomes),
        len(result.written),
        len(result.mismatches),
    )
    return result
