"""
GitHub Actions workflow generator.

Produces the CI workflow from the same stage list the local pipeline
runs, so ``xtask ci`` and CI execute identical commands:
- Toolchains pinned to the configured versions
- Stable stages on every platform, nightly stages on Linux only
- Dependency caching via rust-cache
- A codegen job that fails when generated files are stale
"""

from __future__ import annotations

from pathlib import Path

from xtask.core.engine.steps import standard_stages
from xtask.core.models.artifact import RenderedArtifact
from xtask.core.models.config import XtaskConfig
from xtask.core.models.step import PipelineStage

PLATFORMS = ("ubuntu-latest", "macos-latest", "windows-latest")
NIGHTLY_PLATFORMS = ("ubuntu-latest",)

CHECKOUT_ACTION = "actions/checkout@v4"
SETUP_PYTHON_ACTION = "actions/setup-python@v5"
RUST_TOOLCHAIN_ACTION = "dtolnay/rust-toolchain@master"
RUST_CACHE_ACTION = "Swatinem/rust-cache@v2"


def workflow_path(project_root: Path, name: str) -> Path:
    return Path(project_root) / ".github" / "workflows" / f"{name}.yml"


def _codegen_job(config: XtaskConfig) -> str:
    """Job that fails when any generated file is out of date."""
    return f"""\
  codegen:
    runs-on: ubuntu-latest
    steps:
      - uses: {CHECKOUT_ACTION}
      - uses: {SETUP_PYTHON_ACTION}
        with:
          python-version: "3.12"
      - run: {config.codegen.install_command}
      - run: {config.codegen.codegen_command}
"""


def _stage_job(stage: PipelineStage, platform: str, toolchain: str, udeps_version: str) -> str:
    """One stage on one platform: setup steps then one run per step."""
    steps: list[str] = []

    steps.append(f"      - uses: {CHECKOUT_ACTION}")

    toolchain_lines = [
        f"      - uses: {RUST_TOOLCHAIN_ACTION}",
        "        with:",
        f'          toolchain: "{toolchain}"',
    ]
    if stage.components:
        toolchain_lines.append(f"          components: {', '.join(stage.components)}")
    steps.append("\n".join(toolchain_lines))

    steps.append(f"      - uses: {RUST_CACHE_ACTION}")

    for crate in stage.installs:
        steps.append(f"      - run: cargo install {crate} --locked --version {udeps_version}")

    for step in stage.steps:
        steps.append(f"      - run: {step.display()}")

    steps_block = "\n".join(steps)
    return f"""\
  {stage.name}-{platform}:
    runs-on: {platform}
    steps:
{steps_block}
"""


def generate_workflow(
    config: XtaskConfig,
    project_root: Path,
    stages: list[PipelineStage] | None = None,
) -> RenderedArtifact:
    """Generate the CI workflow for the workspace.

    Args:
        config: Pinned versions and the workflow name.
        project_root: Workspace root.
        stages: Stage layout; defaults to the standard stages.

    Returns:
        RenderedArtifact destined for ``.github/workflows/<name>.yml``.
    """
    name = config.codegen.workflow_name
    versions = {"stable": config.toolchains.stable, "nightly": config.toolchains.nightly}

    job_blocks = [_codegen_job(config)]
    for stage in stages if stages is not None else standard_stages():
        platforms = NIGHTLY_PLATFORMS if stage.channel == "nightly" else PLATFORMS
        for platform in platforms:
            job_blocks.append(
                _stage_job(stage, platform, versions[stage.channel], config.toolchains.udeps)
            )

    header = f"""\
# This file was generated by xtask.
# Please do not edit! Run `xtask codegen` instead.
name: {name}

on:
  push:
  pull_request:

jobs:
"""
    return RenderedArtifact.from_text(
        header + "".join(job_blocks),
        workflow_path(project_root, name),
        reason="CI workflow",
    )
