"""
Domain models — Pydantic types for xtask.

All models are re-exported here for convenient access:

    from xtask.core.models import XtaskConfig, ToolchainSpec, StepResult, PipelineReport
"""

from xtask.core.models.artifact import RenderedArtifact, SyncMode, SyncOutcome
from xtask.core.models.config import CodegenConfig, ToolchainConfig, XtaskConfig
from xtask.core.models.report import PipelineReport, ReportEntry
from xtask.core.models.step import PipelineStage, PipelineStep, StepKind, StepResult
from xtask.core.models.toolchain import ToolchainSpec

__all__ = [
    "CodegenConfig",
    "PipelineReport",
    "PipelineStage",
    "PipelineStep",
    "RenderedArtifact",
    "ReportEntry",
    "StepKind",
    "StepResult",
    "SyncMode",
    "SyncOutcome",
    "ToolchainConfig",
    "ToolchainSpec",
    "XtaskConfig",
]
