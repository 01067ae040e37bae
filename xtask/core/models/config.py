"""
Configuration model — the pinned versions and codegen settings for a run.

Loaded once from xtask.yml at startup and passed explicitly to the
codegen use case and the pipeline orchestrator. Frozen so a run can
never mutate its own configuration halfway through.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ToolchainConfig(BaseModel):
    """Pinned toolchain versions.

    ``stable`` and ``nightly`` can be overridden per invocation,
    ``udeps`` (the cargo-udeps release installed in CI) cannot.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    stable: str = "1.73"
    nightly: str = "nightly-2023-10-14"
    udeps: str = "0.1.43"

    @field_validator("stable", "nightly", "udeps")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("toolchain versions must not be empty")
        return value.strip()


class CodegenConfig(BaseModel):
    """Which files codegen produces and how they are stamped."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    readme_dirs: tuple[str, ...] = (".",)
    start_year: int = Field(default=2022, ge=1970, le=9999)
    copyright_holder: str = "The xtask developers"
    workflow_name: str = "ci-tests"
    codegen_command: str = "xtask codegen --check"
    install_command: str = "pip install ."


class XtaskConfig(BaseModel):
    """Root configuration — everything a run needs to know up front.

    ``version`` is the xtask.yml schema version. Only 1 exists so far.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: Literal[1] = 1
    toolchains: ToolchainConfig = Field(default_factory=ToolchainConfig)
    codegen: CodegenConfig = Field(default_factory=CodegenConfig)
