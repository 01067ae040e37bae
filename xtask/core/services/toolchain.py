"""
Toolchain selector — pinned version or per-run override.
"""

from __future__ import annotations

import logging

from xtask.core.models.config import XtaskConfig
from xtask.core.models.toolchain import ToolchainSpec

logger = logging.getLogger(__name__)


def resolve(pinned: ToolchainSpec, override: str | None = None) -> ToolchainSpec:
    """Return the toolchain a run should use.

    The override, when given, replaces the pinned version entirely.
    The two are never merged.
    """
    if not override:
        return pinned
    logger.info("Overriding %s toolchain %s with %s", pinned.channel, pinned.version, override)
    return ToolchainSpec(channel=pinned.channel, version=override, overridden=True)


def pinned_toolchains(config: XtaskConfig) -> dict[str, ToolchainSpec]:
    """The pinned stable and nightly toolchains from configuration."""
    return {
        "stable": ToolchainSpec(channel="stable", version=config.toolchains.stable),
        "nightly": ToolchainSpec(channel="nightly", version=config.toolchains.nightly),
    }
