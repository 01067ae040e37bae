"""
Toolchain model — which compiler release a pipeline stage runs against.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

Channel = Literal["stable", "nightly"]


class ToolchainSpec(BaseModel):
    """A resolved toolchain for one run.

    ``version`` is passed to cargo/rustc as ``+<version>``. When the
    caller supplied an override, ``overridden`` is True and ``version``
    is the override verbatim.
    """

    model_config = ConfigDict(frozen=True)

    channel: Channel
    version: str
    overridden: bool = False

    @property
    def is_nightly(self) -> bool:
        return self.channel == "nightly" or self.version.startswith("nightly")

    @property
    def label(self) -> str:
        """Human label, e.g. ``stable (1.73)``."""
        return f"{self.channel} ({self.version})"

    def toolchain_arg(self) -> str:
        return f"+{self.version}"
