"""
Artifact models — rendered content and the result of syncing it to disk.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict


class SyncMode(str, Enum):
    """How the synchronizer treats a destination file."""

    WRITE = "write"
    CHECK = "check"

    @classmethod
    def from_check_flag(cls, check: bool) -> SyncMode:
        return cls.CHECK if check else cls.WRITE


class RenderedArtifact(BaseModel):
    """Concrete bytes for one generated file.

    Attributes:
        content:     The full file content.
        destination: Where the content belongs (None if the caller decides).
        reason:      Short description shown in listings.
    """

    model_config = ConfigDict(frozen=True)

    content: bytes
    destination: Path | None = None
    reason: str = ""

    @classmethod
    def from_text(cls, text: str, destination: Path | None = None, reason: str = "") -> RenderedArtifact:
        return cls(content=text.encode("utf-8"), destination=destination, reason=reason)


class SyncOutcome(BaseModel):
    """Result of synchronizing one artifact."""

    model_config = ConfigDict(frozen=True)

    path: Path
    status: Literal["unchanged", "written", "mismatch"]

    @property
    def mismatch(self) -> bool:
        return self.status == "mismatch"

    @property
    def written(self) -> bool:
        return self.status == "written"

    @classmethod
    def unchanged(cls, path: Path) -> SyncOutcome:
        return cls(path=path, status="unchanged")

    @classmethod
    def wrote(cls, path: Path) -> SyncOutcome:
        return cls(path=path, status="written")

    @classmethod
    def stale(cls, path: Path) -> SyncOutcome:
        return cls(path=path, status="mismatch")

    def to_dict(self) -> dict:
        return {"path": str(self.path), "status": self.status}
