"""
Artifact synchronizer — write generated files, or verify they are current.

Every generated file goes through ``synchronize``. In write mode the file
is only touched when its bytes change. In check mode nothing on disk is
modified, so the check is safe in read-only CI checkouts.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from xtask.core.models.artifact import RenderedArtifact, SyncMode, SyncOutcome

logger = logging.getLogger(__name__)


def _existing_bytes(path: Path) -> bytes | None:
    """Current content of ``path``, or None if it does not exist."""
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


def synchronize(destination: Path, rendered: RenderedArtifact, mode: SyncMode) -> SyncOutcome:
    """Synchronize one artifact with the file at ``destination``.

    Args:
        destination: Target file path.
        rendered: Freshly rendered content.
        mode: WRITE to update the file, CHECK to compare only.

    Returns:
        SyncOutcome: ``unchanged``, ``written`` or (check mode only) ``mismatch``.

    Raises:
        OSError: On permission problems or other filesystem failures.
    """
    destination = Path(destination)
    existing = _existing_bytes(destination)

    if mode is SyncMode.CHECK:
        if (existing or b"") == rendered.content:
            logger.debug("Up to date: %s", destination)
            return SyncOutcome.unchanged(destination)
        logger.info("Differences found in %s", destination)
        return SyncOutcome.stale(destination)

    if existing == rendered.content:
        logger.debug("Unchanged: %s", destination)
        return SyncOutcome.unchanged(destination)

    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(rendered.content)
    logger.info("Wrote %s (%d bytes)", destination, len(rendered.content))
    return SyncOutcome.wrote(destination)


def synchronize_all(artifacts: Iterable[RenderedArtifact], mode: SyncMode) -> list[SyncOutcome]:
    """Synchronize every artifact independently and return all outcomes.

    Artifacts must carry a destination. A mismatch in one artifact does
    not stop the others from being checked.
    """
    outcomes: list[SyncOutcome] = []
    for artifact in artifacts:
        if artifact.destination is None:
            raise ValueError("Artifact has no destination")
        outcomes.append(synchronize(artifact.destination, artifact, mode))
    return outcomes
