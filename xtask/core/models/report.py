"""
Pipeline report — everything one orchestrator run observed.

Created fresh per run and owned by the orchestrator, which is the only
writer. Never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from xtask.core.models.artifact import SyncOutcome
from xtask.core.models.step import PipelineStep, StepResult
from xtask.core.models.toolchain import ToolchainSpec


@dataclass(frozen=True)
class ReportEntry:
    """One (toolchain, stage, step, result) row of the report."""

    toolchain: ToolchainSpec
    stage: str
    step: PipelineStep
    result: StepResult

    def to_dict(self) -> dict:
        return {
            "toolchain": self.toolchain.version,
            "channel": self.toolchain.channel,
            "stage": self.stage,
            "step": self.step.name,
            "result": self.result.to_dict(),
        }


@dataclass
class PipelineReport:
    """Result of one orchestrator run."""

    entries: list[ReportEntry] = field(default_factory=list)
    mismatches: list[SyncOutcome] = field(default_factory=list)
    aborted: bool = False
    abort_reason: str = ""

    def append(self, entry: ReportEntry) -> None:
        self.entries.append(entry)

    def abort(self, reason: str) -> None:
        self.aborted = True
        self.abort_reason = reason

    @property
    def failures(self) -> list[ReportEntry]:
        return [e for e in self.entries if e.result.failed]

    @property
    def passed(self) -> int:
        return sum(1 for e in self.entries if e.result.ok)

    @property
    def skipped(self) -> int:
        return sum(1 for e in self.entries if e.result.skipped)

    @property
    def ok(self) -> bool:
        return not self.aborted and not self.mismatches and not self.failures

    @property
    def status(self) -> str:
        if self.aborted:
            return "aborted"
        if self.ok:
            return "ok"
        return "failed"

    def grouped(self) -> dict[str, dict[str, list[ReportEntry]]]:
        """Entries grouped by toolchain label, then stage, in run order."""
        groups: dict[str, dict[str, list[ReportEntry]]] = {}
        for entry in self.entries:
            stages = groups.setdefault(entry.toolchain.label, {})
            stages.setdefault(entry.stage, []).append(entry)
        return groups

    def failure_summary(self) -> list[str]:
        """Itemized lines for every stale file and every failed step."""
        lines: list[str] = []
        if self.mismatches:
            lines.append("Stale generated files (run `xtask codegen`):")
            for outcome in self.mismatches:
                lines.append(f"  {outcome.path}")
        if self.aborted and not self.mismatches:
            lines.append(f"Aborted: {self.abort_reason}")

        for label, stages in self.grouped().items():
            for stage, entries in stages.items():
                failed = [e for e in entries if e.result.failed]
                if not failed:
                    continue
                lines.append(f"{label} / {stage}:")
                for entry in failed:
                    code = entry.result.exit_code
                    suffix = f" (exit code {code})" if code is not None else ""
                    lines.append(f"  {entry.step.name}: {entry.result.command}{suffix}")
        return lines

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "ok": self.ok,
            "aborted": self.aborted,
            "abort_reason": self.abort_reason,
            "passed": self.passed,
            "failed": len(self.failures),
            "skipped": self.skipped,
            "mismatches": [str(m.path) for m in self.mismatches],
            "entries": [e.to_dict() for e in self.entries],
        }
