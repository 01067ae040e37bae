"""
Shared CLI plumbing — workspace resolution and report printing.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from xtask.core.config.loader import ConfigError, find_config_file, load_config, project_root
from xtask.core.models.config import XtaskConfig
from xtask.core.models.report import PipelineReport

_ICONS = {
    "passed": ("✓", "green"),
    "failed": ("✗", "red"),
    "skipped": ("⊘", "yellow"),
}


def load_workspace(ctx: click.Context) -> tuple[XtaskConfig, Path]:
    """Load configuration and resolve the workspace root, or exit 1."""
    config_path: Path | None = ctx.obj.get("config_path")
    if config_path is None:
        config_path = find_config_file()

    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    return config, project_root(config_path)


def print_report(report: PipelineReport, verbose: bool = False) -> None:
    """Results grouped by toolchain then stage, followed by every failure."""
    for label, stages in report.grouped().items():
        click.secho(f"\n⚙️  {label}", fg="cyan", bold=True)
        for stage, entries in stages.items():
            click.secho(f"   {stage}", bold=True)
            for entry in entries:
                icon, color = _ICONS[entry.result.status]
                click.secho(f"     {icon} {entry.step.name}", fg=color, nl=False)
                if entry.result.skipped:
                    click.echo(f" ({entry.result.reason})")
                elif entry.result.duration_ms:
                    click.echo(f" ({entry.result.duration_ms}ms)")
                else:
                    click.echo()
                if entry.result.failed and entry.result.diagnostic:
                    lines = entry.result.diagnostic.splitlines()
                    if not verbose:
                        lines = lines[-5:]
                    for line in lines:
                        click.echo(f"       │ {line}")

    click.echo()
    if report.ok:
        click.secho(
            f"✅ CI passed: {report.passed} passed, {report.skipped} skipped",
            fg="green",
            bold=True,
        )
        return

    click.secho("❌ CI failed", fg="red", bold=True)
    for line in report.failure_summary():
        click.echo(f"   {line}")
