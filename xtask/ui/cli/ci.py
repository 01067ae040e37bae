"""
CLI commands for the local CI pipeline.

Thin wrappers over ``xtask.core.use_cases.ci``. Without a sub-command,
``xtask ci`` runs the stable stages then the nightly stages.
"""

from __future__ import annotations

import json
import sys

import click

from xtask.core.engine.pipeline import Selection
from xtask.core.models.report import PipelineReport
from xtask.ui.cli.helpers import load_workspace, print_report


def _run(
    ctx: click.Context,
    selection: Selection,
    as_json: bool,
    fast: bool = False,
    stable_override: str | None = None,
    nightly_override: str | None = None,
) -> None:
    from xtask.core.use_cases.ci import run_ci

    as_json = as_json or ctx.obj.get("json", False)
    config, root = load_workspace(ctx)
    report: PipelineReport = run_ci(
        config,
        root,
        selection=selection,
        fast=fast,
        stable_override=stable_override,
        nightly_override=nightly_override,
    )

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        print_report(report, verbose=ctx.obj.get("verbose", False))

    sys.exit(0 if report.ok else 1)


@click.group(invoke_without_command=True)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def ci(ctx: click.Context, as_json: bool) -> None:
    """Run CI checks: codegen, then stable and nightly stages."""
    ctx.obj["json"] = as_json
    if ctx.invoked_subcommand is None:
        _run(ctx, "all", as_json)


@ci.command()
@click.argument("toolchain", required=False)
@click.option("--fast", is_flag=True, help="Skip slow steps (docs, release tests, udeps).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def stable(ctx: click.Context, toolchain: str | None, fast: bool, as_json: bool) -> None:
    """Run the stable stages, optionally against TOOLCHAIN instead of the pinned version."""
    _run(ctx, "stable", as_json, fast=fast, stable_override=toolchain)


@ci.command()
@click.argument("toolchain", required=False)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def nightly(ctx: click.Context, toolchain: str | None, as_json: bool) -> None:
    """Run the nightly stages, optionally against TOOLCHAIN instead of the pinned version."""
    _run(ctx, "nightly", as_json, nightly_override=toolchain)


@ci.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def fast(ctx: click.Context, as_json: bool) -> None:
    """Run the stable stages without slow steps."""
    _run(ctx, "stable", as_json, fast=True)
