"""
CLI commands for everyday workspace chores — format, unused deps, completions.
"""

from __future__ import annotations

import sys

import click

from xtask.adapters.shell.command import ShellCommandAdapter
from xtask.core.models.step import PipelineStep, StepKind
from xtask.core.models.toolchain import ToolchainSpec
from xtask.core.engine.steps import execute_step
from xtask.ui.cli.helpers import load_workspace


def _run_nightly(ctx: click.Context, step: PipelineStep) -> None:
    config, root = load_workspace(ctx)
    toolchain = ToolchainSpec(channel="nightly", version=config.toolchains.nightly)

    result = execute_step(step, toolchain, False, ShellCommandAdapter(), root)
    if result.ok:
        if result.output:
            click.echo(result.output)
        return

    click.secho(f"❌ {result.command}", fg="red")
    if result.diagnostic:
        click.echo(result.diagnostic)
    sys.exit(1)


@click.command()
@click.pass_context
def fmt(ctx: click.Context) -> None:
    """Format all code with the pinned nightly rustfmt."""
    _run_nightly(ctx, PipelineStep(kind=StepKind.FMT, name="fmt", args=("fmt", "--all")))


@click.command()
@click.pass_context
def udeps(ctx: click.Context) -> None:
    """Check all dependencies are used."""
    _run_nightly(
        ctx,
        PipelineStep(kind=StepKind.UDEPS, name="udeps", args=("udeps", "--all-targets")),
    )


@click.command("shell-completion")
@click.argument("shell", type=click.Choice(["bash", "zsh", "fish"]))
@click.pass_context
def shell_completion(ctx: click.Context, shell: str) -> None:
    """Print a shell completion script for SHELL."""
    from click.shell_completion import get_completion_class

    completion_class = get_completion_class(shell)
    root_command = ctx.find_root().command
    completer = completion_class(root_command, {}, "xtask", "_XTASK_COMPLETE")
    click.echo(completer.source())
