"""
xtask — CLI entrypoint.

Usage:
    python -m xtask.main --help
    xtask codegen --check
    xtask ci stable --fast
"""

from __future__ import annotations

from pathlib import Path

import click

from xtask import __version__
from xtask.core.observability.logging_config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="xtask")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to xtask.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """xtask — keep generated files in sync and run the local CI pipeline."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    configure_logging(debug=debug, verbose=verbose, quiet=quiet)


# ── Register sub-commands from xtask/ui/cli/ ────────────────────

from xtask.ui.cli.ci import ci
from xtask.ui.cli.codegen import codegen
from xtask.ui.cli.workspace import fmt, shell_completion, udeps

cli.add_command(codegen)
cli.add_command(ci)
cli.add_command(fmt)
cli.add_command(udeps)
cli.add_command(shell_completion)


if __name__ == "__main__":
    cli()
