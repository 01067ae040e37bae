"""
CLI command for code generation.

Thin wrapper over ``xtask.core.use_cases.codegen``.
"""

from __future__ import annotations

import json
import sys

import click

from xtask.core.models.artifact import SyncMode
from xtask.core.services.renderer import RenderError
from xtask.ui.cli.helpers import load_workspace


@click.command()
@click.option("--check", is_flag=True, help="Check the files wouldn't change. Don't write them.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def codegen(ctx: click.Context, check: bool, as_json: bool) -> None:
    """Generate derived files. Existing content will be overwritten."""
    from xtask.core.use_cases.codegen import run_codegen

    config, root = load_workspace(ctx)

    try:
        result = run_codegen(config, root, SyncMode.from_check_flag(check))
    except RenderError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)
    except OSError as e:
        click.secho(f"❌ Cannot update generated files: {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    quiet = ctx.obj.get("quiet", False)
    for outcome in result.outcomes:
        rel = outcome.path.relative_to(root) if outcome.path.is_relative_to(root) else outcome.path
        if outcome.mismatch:
            click.secho(f"   ✗ {rel}", fg="red")
        elif outcome.written:
            click.secho(f"   ✎ {rel}", fg="green")
        elif not quiet:
            click.echo(f"   · {rel}")

    if not result.ok:
        click.echo()
        click.secho(
            f"❌ {len(result.mismatches)} generated file(s) are out of date. Run 'xtask codegen'.",
            fg="red",
            bold=True,
        )
        sys.exit(1)

    if check:
        click.secho("✅ Generated files are up to date", fg="green")
    else:
        click.secho(f"✅ {len(result.written)} file(s) written", fg="green")
