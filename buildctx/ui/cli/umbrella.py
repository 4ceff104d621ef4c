"""
CLI commands for umbrella projects.

Thin wrappers over ``buildctx.core.services.umbrella``.
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from buildctx.adapters.shell.command import CommandReceipt, run_command
from buildctx.core.services import project_ops
from buildctx.core.services.umbrella import (
    discover_projects,
    run_over_umbrella,
    sort_projects,
)
from buildctx.ui.cli.helpers import REPORTED_ERRORS, fail, project_context, root_project


class CommandFailedError(Exception):
    """A sub-project command exited unsuccessfully."""

    def __init__(self, receipt: CommandReceipt) -> None:
        self.receipt = receipt
        super().__init__(f"{receipt.app}: {receipt.error}")


@click.group("umbrella")
def umbrella() -> None:
    """Umbrella — order and run across sub-projects."""


@umbrella.command("order")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def order(ctx: click.Context, as_json: bool) -> None:
    """Show sub-projects in dependency order."""
    pctx = project_context(ctx)
    try:
        with root_project(ctx):
            apps_root = project_ops.apps_path(pctx)
            ordered = sort_projects(pctx, discover_projects(apps_root), apps_root)
    except REPORTED_ERRORS as e:
        fail(str(e))

    if as_json:
        click.echo(json.dumps(
            [{"app": p.app, "path": str(p.path)} for p in ordered], indent=2
        ))
        return

    click.secho(f"\n☂️  {apps_root}", fg="cyan", bold=True)
    for i, p in enumerate(ordered, 1):
        click.echo(f"   {i}. {p.app}  → {p.path}")
    click.echo()


@umbrella.command("run")
@click.argument("command", nargs=-1, required=True)
@click.option("--timeout", default=300, type=int, help="Per-project timeout in seconds.")
@click.pass_context
def run(ctx: click.Context, command: tuple[str, ...], timeout: int) -> None:
    """Run COMMAND in every sub-project, dependencies first.

    Stops at the first sub-project whose command fails.

    Examples:

        buildctx umbrella run -- make test
    """
    pctx = project_context(ctx)
    line = " ".join(command)
    verbose = ctx.obj.get("verbose", False)

    def _operation(_apps_root: Path) -> CommandReceipt:
        project = pctx.current()
        app = project.app if project and project.app else Path.cwd().name.lower()
        receipt = run_command(line, Path.cwd(), app=app, timeout=timeout)
        if not receipt.ok:
            raise CommandFailedError(receipt)
        click.secho(f"   ✓ {receipt.app}", fg="green", nl=False)
        click.echo(f" ({receipt.duration_ms}ms)")
        if verbose and receipt.output:
            for out in receipt.output.split("\n")[:10]:
                click.echo(f"     │ {out}")
        return receipt

    try:
        with root_project(ctx):
            receipts = run_over_umbrella(pctx, _operation)
    except CommandFailedError as e:
        click.secho(f"   ✗ {e.receipt.app}", fg="red")
        for out in (e.receipt.error or "").split("\n")[:5]:
            click.echo(f"     │ {out}")
        fail(f"Command failed in '{e.receipt.app}'")
    except REPORTED_ERRORS as e:
        fail(str(e))

    click.secho(f"   Result: {len(receipts)} project(s) succeeded", fg="green", bold=True)
