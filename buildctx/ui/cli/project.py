"""
CLI commands for the active project.

Thin wrappers over ``buildctx.core.services.project_ops``.
"""

from __future__ import annotations

import json

import click

from buildctx.core.services import project_ops
from buildctx.ui.cli.helpers import REPORTED_ERRORS, fail, project_context, root_project


@click.group("project")
def project() -> None:
    """Project — inspect the project in the current directory."""


@project.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Show the project and its effective configuration."""
    pctx = project_context(ctx)
    try:
        with root_project(ctx) as declared:
            config = project_ops.config(pctx)
            umbrella = project_ops.is_umbrella(pctx)
    except REPORTED_ERRORS as e:
        fail(str(e))

    if as_json:
        click.echo(json.dumps({
            "app": declared.app if declared else None,
            "source": str(declared.source) if declared else None,
            "env": pctx.env,
            "umbrella": umbrella,
            "config": config,
        }, indent=2, default=str))
        return

    if declared is None:
        click.secho("⚠️  No project declared here, showing defaults", fg="yellow")
    else:
        click.secho(f"\n📋 {declared.app or declared.directory.name}", fg="cyan", bold=True)
        click.echo(f"   {declared.source}")
    click.echo(f"   Env: {pctx.env}{'  (umbrella)' if umbrella else ''}")
    click.echo()
    for key in sorted(config):
        click.echo(f"   {key}: {config[key]}")
    click.echo()


@project.command("files")
@click.pass_context
def files(ctx: click.Context) -> None:
    """List the project's config files (declaration, lockfile)."""
    pctx = project_context(ctx)
    try:
        with root_project(ctx):
            paths = project_ops.config_files(pctx)
    except REPORTED_ERRORS as e:
        fail(str(e))

    for path in paths:
        click.echo(str(path))


@project.command("paths")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def paths(ctx: click.Context, as_json: bool) -> None:
    """Show compile and load paths, across umbrella members."""
    pctx = project_context(ctx)
    try:
        with root_project(ctx):
            compile_paths = project_ops.compile_paths(pctx)
            load_paths = project_ops.load_paths(pctx)
    except REPORTED_ERRORS as e:
        fail(str(e))

    if as_json:
        click.echo(json.dumps({
            "compile_paths": [str(p) for p in compile_paths],
            "load_paths": [str(p) for p in load_paths],
        }, indent=2))
        return

    click.secho("   Compile paths:", fg="white", bold=True)
    for path in compile_paths:
        click.echo(f"     • {path}")
    click.secho("   Load paths:", fg="white", bold=True)
    for path in load_paths:
        click.echo(f"     • {path}")
