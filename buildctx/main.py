"""
buildctx — CLI entrypoint.

Usage:
    python -m buildctx.main --help
    python -m buildctx.main project show
    python -m buildctx.main umbrella run -- make test
"""

from __future__ import annotations

from dataclasses import replace

import click

from buildctx import __version__
from buildctx.core.config.settings import load_settings
from buildctx.core.context import get_context
from buildctx.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="buildctx")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--env",
    "environment",
    default=None,
    help="Build environment (default: $BUILDCTX_ENV or dev).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    environment: str | None,
) -> None:
    """buildctx — project context and umbrella orchestration."""
    settings = load_settings()

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    project_ctx = get_context()
    project_ctx.env = environment or settings.env
    ctx.obj["project_ctx"] = project_ctx

    # ── Logging setup (once, at process start) ──────────────────
    level = None
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"

    setup_logging(replace(settings, env=project_ctx.env), level=level)


# ── Register sub-command groups from buildctx/ui/cli/ ───────────

from buildctx.ui.cli.project import project
from buildctx.ui.cli.umbrella import umbrella

cli.add_command(project)
cli.add_command(umbrella)


if __name__ == "__main__":
    cli()
