"""
Shared CLI helpers — root project scope and error reporting.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, NoReturn

import click

from buildctx.core.config.loader import DeclarationError
from buildctx.core.context import NoProjectError, ProjectContext
from buildctx.core.models.project import ProjectDeclaration
from buildctx.core.services.project_loader import load_project
from buildctx.core.services.umbrella import CyclicDependencyError, NotAnUmbrellaError

# Errors the CLI reports as a message + exit status 1
REPORTED_ERRORS = (
    CyclicDependencyError,
    DeclarationError,
    NoProjectError,
    NotAnUmbrellaError,
)


def project_context(ctx: click.Context) -> ProjectContext:
    """The ProjectContext registered by the root command."""
    return ctx.obj["project_ctx"]


def root_app() -> str:
    """Cache key of the project in the working directory.

    The resolved path, so it never matches a sub-project's app id
    (a bare lower-cased directory name).
    """
    return str(Path.cwd().resolve())


@contextmanager
def root_project(ctx: click.Context) -> Iterator[ProjectDeclaration | None]:
    """Load the working directory's project for the duration of a command."""
    pctx = project_context(ctx)
    project = load_project(pctx, root_app())
    try:
        yield project
    finally:
        pctx.pop()


def fail(message: str) -> NoReturn:
    """Report an error on stderr and exit with status 1."""
    click.secho(f"❌ {message}", fg="red", err=True)
    sys.exit(1)
