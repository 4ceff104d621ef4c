"""
Project queries — read the active project and derive paths from it.

The tolerant queries (``get``, ``config``) never fail: they fall back
to None or the default config.  ``get_or_raise`` is for callers that
cannot work without a project.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

from buildctx.core.context import NoProjectError, ProjectContext
from buildctx.core.models.project import ProjectDeclaration
from buildctx.core.services.umbrella import NotAnUmbrellaError, run_over_umbrella

logger = logging.getLogger(__name__)


def get(ctx: ProjectContext) -> ProjectDeclaration | None:
    """Return the active project, or None."""
    return ctx.current()


def get_or_raise(ctx: ProjectContext) -> ProjectDeclaration:
    """Return the active project.

    Raises:
        NoProjectError: If no project is loaded.
    """
    project = ctx.current()
    if project is None:
        raise NoProjectError()
    return project


def config(ctx: ProjectContext) -> dict[str, Any]:
    """Effective config of the active project (defaults if none)."""
    return ctx.current_config()


def refresh(ctx: ProjectContext) -> dict[str, Any]:
    """Re-resolve the active project's config, e.g. after an env change.

    Raises:
        EmptyStackError: If nothing is on the stack.
    """
    logger.debug("Refreshing project config for env '%s'", ctx.env)
    return copy.deepcopy(ctx.refresh().config)


def config_files(ctx: ProjectContext) -> list[Path]:
    """Declaration file and lockfile of the active project, when present."""
    files: list[Path] = []
    project = ctx.current()
    if project is not None and project.source.is_file():
        files.append(project.source)

    lockfile = config(ctx).get("lockfile")
    if lockfile and Path(lockfile).is_file():
        files.append(Path(lockfile).resolve())

    return files


def is_umbrella(ctx: ProjectContext) -> bool:
    return config(ctx).get("apps_path") is not None


def umbrella_apps_path(ctx: ProjectContext) -> Path | None:
    """Absolute apps path of the active project, or None if not an umbrella."""
    raw = config(ctx).get("apps_path")
    if raw is None:
        return None
    return Path(raw).resolve()


def apps_path(ctx: ProjectContext) -> Path:
    """Absolute apps path of the active umbrella project.

    Raises:
        NotAnUmbrellaError: If the active project has no apps_path.
    """
    path = umbrella_apps_path(ctx)
    if path is None:
        raise NotAnUmbrellaError("The current project is not an umbrella project")
    return path


def compile_paths(ctx: ProjectContext) -> list[Path]:
    """Directories this project compiles to, across umbrella members."""
    if is_umbrella(ctx):
        nested = run_over_umbrella(ctx, lambda _root: compile_paths(ctx))
        return [path for paths in nested for path in paths]
    return [Path(config(ctx)["compile_path"]).resolve()]


def load_paths(ctx: ProjectContext) -> list[Path]:
    """Every load path of this project, compile paths last."""
    if is_umbrella(ctx):
        nested = run_over_umbrella(ctx, lambda _root: load_paths(ctx))
        paths = [path for group in nested for path in group]
    else:
        paths = [Path(p).resolve() for p in config(ctx).get("load_paths") or []]
    return paths + compile_paths(ctx)
