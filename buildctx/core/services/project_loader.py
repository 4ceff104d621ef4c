"""
Project loader — load the project in a directory onto the context stack.

Every successful ``load_project`` leaves exactly one new frame on the
stack: the declared project, or a None placeholder carrying the
default config.  The result is cached per application id for the
life of the context, so a project declaration is evaluated at most
once per app.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping

from buildctx.core.config.loader import load_declaration
from buildctx.core.context import ProjectContext
from buildctx.core.models.project import ProjectDeclaration

logger = logging.getLogger(__name__)

DeclarationLoader = Callable[[Path], "ProjectDeclaration | None"]


def load_project(
    ctx: ProjectContext,
    app: str,
    post_config: Mapping[str, Any] | None = None,
    *,
    directory: Path | None = None,
    loader: DeclarationLoader = load_declaration,
) -> ProjectDeclaration | None:
    """Load (or reuse) the project for ``app`` and push it.

    Args:
        ctx: Context to push onto.
        app: Application id used as the cache key.
        post_config: Overlay applied beneath the declared config of the
            pushed project.
        directory: Project directory (default: cwd).
        loader: Declaration evaluator.

    Returns:
        The pushed identity, or None when the directory declares no
        project.

    Raises:
        DeclarationError: If the declaration cannot be evaluated.  No
            frame is pushed in that case.
    """
    cached = ctx.cache_get(app)
    if cached is not None:
        logger.debug("Project cache hit for '%s'", app)
        ctx.register_post_config(post_config)
        ctx.push(cached.project)
        return cached.project

    ctx.register_post_config(post_config)
    try:
        project = loader(directory or Path.cwd())
    except Exception:
        ctx.discard_post_config()
        raise

    if project is None:
        logger.info("No project declared for '%s', using defaults", app)

    ctx.push(project)
    ctx.cache_put(app, project)
    return project


@contextmanager
def in_project(
    ctx: ProjectContext,
    app: str,
    path: Path,
    post_config: Mapping[str, Any] | None = None,
    *,
    loader: DeclarationLoader = load_declaration,
) -> Iterator[Path | None]:
    """Run a with-block inside ``path`` with ``app`` as the active project.

    Yields the umbrella apps path of the project that was active on
    entry (None if it is not an umbrella).  On every exit the project
    is popped first, then the previous working directory is restored.
    """
    from buildctx.core.services.project_ops import umbrella_apps_path

    apps_root = umbrella_apps_path(ctx)
    previous = Path.cwd()
    os.chdir(path)
    try:
        load_project(ctx, app, post_config, loader=loader)
        try:
            yield apps_root
        finally:
            ctx.pop()
    finally:
        os.chdir(previous)
