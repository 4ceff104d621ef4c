"""
Umbrella orchestrator — run an operation over every sub-project.

An umbrella project keeps its sub-projects as immediate children of
its apps directory.  Orchestration:

    1. Discover the children; the app id is the lower-cased dir name.
    2. Load each child once to read its declared deps and build the
       graph dep → dependent (available, in-umbrella siblings only).
    3. Topologically sort; a cycle aborts before anything runs.
    4. For each child in order: chdir, load, run the operation, pop,
       restore the directory.  The first failure propagates after its
       pop; remaining children are not visited.

Projects are processed strictly one at a time: they share the working
directory and the context stack, so this module is not reentrant.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, TypeVar

from buildctx.core.config.loader import load_declaration
from buildctx.core.context import ProjectContext
from buildctx.core.domain.dag import DependencyGraph
from buildctx.core.services.deps import Dependency, children
from buildctx.core.services.project_loader import DeclarationLoader, in_project

logger = logging.getLogger(__name__)

T = TypeVar("T")

DependencySource = Callable[[Mapping[str, Any], Path], list[Dependency]]


class CyclicDependencyError(Exception):
    """Raised when umbrella sub-projects depend on each other in a cycle."""

    def __init__(self, apps: list[str]) -> None:
        self.apps = list(apps)
        super().__init__(
            "Could not dependency sort umbrella projects. "
            "There are cycles in the dependency graph involving: "
            + ", ".join(self.apps)
        )


class NotAnUmbrellaError(RuntimeError):
    """Raised when orchestration is requested outside an umbrella project."""


@dataclass(frozen=True)
class UmbrellaProject:
    """A discovered sub-project: its app id and directory."""

    app: str
    path: Path


def discover_projects(apps_root: Path) -> list[UmbrellaProject]:
    """List the sub-projects directly under ``apps_root``, sorted by name.

    Directory names are lower-cased into app ids.  When two directories
    map to the same id, the first (in sorted order) wins.
    """
    projects: list[UmbrellaProject] = []
    seen: set[str] = set()

    if not apps_root.is_dir():
        logger.debug("Apps directory not found: %s", apps_root)
        return projects

    for child in sorted(apps_root.iterdir()):
        if not child.is_dir():
            continue
        app = child.name.lower()
        if app in seen:
            logger.warning(
                "Skipping %s: app '%s' is already provided by another directory",
                child, app,
            )
            continue
        seen.add(app)
        projects.append(UmbrellaProject(app=app, path=child.resolve()))

    return projects


def build_graph(
    ctx: ProjectContext,
    projects: list[UmbrellaProject],
    apps_root: Path,
    *,
    loader: DeclarationLoader = load_declaration,
    deps_source: DependencySource = children,
) -> DependencyGraph[str]:
    """Build the dependency graph between umbrella sub-projects.

    Each project is entered (and left again) to read its deps.  A dep
    is matched to a sibling by its resolved path, or else by its
    lower-cased name.
    """
    graph: DependencyGraph[str] = DependencyGraph()
    by_path: dict[Path, str] = {}
    for project in projects:
        graph.add_vertex(project.app, project)
        by_path[project.path.resolve()] = project.app

    for project in projects:
        with in_project(ctx, project.app, project.path, loader=loader):
            for dep in deps_source(ctx.current_config(), project.path):
                if not (dep.available and dep.in_umbrella(apps_root)):
                    continue
                target = by_path.get(dep.path.resolve()) if dep.path else None
                if target is None and dep.app.lower() in graph:
                    target = dep.app.lower()
                if target is None:
                    logger.debug(
                        "Dependency '%s' of '%s' is not an umbrella app, ignoring",
                        dep.app, project.app,
                    )
                    continue
                graph.add_edge(target, project.app)

    return graph


def sort_projects(
    ctx: ProjectContext,
    projects: list[UmbrellaProject],
    apps_root: Path,
    *,
    loader: DeclarationLoader = load_declaration,
    deps_source: DependencySource = children,
) -> list[UmbrellaProject]:
    """Order sub-projects so dependencies come before dependents.

    Raises:
        CyclicDependencyError: If the graph has a cycle.
    """
    graph = build_graph(ctx, projects, apps_root, loader=loader, deps_source=deps_source)
    result = graph.topsort()
    if not result.ok:
        raise CyclicDependencyError(result.cycle)
    return [graph.label(app) for app in result.order]


def run_over_umbrella(
    ctx: ProjectContext,
    operation: Callable[[Path], T],
    apps_root: Path | None = None,
    *,
    loader: DeclarationLoader = load_declaration,
    deps_source: DependencySource = children,
) -> list[T]:
    """Run ``operation(apps_root)`` inside each sub-project, in dependency order.

    Args:
        ctx: Context whose stack receives each sub-project in turn.
        operation: Called once per sub-project with the apps root.
        apps_root: Apps directory (default: the active umbrella's).
        loader: Declaration evaluator.
        deps_source: Returns the declared deps of the active project.

    Returns:
        Operation results in the order the sub-projects ran.

    Raises:
        NotAnUmbrellaError: If no apps_root is given and the active
            project is not an umbrella.
        CyclicDependencyError: Before any operation runs.
    """
    if apps_root is None:
        from buildctx.core.services.project_ops import umbrella_apps_path

        apps_root = umbrella_apps_path(ctx)
        if apps_root is None:
            raise NotAnUmbrellaError("The current project is not an umbrella project")

    apps_root = apps_root.resolve()
    projects = discover_projects(apps_root)
    ordered = sort_projects(ctx, projects, apps_root, loader=loader, deps_source=deps_source)
    logger.info("Umbrella order: %s", ", ".join(p.app for p in ordered))

    results: list[T] = []
    for project in ordered:
        with in_project(ctx, project.app, project.path, loader=loader):
            results.append(operation(apps_root))
    return results
