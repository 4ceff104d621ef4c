"""
Declared dependencies of the active project.

Reads the ``deps`` entry of the effective config and answers the two
questions the umbrella orchestrator asks of each dependency: is it
available on disk, and does it live inside the umbrella's apps
directory.  Fetching and locking are not handled here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from buildctx.core.config.loader import DeclarationError
from buildctx.core.models.project import DependencySpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dependency:
    """A declared dependency resolved against its project directory."""

    app: str
    path: Path | None = None
    deps_dir: Path | None = None

    @property
    def location(self) -> Path | None:
        """Where the dependency's sources live (path dep or deps_path/app)."""
        if self.path is not None:
            return self.path
        if self.deps_dir is not None:
            return self.deps_dir / self.app
        return None

    @property
    def available(self) -> bool:
        location = self.location
        return location is not None and location.is_dir()

    def in_umbrella(self, apps_root: Path) -> bool:
        """True when the dependency is a path dep sitting directly in apps_root."""
        if self.path is None:
            return False
        return self.path.parent == apps_root.resolve()


def children(config: Mapping[str, Any], base_dir: Path | None = None) -> list[Dependency]:
    """List the dependencies declared by a project config.

    Args:
        config: Effective project config.
        base_dir: Project directory that relative paths resolve
            against (default: cwd).

    Returns:
        Dependencies in declaration order.

    Raises:
        DeclarationError: If an entry is neither an app name nor a
            mapping with an ``app`` key.
    """
    base = (base_dir or Path.cwd()).resolve()
    deps_dir = base / str(config.get("deps_path") or "deps")
    result: list[Dependency] = []

    for raw in config.get("deps") or []:
        try:
            spec = DependencySpec.model_validate(raw)
        except ValidationError as e:
            raise DeclarationError(f"Invalid dependency {raw!r}: {e}") from e
        path = (base / spec.path).resolve() if spec.path else None
        result.append(Dependency(app=spec.app, path=path, deps_dir=deps_dir))

    logger.debug("%d dependencies declared in %s", len(result), base)
    return result
