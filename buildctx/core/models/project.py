"""
Project model — the identity of a loaded project declaration.

Loaded from project.yml, a declaration carries the raw configuration
mapping the project declares plus the file it came from.  Identity is
object identity: the loader caches and re-pushes the same instance.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DependencySpec(BaseModel):
    """A dependency entry declared under ``deps:`` in project.yml."""

    model_config = ConfigDict(extra="allow")

    app: str
    path: str | None = None
    version: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_name(cls, data: Any) -> Any:
        """Accept a bare app name as shorthand for ``{app: <name>}``."""
        if isinstance(data, str):
            return {"app": data}
        return data


class ProjectDeclaration(BaseModel):
    """A loaded project declaration.

    ``config`` is the declared mapping exactly as written (it may hold
    an ``env`` sub-mapping).  Its ``deps`` entry is read through
    ``buildctx.core.services.deps.children`` once the config is merged.
    """

    source: Path
    config: dict[str, Any] = Field(default_factory=dict)

    @property
    def app(self) -> str | None:
        """Declared application name, if any."""
        app = self.config.get("app")
        return str(app) if app is not None else None

    @property
    def directory(self) -> Path:
        """Directory holding the declaration file."""
        return self.source.parent

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        return f"ProjectDeclaration(app={self.app!r}, source={str(self.source)!r})"
