"""
Domain models — Pydantic types for project declarations.

    from buildctx.core.models import ProjectDeclaration, DependencySpec
"""

from buildctx.core.models.project import DependencySpec, ProjectDeclaration

__all__ = [
    "DependencySpec",
    "ProjectDeclaration",
]
