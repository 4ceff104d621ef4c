"""
Declaration loader — reads project.yml into a ProjectDeclaration.

The declaration lives in the project's directory.  Loading returns the
declaration, or None when the directory declares no project (no file,
or an empty document).  Anything else that goes wrong is a
DeclarationError.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from buildctx.core.models.project import ProjectDeclaration

logger = logging.getLogger(__name__)

# Conventional declaration filename
DECLARATION_FILE = "project.yml"


class DeclarationError(Exception):
    """Raised when a project declaration cannot be read or is invalid."""


def declaration_path(directory: Path | None = None) -> Path:
    """Return the declaration path for a directory (default: cwd)."""
    return (directory or Path.cwd()) / DECLARATION_FILE


def load_declaration(directory: Path | None = None) -> ProjectDeclaration | None:
    """Evaluate the project declaration in a directory.

    Args:
        directory: Project directory (default: cwd).

    Returns:
        The declaration, or None if the directory declares no project.

    Raises:
        DeclarationError: If the file is unreadable or malformed.
    """
    path = declaration_path(directory)
    if not path.is_file():
        logger.debug("No %s in %s", DECLARATION_FILE, path.parent)
        return None

    logger.debug("Loading project declaration from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DeclarationError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise DeclarationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        logger.info("%s is empty, no project declared", path)
        return None

    if not isinstance(data, dict):
        raise DeclarationError(
            f"Expected a YAML mapping in {path}, got {type(data).__name__}"
        )

    # The YAML may wrap everything under a "project" key or be flat
    config = data["project"] if isinstance(data.get("project"), dict) else data

    try:
        declaration = ProjectDeclaration(source=path.resolve(), config=config)
    except ValidationError as e:
        raise DeclarationError(f"Invalid project declaration in {path}: {e}") from e

    logger.info("Loaded project '%s' from %s", declaration.app, path)
    return declaration
