"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from buildctx.core.context import ProjectContext, set_context


@pytest.fixture(autouse=True)
def _isolated_process(monkeypatch: pytest.MonkeyPatch):
    """Fresh process-wide context and no inherited build env per test."""
    monkeypatch.delenv("BUILDCTX_ENV", raising=False)
    set_context(None)
    yield
    set_context(None)


@pytest.fixture
def pctx() -> ProjectContext:
    """A fresh project context in the dev environment."""
    return ProjectContext(env="dev")


@pytest.fixture
def write_project() -> Callable[[Path, str], Path]:
    """Write a project.yml into a directory (created if needed)."""

    def _write(directory: Path, content: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "project.yml"
        path.write_text(textwrap.dedent(content))
        return path

    return _write


@pytest.fixture
def umbrella_root(tmp_path: Path, write_project) -> Path:
    """An umbrella with a chain c → b → a under apps/.

    Returns the umbrella root directory.
    """
    root = tmp_path / "root"
    write_project(root, """\
        app: root
        apps_path: apps
    """)
    write_project(root / "apps" / "a", "app: a\n")
    write_project(root / "apps" / "b", """\
        app: b
        deps:
          - app: a
            path: ../a
    """)
    write_project(root / "apps" / "c", """\
        app: c
        deps:
          - app: b
            path: ../b
    """)
    return root
