"""
Project context — the single source of truth for "what project is active."

A ProjectContext owns the active-project stack, the declaration cache
and the one-shot post-config overlay.  Every operation takes the same
lock, so push/pop/cache reads and writes never interleave.

Only the top of the stack is observable.  A frame may carry a None
project paired with the default config, so tasks still get sane
defaults when the directory declares no project.

The process has one default context, registered ONCE at startup by
whichever entry point launches the tool:

    - CLI:    main.py  → get_context()
    - Tests:  conftest → set_context(ProjectContext(...))
"""

from __future__ import annotations

import copy
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from buildctx.core.config.resolver import DEFAULT_CONFIG, default_config, merge_config
from buildctx.core.config.settings import build_env
from buildctx.core.models.project import ProjectDeclaration

logger = logging.getLogger(__name__)


class NoProjectError(RuntimeError):
    """Raised when a caller requires a project but none is loaded."""

    def __init__(self, message: str = "Could not find a project.yml in the current directory") -> None:
        super().__init__(message)


class EmptyStackError(RuntimeError):
    """Raised when popping a project stack that has nothing pushed."""


@dataclass(frozen=True)
class ProjectFrame:
    """One entry of the active-project stack."""

    project: ProjectDeclaration | None
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CacheEntry:
    """A cached load result; ``project`` is None for "no project here"."""

    project: ProjectDeclaration | None


class ProjectContext:
    """Active-project stack plus declaration cache, behind one lock.

    Args:
        env: Build environment used when resolving pushed configs.
            Defaults to BUILDCTX_ENV (or ``dev``).
    """

    def __init__(self, env: str | None = None) -> None:
        self._lock = threading.RLock()
        self._stack: list[ProjectFrame] = []
        self._cache: dict[str, CacheEntry] = {}
        self._post_config: dict[str, Any] = {}
        self._env = env or build_env()

    # ── Environment ─────────────────────────────────────────────

    @property
    def env(self) -> str:
        with self._lock:
            return self._env

    @env.setter
    def env(self, value: str) -> None:
        with self._lock:
            self._env = value

    # ── Stack ───────────────────────────────────────────────────

    def push(self, project: ProjectDeclaration | None) -> ProjectFrame:
        """Resolve the project's config and push it on the stack.

        Consumes the pending post-config overlay.
        """
        with self._lock:
            declared = project.config if project is not None else None
            config = merge_config(
                DEFAULT_CONFIG, declared, self._env, post_config=self._post_config
            )
            self._post_config = {}
            frame = ProjectFrame(project=project, config=config)
            self._stack.append(frame)
            logger.debug(
                "Pushed project %s (depth=%d)", _label(project), len(self._stack)
            )
            return frame

    def pop(self) -> ProjectFrame:
        """Remove and return the top frame.

        Raises:
            EmptyStackError: If nothing was pushed.
        """
        with self._lock:
            if not self._stack:
                raise EmptyStackError("Cannot pop project: the project stack is empty")
            frame = self._stack.pop()
            logger.debug(
                "Popped project %s (depth=%d)", _label(frame.project), len(self._stack)
            )
            return frame

    def refresh(self) -> ProjectFrame:
        """Re-resolve the top project's config against the current env.

        Pop and push happen under one lock acquisition, so no other
        thread sees the stack one frame short.

        Raises:
            EmptyStackError: If nothing was pushed.
        """
        with self._lock:
            frame = self.pop()
            return self.push(frame.project)

    def current(self) -> ProjectDeclaration | None:
        """Identity on top of the stack, or None."""
        with self._lock:
            return self._stack[-1].project if self._stack else None

    def current_config(self) -> dict[str, Any]:
        """Config on top of the stack; the defaults when no project is active."""
        with self._lock:
            if self._stack and self._stack[-1].project is not None:
                return copy.deepcopy(self._stack[-1].config)
            return default_config()

    @property
    def depth(self) -> int:
        with self._lock:
            return len(self._stack)

    @contextmanager
    def scoped(self, project: ProjectDeclaration | None) -> Iterator[ProjectFrame]:
        """Push ``project`` for the duration of a with-block."""
        frame = self.push(project)
        try:
            yield frame
        finally:
            self.pop()

    # ── Post config ─────────────────────────────────────────────

    def register_post_config(self, overlay: Mapping[str, Any] | None) -> None:
        """Store an overlay merged into the next pushed project's config."""
        with self._lock:
            self._post_config = dict(overlay or {})

    def discard_post_config(self) -> None:
        with self._lock:
            self._post_config = {}

    # ── Declaration cache ───────────────────────────────────────

    def cache_get(self, app: str) -> CacheEntry | None:
        """Return the cached entry for ``app``, or None if never loaded."""
        with self._lock:
            return self._cache.get(app)

    def cache_put(self, app: str, project: ProjectDeclaration | None) -> CacheEntry:
        with self._lock:
            entry = CacheEntry(project=project)
            self._cache[app] = entry
            return entry

    def cache_clear(self) -> None:
        """Forget every cached declaration."""
        with self._lock:
            self._cache.clear()


def _label(project: ProjectDeclaration | None) -> str:
    if project is None:
        return "<none>"
    return project.app or str(project.source)


# ── Process default ─────────────────────────────────────────────

_context: ProjectContext | None = None
_context_guard = threading.Lock()


def get_context() -> ProjectContext:
    """Return the process-wide context, creating it on first use."""
    global _context
    with _context_guard:
        if _context is None:
            _context = ProjectContext()
        return _context


def set_context(context: ProjectContext | None) -> None:
    """Replace the process-wide context (None resets it)."""
    global _context
    with _context_guard:
        _context = context
