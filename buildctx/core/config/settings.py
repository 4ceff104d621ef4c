"""
Process settings read from the environment.

    BUILDCTX_ENV             build environment (default: dev)
    BUILDCTX_LOG_LEVEL       console log level (default: WARNING)
    BUILDCTX_LOG_FILE        optional log file path
    BUILDCTX_LOG_FILE_LEVEL  optional log file level
"""

from __future__ import annotations

import os
from dataclasses import dataclass

ENV_VAR = "BUILDCTX_ENV"
DEFAULT_ENV = "dev"


@dataclass(frozen=True)
class Settings:
    """Snapshot of the environment-driven settings."""

    env: str = DEFAULT_ENV
    log_level: str = "WARNING"
    log_file: str | None = None
    log_file_level: str | None = None


def build_env() -> str:
    """Return the build environment named by BUILDCTX_ENV, or ``dev``."""
    return os.environ.get(ENV_VAR) or DEFAULT_ENV


def load_settings() -> Settings:
    """Read all settings from the current process environment."""
    return Settings(
        env=build_env(),
        log_level=os.environ.get("BUILDCTX_LOG_LEVEL", "WARNING"),
        log_file=os.environ.get("BUILDCTX_LOG_FILE"),
        log_file_level=os.environ.get("BUILDCTX_LOG_FILE_LEVEL"),
    )
