"""
Logging setup — console and optional file output for buildctx.

main.py calls ``setup_logging`` once with the process Settings.  Modules
log through ``logging.getLogger(__name__)``; every record is stamped
with the active build environment (``%(build_env)s``) so a log file
shared across ``--env`` runs stays readable.

Console level: ``level`` argument (from -v/-q/--debug), else
BUILDCTX_LOG_LEVEL.  The file handler, when BUILDCTX_LOG_FILE is set,
has its own level and always uses the detailed format.
"""

from __future__ import annotations

import logging
import sys

from buildctx.core.config.settings import Settings

_CONSOLE_FMT = "%(message)s"
_CONSOLE_FMT_DEBUG = "%(levelname)s [%(build_env)s] %(name)s:%(lineno)d: %(message)s"
_FILE_FMT = "%(asctime)s %(levelname)s [%(build_env)s] %(name)s: %(message)s"

# Libraries buildctx drives; only let them through at DEBUG
_LIBRARY_LOGGERS = ("yaml", "pydantic")


class BuildEnvFilter(logging.Filter):
    """Attach the build environment to every record."""

    def __init__(self, env: str) -> None:
        super().__init__()
        self.env = env

    def filter(self, record: logging.LogRecord) -> bool:
        record.build_env = self.env
        return True


def setup_logging(settings: Settings, level: str | None = None) -> None:
    """Install the root handlers for this process.

    Args:
        settings: Environment-driven settings (env, levels, log file).
        level: Console level override; ``settings.log_level`` if None.
    """
    console_level = _parse_level(level or settings.log_level)
    env_filter = BuildEnvFilter(settings.env)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(env_filter)
    fmt = _CONSOLE_FMT_DEBUG if console_level <= logging.DEBUG else _CONSOLE_FMT
    console.setFormatter(logging.Formatter(fmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if settings.log_file:
        file_level = _parse_level(settings.log_file_level or settings.log_level)
        handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.addFilter(env_filter)
        handler.setFormatter(logging.Formatter(_FILE_FMT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    library_level = logging.NOTSET if console_level <= logging.DEBUG else logging.WARNING
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def _parse_level(name: str | None) -> int:
    """Level name to number; unknown or empty names mean WARNING."""
    numeric = logging.getLevelName(name.upper()) if name else None
    return numeric if isinstance(numeric, int) else logging.WARNING
