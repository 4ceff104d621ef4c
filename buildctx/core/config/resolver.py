"""
Config resolver — merge defaults, declared config and the env overlay.

Layers, lowest precedence first:

    1. DEFAULT_CONFIG       built into the tool
    2. post_config          one-shot overlay registered by the caller
    3. declared config      returned by the project declaration
    4. env[<build env>]     environment-specific overlay

Pure functions, no state.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping

DEFAULT_CONFIG: dict[str, Any] = {
    "compile_path": "ebin",
    "default_env": {"test": "test"},
    "default_task": "run",
    "deps_path": "deps",
    "source_exts": ["ex"],
    "source_paths": ["lib"],
    "watch_exts": ["ex", "eex", "exs"],
    "load_paths": [],
    "lockfile": "mix.lock",
    "native_source_paths": ["src"],
    "native_include_path": "include",
    "native_options": ["debug_info"],
}


def default_config() -> dict[str, Any]:
    """Return a private copy of the static defaults."""
    return copy.deepcopy(DEFAULT_CONFIG)


def apply_env_overlay(declared: Mapping[str, Any], env: str) -> dict[str, Any]:
    """Resolve the ``env`` sub-mapping of a declared config.

    When ``declared["env"]`` holds an entry for ``env``, the ``env`` key
    is dropped and that entry's keys override the declared ones.
    Otherwise the declared config is returned unchanged.
    """
    result = dict(declared)
    envs = result.get("env")
    if not isinstance(envs, Mapping):
        return result

    overlay = envs.get(env)
    if not isinstance(overlay, Mapping):
        return result

    del result["env"]
    result.update(overlay)
    return result


def merge_config(
    defaults: Mapping[str, Any],
    declared: Mapping[str, Any] | None,
    env: str,
    post_config: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the effective configuration of a project.

    Args:
        defaults: Static defaults (usually ``DEFAULT_CONFIG``).
        declared: Mapping returned by the project declaration, or None
            when no project is loaded.
        env: Current build environment.
        post_config: Optional overlay treated as an extra declared
            layer beneath the declared values.

    Returns:
        A new dict; the inputs are never mutated.
    """
    result = copy.deepcopy(dict(defaults))
    if declared is None and not post_config:
        return result

    layer: dict[str, Any] = dict(post_config or {})
    layer.update(declared or {})
    result.update(copy.deepcopy(apply_env_overlay(layer, env)))
    return result
