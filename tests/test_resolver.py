"""
Tests for config resolution — defaults, declared config, env overlay.
"""

from buildctx.core.config.resolver import (
    DEFAULT_CONFIG,
    apply_env_overlay,
    default_config,
    merge_config,
)


class TestDefaults:
    def test_static_defaults(self):
        assert DEFAULT_CONFIG["compile_path"] == "ebin"
        assert DEFAULT_CONFIG["default_env"] == {"test": "test"}
        assert DEFAULT_CONFIG["default_task"] == "run"
        assert DEFAULT_CONFIG["deps_path"] == "deps"
        assert DEFAULT_CONFIG["lockfile"] == "mix.lock"
        assert DEFAULT_CONFIG["load_paths"] == []
        assert DEFAULT_CONFIG["watch_exts"] == ["ex", "eex", "exs"]
        assert DEFAULT_CONFIG["native_options"] == ["debug_info"]

    def test_default_config_is_a_copy(self):
        config = default_config()
        config["source_paths"].append("extra")
        assert DEFAULT_CONFIG["source_paths"] == ["lib"]


class TestMergeConfig:
    def test_no_project_yields_defaults(self):
        assert merge_config(DEFAULT_CONFIG, None, "dev") == DEFAULT_CONFIG

    def test_declared_overrides_defaults(self):
        config = merge_config(DEFAULT_CONFIG, {"compile_path": "out", "app": "x"}, "dev")
        assert config["compile_path"] == "out"
        assert config["app"] == "x"
        assert config["deps_path"] == "deps"

    def test_env_overlay_wins_over_declared(self):
        declared = {
            "compile_path": "out",
            "deps_path": "vendor",
            "env": {"prod": {"compile_path": "release"}},
        }
        config = merge_config(DEFAULT_CONFIG, declared, "prod")
        assert config["compile_path"] == "release"
        assert config["deps_path"] == "vendor"
        assert config["lockfile"] == "mix.lock"
        assert "env" not in config

    def test_unmatched_env_keeps_env_entry(self):
        declared = {"compile_path": "out", "env": {"prod": {"compile_path": "release"}}}
        config = merge_config(DEFAULT_CONFIG, declared, "dev")
        assert config["compile_path"] == "out"
        assert config["env"] == {"prod": {"compile_path": "release"}}

    def test_post_config_sits_below_declared(self):
        config = merge_config(
            DEFAULT_CONFIG,
            {"deps_path": "declared"},
            "dev",
            post_config={"deps_path": "post", "lockfile": "other.lock"},
        )
        assert config["deps_path"] == "declared"
        assert config["lockfile"] == "other.lock"

    def test_post_config_env_overlay_applies(self):
        config = merge_config(
            DEFAULT_CONFIG,
            {},
            "test",
            post_config={"env": {"test": {"compile_path": "test_ebin"}}},
        )
        assert config["compile_path"] == "test_ebin"

    def test_inputs_not_mutated(self):
        declared = {"env": {"dev": {"a": 1}}, "list": [1]}
        merge_config(DEFAULT_CONFIG, declared, "dev")
        assert declared == {"env": {"dev": {"a": 1}}, "list": [1]}


class TestApplyEnvOverlay:
    def test_non_mapping_env_ignored(self):
        assert apply_env_overlay({"env": "dev"}, "dev") == {"env": "dev"}

    def test_non_mapping_overlay_ignored(self):
        declared = {"env": {"dev": None}}
        assert apply_env_overlay(declared, "dev") == declared
