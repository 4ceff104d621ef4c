"""
Tests for declared-dependency discovery.
"""

from pathlib import Path

import pytest

from buildctx.core.config.loader import DeclarationError
from buildctx.core.services.deps import Dependency, children


class TestChildren:
    def test_path_dependency_resolved(self, tmp_path: Path):
        (tmp_path / "apps" / "a").mkdir(parents=True)
        base = tmp_path / "apps" / "b"
        base.mkdir()

        deps = children({"deps": [{"app": "a", "path": "../a"}]}, base)

        assert len(deps) == 1
        assert deps[0].app == "a"
        assert deps[0].path == (tmp_path / "apps" / "a").resolve()
        assert deps[0].available
        assert deps[0].in_umbrella(tmp_path / "apps")

    def test_missing_path_not_available(self, tmp_path: Path):
        deps = children({"deps": [{"app": "ghost", "path": "../ghost"}]}, tmp_path)
        assert not deps[0].available

    def test_deps_path_dependency(self, tmp_path: Path):
        (tmp_path / "vendor" / "lib").mkdir(parents=True)
        deps = children({"deps_path": "vendor", "deps": ["lib"]}, tmp_path)
        assert deps[0].path is None
        assert deps[0].available
        assert not deps[0].in_umbrella(tmp_path)

    def test_outside_umbrella(self, tmp_path: Path):
        (tmp_path / "elsewhere" / "a").mkdir(parents=True)
        (tmp_path / "apps").mkdir()
        deps = children({"deps": [{"app": "a", "path": "elsewhere/a"}]}, tmp_path)
        assert deps[0].available
        assert not deps[0].in_umbrella(tmp_path / "apps")

    def test_invalid_entry_raises(self, tmp_path: Path):
        with pytest.raises(DeclarationError, match="Invalid dependency"):
            children({"deps": [{"path": "x"}, "ok"]}, tmp_path)

    def test_no_deps(self, tmp_path: Path):
        assert children({}, tmp_path) == []


class TestDependency:
    def test_location_without_dirs(self):
        assert Dependency(app="a").location is None
        assert not Dependency(app="a").available
