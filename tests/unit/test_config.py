"""Tests for core/config.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from ccsa.core.config import (
    default_scope,
    deep_merge,
    get_effective_config,
    load_config_file,
    target_scope_for,
)
from ccsa.core.errors import InvalidScopeError
from ccsa.models.scope import Scope


class TestDeepMerge:
    def test_simple_merge(self):
        assert deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4}) == {"a": 1, "b": 3, "c": 4}

    def test_nested_merge(self):
        result = deep_merge({"scope": {"list": "both", "sync": "project"}}, {"scope": {"sync": "user"}})
        assert result["scope"] == {"list": "both", "sync": "user"}

    def test_arrays_replaced(self):
        assert deep_merge({"x": [1, 2]}, {"x": [3]})["x"] == [3]

    def test_base_not_mutated(self):
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})
        assert base["a"]["b"] == 1


class TestLoadConfigFile:
    def test_loads_yaml(self, tmp_path: Path):
        path = tmp_path / "ccsa.yaml"
        path.write_text("target_scope: user\n", encoding="utf-8")
        assert load_config_file(path) == {"target_scope": "user"}

    def test_missing_returns_empty(self, tmp_path: Path):
        assert load_config_file(tmp_path / "nope.yaml") == {}

    def test_malformed_returns_empty(self, tmp_path: Path):
        path = tmp_path / "ccsa.yaml"
        path.write_text("a: [unclosed\n", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_non_mapping_returns_empty(self, tmp_path: Path):
        path = tmp_path / "ccsa.yaml"
        path.write_text("- a\n", encoding="utf-8")
        assert load_config_file(path) == {}


class TestGetEffectiveConfig:
    def test_defaults(self, project: Path):
        config = get_effective_config()
        assert config["target_scope"] == "project"
        assert default_scope(config, "list") == "both"
        assert default_scope(config, "sync") == "project"

    def test_scalar_scope_falls_back_to_defaults(self, project: Path, write_file):
        write_file(project / ".claude" / "ccsa.yaml", "scope: user\n")
        config = get_effective_config(project)
        assert default_scope(config, "list") == "both"
        assert default_scope(config, "generate") == "project"

    def test_project_overrides_user(self, project: Path, home: Path, write_file):
        write_file(home / ".claude" / "ccsa.yaml", "description_preview: 40\nverbose: true\n")
        write_file(project / ".claude" / "ccsa.yaml", "description_preview: 60\n")
        config = get_effective_config(project)
        assert config["description_preview"] == 60
        assert config["verbose"] is True

    def test_cli_overrides(self, project: Path, write_file):
        write_file(project / ".claude" / "ccsa.yaml", "target_scope: user\n")
        config = get_effective_config(project, cli_overrides={"target_scope": "project", "verbose": None})
        assert config["target_scope"] == "project"
        assert config["verbose"] is False


class TestTargetScope:
    def test_single_scope(self):
        assert target_scope_for("user") is Scope.USER
        assert target_scope_for("project") is Scope.PROJECT

    def test_both_uses_config(self):
        assert target_scope_for("both") is Scope.PROJECT
        assert target_scope_for("both", {"target_scope": "user"}) is Scope.USER

    def test_both_with_bad_config_raises(self):
        with pytest.raises(InvalidScopeError):
            target_scope_for("both", {"target_scope": "nowhere"})

    def test_bad_config_ignored_for_single_scope(self):
        assert target_scope_for("user", {"target_scope": "nowhere"}) is Scope.USER

    def test_invalid_scope(self):
        with pytest.raises(InvalidScopeError):
            target_scope_for("all")
