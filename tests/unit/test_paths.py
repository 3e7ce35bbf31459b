"""Tests for core/paths.py."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from ccsa.core.errors import InvalidScopeError, NoAgentDirectoriesError
from ccsa.core.paths import (
    expand_home,
    is_claude_project,
    project_root,
    require_agent_roots,
    scope_root,
    user_root,
    valid_roots,
)
from ccsa.models.scope import Scope


class TestRoots:
    def test_user_root(self, home: Path):
        assert user_root("agents") == home / ".claude" / "agents"
        assert user_root("commands") == home / ".claude" / "commands"

    def test_project_root_defaults_to_cwd(self, project: Path):
        assert project_root("agents") == project / ".claude" / "agents"

    def test_project_root_custom_cwd(self, tmp_path: Path):
        assert project_root("commands", tmp_path) == tmp_path / ".claude" / "commands"

    def test_scope_root(self, project: Path, home: Path):
        assert scope_root("agents", Scope.USER) == home / ".claude" / "agents"
        assert scope_root("agents", Scope.PROJECT, project) == project / ".claude" / "agents"

    def test_no_side_effects(self, project: Path):
        project_root("agents")
        user_root("agents")
        assert not (project / ".claude").exists()


class TestValidRoots:
    def test_none_exist(self, project: Path):
        assert valid_roots("both") == []

    def test_only_existing_returned(self, project: Path, home: Path):
        (home / ".claude" / "agents").mkdir(parents=True)
        roots = valid_roots("both")
        assert [r.scope for r in roots] == [Scope.USER]

    def test_project_first(self, project: Path, home: Path):
        (project / ".claude" / "agents").mkdir(parents=True)
        (home / ".claude" / "agents").mkdir(parents=True)
        roots = valid_roots("both")
        assert [r.scope for r in roots] == [Scope.PROJECT, Scope.USER]

    def test_scope_filter(self, project: Path, home: Path):
        (project / ".claude" / "agents").mkdir(parents=True)
        (home / ".claude" / "agents").mkdir(parents=True)
        assert [r.scope for r in valid_roots("user")] == [Scope.USER]
        assert [r.scope for r in valid_roots("project")] == [Scope.PROJECT]

    def test_commands_kind(self, project: Path):
        (project / ".claude" / "commands").mkdir(parents=True)
        roots = valid_roots("project", "commands")
        assert roots[0].path == project / ".claude" / "commands"

    def test_invalid_scope(self, project: Path):
        with pytest.raises(InvalidScopeError):
            valid_roots("everywhere")

    def test_require_agent_roots_raises_with_guidance(self, project: Path, home: Path):
        with pytest.raises(NoAgentDirectoriesError) as exc:
            require_agent_roots("both")
        assert exc.value.missing == [project / ".claude" / "agents", home / ".claude" / "agents"]


class TestExpandHome:
    def test_expands_tilde(self, home: Path):
        assert expand_home("~/test/path") == home / "test" / "path"

    def test_absolute_unchanged(self):
        assert expand_home("/absolute/path") == Path("/absolute/path")

    def test_relative_resolved_against_cwd(self, project: Path):
        assert expand_home("relative/path") == Path(os.getcwd()) / "relative" / "path"

    def test_tilde_in_middle_not_expanded(self, project: Path):
        assert expand_home("a/~/b") == Path(os.getcwd()) / "a" / "~" / "b"


def test_is_claude_project(project: Path):
    assert not is_claude_project()
    (project / ".claude").mkdir()
    assert is_claude_project()
