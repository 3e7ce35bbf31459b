"""Location of the project and user .claude directories."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Union

from ..models.scope import Scope, ScopeOption, parse_scope
from .errors import NoAgentDirectoriesError

Kind = Literal["agents", "commands"]

CLAUDE_DIR = ".claude"


@dataclass(frozen=True)
class ScopedRoot:
    path: Path
    scope: Scope


def user_claude_dir() -> Path:
    return Path.home() / CLAUDE_DIR


def project_claude_dir(cwd: Optional[Path] = None) -> Path:
    return Path(cwd or Path.cwd()) / CLAUDE_DIR


def user_root(kind: Kind) -> Path:
    return user_claude_dir() / kind


def project_root(kind: Kind, cwd: Optional[Path] = None) -> Path:
    return project_claude_dir(cwd) / kind


def scope_root(kind: Kind, scope: Scope, cwd: Optional[Path] = None) -> Path:
    if scope is Scope.USER:
        return user_root(kind)
    return project_root(kind, cwd)


def candidate_roots(
    scope: Union[str, ScopeOption], kind: Kind = "agents", cwd: Optional[Path] = None
) -> list[ScopedRoot]:
    """All roots for a scope option, whether or not they exist."""
    option = parse_scope(scope)
    return [ScopedRoot(scope_root(kind, s, cwd), s) for s in option.scopes()]


def valid_roots(
    scope: Union[str, ScopeOption] = ScopeOption.BOTH,
    kind: Kind = "agents",
    cwd: Optional[Path] = None,
) -> list[ScopedRoot]:
    """Roots for the scope option that currently exist, project first.

    Missing roots are omitted, not reported. An empty list means no
    directories were found, which callers report separately from
    "no agents found".
    """
    return [root for root in candidate_roots(scope, kind, cwd) if root.path.is_dir()]


def expand_home(path: Union[str, Path]) -> Path:
    """Expand a leading ``~/`` to the home directory, else make absolute."""
    text = str(path)
    if text == "~" or text.startswith("~/"):
        return Path.home() / text[2:]
    return Path(os.path.abspath(text))


def is_claude_project(cwd: Optional[Path] = None) -> bool:
    return project_claude_dir(cwd).is_dir()


def require_agent_roots(
    scope: Union[str, ScopeOption], cwd: Optional[Path] = None
) -> list[ScopedRoot]:
    """valid_roots for agents, raising NoAgentDirectoriesError when empty."""
    roots = valid_roots(scope, "agents", cwd)
    if not roots:
        raise NoAgentDirectoriesError([r.path for r in candidate_roots(scope, "agents", cwd)])
    return roots
