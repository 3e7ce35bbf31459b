"""Scaffolding of the .claude directory structure."""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Optional

from ..models.scope import Scope
from ..utils.logger import Logger, quiet_logger
from .paths import project_claude_dir, user_claude_dir

# Template written into agents/ for each scope, taken from ccsa/data.
STARTER_AGENTS = {
    Scope.PROJECT: "example-agent.md",
    Scope.USER: "productivity-helper.md",
}


def load_template(name: str) -> str:
    return (resources.files("ccsa.data") / name).read_text(encoding="utf-8")


def initialize_structure(
    scope: Scope = Scope.PROJECT,
    cwd: Optional[Path] = None,
    logger: Optional[Logger] = None,
) -> list[Path]:
    """Create agents/ and commands/ for scope. Returns the files written.

    Safe to run repeatedly; existing files are never overwritten.
    """
    logger = logger or quiet_logger()
    claude_dir = user_claude_dir() if scope is Scope.USER else project_claude_dir(cwd)

    for subdir in ("agents", "commands"):
        logger.debug(f"Creating {claude_dir / subdir}")
        (claude_dir / subdir).mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    starter = STARTER_AGENTS[scope]
    targets = {claude_dir / "agents" / starter: starter}
    if scope is Scope.PROJECT:
        targets[claude_dir / "README.md"] = "README.md"

    for target, template in targets.items():
        if target.exists():
            continue
        target.write_text(load_template(template), encoding="utf-8")
        written.append(target)

    return written
