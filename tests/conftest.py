"""Shared fixtures for ccsa tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from ccsa.core.discovery import SIGNATURE_MARKER, SIGNATURE_PHRASE


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def agent_md(name: str, description: str = "Does things", tools: str = "", body: str = "Agent prompt.\n") -> str:
    header = f"---\nname: {name}\ndescription: {description}\n"
    if tools:
        header += f"tools: {tools}\n"
    return header + "---\n\n" + body


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at an empty temp dir."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    return home_dir


@pytest.fixture
def project(tmp_path: Path, home: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty project directory used as the working directory."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    monkeypatch.chdir(project_dir)
    return project_dir


@pytest.fixture
def sample_tree(project: Path, home: Path) -> Path:
    """Project and user agents/commands mirroring a typical setup."""
    agents = project / ".claude" / "agents"
    write(agents / "project-agent.md", agent_md("project-agent", "A project agent", tools="Read, Write, Edit"))
    write(agents / "review" / "code-reviewer.md", agent_md("code-reviewer", "Reviews code"))
    write(agents / "invalid-agent.md", "---\nname: invalid-agent\n---\n\nNo description.\n")
    write(agents / "no-frontmatter.md", "Just some markdown.\n")

    user_agents = home / ".claude" / "agents"
    write(
        user_agents / "user-agent.md",
        "---\nname: user-agent\ndescription: A user agent\ntools:\n  - Read\n  - Grep\n  - Bash\n---\n\nUser prompt.\n",
    )
    write(user_agents / "complex.md", agent_md("complex-testing-agent", "Complex", tools="Read", body="# Title\n\nBody.\n"))

    commands = project / ".claude" / "commands"
    write(
        commands / "manual-command.md",
        "---\ndescription: A manually created command for testing\nargument-hint: test parameters\n---\n\nManual.\n",
    )
    write(
        commands / "generated-command.md",
        f"---\ndescription: Generated\n---\n\n{SIGNATURE_MARKER}\n\nBody\n\n*{SIGNATURE_PHRASE}*\n",
    )
    write(home / ".claude" / "commands" / "user-command.md", "---\ndescription: User command\n---\n\nUser.\n")
    return project


@pytest.fixture
def write_file():
    return write


@pytest.fixture
def agent_text():
    return agent_md
