"""Command file generation from agents."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..models.agent import AgentEntry
from ..models.command import GenerateResult
from ..models.report import BatchReport
from ..models.scope import Scope
from ..utils.logger import Logger, quiet_logger
from ..utils.sanitize import sanitize_error
from .discovery import MARKDOWN_SUFFIX, SIGNATURE_MARKER, SIGNATURE_PHRASE
from .errors import AlreadyExistsError, InvalidScopeError
from .naming import derive_name, resolve_conflicts
from .paths import scope_root

ARGUMENT_HINT = "[task description]"


def command_name_for_agent(agent: AgentEntry) -> str:
    """Command name for one agent in isolation.

    Use naming.resolve_conflicts when generating a batch.
    """
    return derive_name(agent.name)


def command_path(command_name: str, target_scope: Scope, cwd: Optional[Path] = None) -> Path:
    return scope_root("commands", target_scope, cwd) / f"{command_name}{MARKDOWN_SUFFIX}"


def _command_header(agent: AgentEntry) -> dict[str, Any]:
    header: dict[str, Any] = {
        "description": agent.metadata.description,
        "argument-hint": ARGUMENT_HINT,
    }
    if agent.metadata.tools is not None:
        header["allowed-tools"] = agent.metadata.tools
    if agent.metadata.model:
        header["model"] = agent.metadata.model
    return header


def render_command(agent: AgentEntry) -> str:
    """Render the full command file text for an agent."""
    header = yaml.safe_dump(
        _command_header(agent),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=10_000,
    )
    body = agent.body.strip("\n")
    return (
        f"---\n{header}---\n\n"
        f"{SIGNATURE_MARKER}\n\n"
        f"{body}\n\n"
        "## Task\n\n"
        "$ARGUMENTS\n\n"
        "---\n\n"
        f"*{SIGNATURE_PHRASE} from `{agent.relative_path}` ({agent.scope.value} agent "
        f"`{agent.name}`). Edit the agent and run `ccsa sync` instead of editing this file.*\n"
    )


def generate_command(
    agent: AgentEntry,
    target_scope: Union[str, Scope],
    force: bool = False,
    command_name: Optional[str] = None,
    cwd: Optional[Path] = None,
) -> GenerateResult:
    """Write the command file for an agent.

    command_name overrides the isolated derivation; batch callers pass the
    name from resolve_conflicts. Raises AlreadyExistsError when the target
    exists and force is False.
    """
    try:
        scope = Scope(target_scope)
    except ValueError:
        raise InvalidScopeError(target_scope) from None
    name = command_name or command_name_for_agent(agent)
    path = command_path(name, scope, cwd)

    if path.exists() and not force:
        raise AlreadyExistsError(path)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_command(agent), encoding="utf-8")
    return GenerateResult(command_name=name, path=path)


def generate_commands(
    agents: list[AgentEntry],
    target_scope: Union[str, Scope],
    force: bool = False,
    name_map: Optional[dict[str, str]] = None,
    cwd: Optional[Path] = None,
    logger: Optional[Logger] = None,
) -> BatchReport:
    """Generate commands for every agent, continuing past failures.

    Existing targets are recorded as skipped unless force is set.
    """
    logger = logger or quiet_logger()
    name_map = name_map if name_map is not None else resolve_conflicts(agents)
    report = BatchReport()
    seen: set[str] = set()

    for agent in agents:
        command_name = name_map.get(agent.name) or command_name_for_agent(agent)
        if agent.name in seen:
            logger.debug(f"Skipping duplicate agent name {agent.name!r} at {agent.path}")
            report.skipped.append(command_name)
            continue
        seen.add(agent.name)

        try:
            result = generate_command(agent, target_scope, force=force, command_name=command_name, cwd=cwd)
        except AlreadyExistsError:
            report.skipped.append(command_name)
            continue
        except OSError as e:
            report.errors.append(f"{command_name}: {sanitize_error(str(e))}")
            continue
        report.created.append(result.command_name)
        logger.debug(f"Generated /{result.command_name} -> {result.path}")

    return report
