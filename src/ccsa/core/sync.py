"""Reconcile generated commands with the current set of agents.

Each agent is classified by its batch-resolved command name:

- create: no generated command with that name exists in the target scope
- update: a generated command exists; it is always rewritten
- blocked: a hand-written file occupies the name, whether or not it
  parses as a command; left untouched

With orphan cleanup enabled, generated commands whose name is not in the
resolved set are deleted. Hand-written commands are never modified.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from ..models.agent import AgentEntry
from ..models.command import CommandEntry
from ..models.report import BatchReport
from ..models.scope import Scope
from ..utils.logger import Logger, quiet_logger
from ..utils.sanitize import sanitize_error
from .discovery import is_generated_file
from .errors import AlreadyExistsError
from .generator import command_path, generate_command
from .naming import resolve_conflicts


@dataclass
class SyncPlan:
    target_scope: Scope
    name_map: dict[str, str] = field(default_factory=dict)
    to_create: list[AgentEntry] = field(default_factory=list)
    to_update: list[tuple[AgentEntry, CommandEntry]] = field(default_factory=list)
    to_delete: list[CommandEntry] = field(default_factory=list)
    blocked: list[tuple[AgentEntry, Path]] = field(default_factory=list)
    duplicates: list[AgentEntry] = field(default_factory=list)
    generated: list[CommandEntry] = field(default_factory=list)
    manual: list[CommandEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.to_create or self.to_update or self.to_delete)

    def command_name(self, agent: AgentEntry) -> str:
        return self.name_map[agent.name]


def plan_sync(
    agents: list[AgentEntry],
    commands: list[CommandEntry],
    target_scope: Union[str, Scope],
    clean: bool = False,
    cwd: Optional[Path] = None,
) -> SyncPlan:
    """Classify agents and generated commands. Reads signatures, writes nothing."""
    plan = SyncPlan(target_scope=Scope(target_scope), name_map=resolve_conflicts(agents))

    for command in commands:
        (plan.generated if is_generated_file(command.path) else plan.manual).append(command)

    generated_in_target = {c.stem: c for c in plan.generated if c.scope is plan.target_scope}
    seen: set[str] = set()
    for agent in agents:
        if agent.name in seen:
            plan.duplicates.append(agent)
            continue
        seen.add(agent.name)

        name = plan.name_map[agent.name]
        if name in generated_in_target:
            plan.to_update.append((agent, generated_in_target[name]))
            continue
        target = command_path(name, plan.target_scope, cwd)
        if target.exists() and not is_generated_file(target):
            plan.blocked.append((agent, target))
        else:
            plan.to_create.append(agent)

    if clean:
        expected = set(plan.name_map.values())
        plan.to_delete = [c for c in plan.generated if c.stem not in expected]

    return plan


def execute_sync(
    plan: SyncPlan,
    cwd: Optional[Path] = None,
    logger: Optional[Logger] = None,
) -> BatchReport:
    """Apply a plan: creates, then updates, then deletions.

    Every item is attempted; failures are collected in the report.
    """
    logger = logger or quiet_logger()
    report = BatchReport()

    for agent in plan.to_create:
        name = plan.command_name(agent)
        # Only a file carrying the signature may be replaced.
        force = is_generated_file(command_path(name, plan.target_scope, cwd))
        try:
            generate_command(agent, plan.target_scope, force=force, command_name=name, cwd=cwd)
        except AlreadyExistsError:
            report.skipped.append(name)
            logger.debug(f"Not overwriting hand-written command /{name}")
            continue
        except OSError as e:
            report.errors.append(f"Failed to create command for {agent.name}: {sanitize_error(str(e))}")
            continue
        report.created.append(name)
        logger.debug(f"Created /{name}")

    for agent, _command in plan.to_update:
        name = plan.command_name(agent)
        try:
            generate_command(agent, plan.target_scope, force=True, command_name=name, cwd=cwd)
        except OSError as e:
            report.errors.append(f"Failed to update command for {agent.name}: {sanitize_error(str(e))}")
            continue
        report.updated.append(name)
        logger.debug(f"Updated /{name}")

    for command in plan.to_delete:
        try:
            command.path.unlink()
        except OSError as e:
            report.errors.append(f"Failed to delete {command.relative_path}: {sanitize_error(str(e))}")
            continue
        report.deleted.append(command.command_name)
        logger.debug(f"Deleted: {command.path}")

    for agent, path in plan.blocked:
        report.skipped.append(plan.command_name(agent))
        logger.debug(f"Not overwriting hand-written command {path}")

    return report
