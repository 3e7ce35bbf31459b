"""Console flows behind each ccsa subcommand.

Each run_* function discovers, acts, prints a summary and returns the
process exit code. Per-item failures are reported in the summary and
never stop the batch.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..models.agent import AgentEntry
from ..models.command import CommandEntry
from ..models.report import BatchReport
from ..models.scope import Scope, ScopeOption
from ..utils.logger import Logger
from ..utils.sanitize import sanitize_error
from .clean import delete_commands, find_generated_commands
from .config import target_scope_for
from .discovery import discover_agents, discover_commands, is_generated_file
from .errors import NoAgentDirectoriesError
from .explore import group_by_category, group_by_scope, search_agents
from .generator import command_name_for_agent, command_path, generate_commands
from .init import initialize_structure
from .naming import renamed, resolve_conflicts
from .paths import require_agent_roots, user_root
from .sync import execute_sync, plan_sync


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _truncate(text: str, width: int) -> str:
    text = " ".join(text.split())
    return text if len(text) <= width else text[:width].rstrip() + "..."


def _preview_width(config: dict) -> int:
    try:
        return max(int(config.get("description_preview", 80)), 10)
    except (TypeError, ValueError):
        return 80


def _print_errors(logger: Logger, errors: list[str]) -> None:
    if errors:
        logger.error(f"Errors ({len(errors)}):")
        for error in errors:
            logger.log(f"  - {error}")


def _print_missing_roots(logger: Logger, error: NoAgentDirectoriesError, cwd: Path) -> None:
    logger.error("No agent directories found")
    for path in error.missing:
        shown = path.relative_to(cwd) if path.is_relative_to(cwd) else path
        logger.info(f"To create agents, run: mkdir -p {sanitize_error(str(shown))}")


def run_generate(
    cwd: Path,
    config: dict,
    scope: ScopeOption,
    dry_run: bool,
    force: bool,
    logger: Logger,
) -> int:
    try:
        require_agent_roots(scope, cwd)
    except NoAgentDirectoriesError as e:
        _print_missing_roots(logger, e, cwd)
        return 0

    agents = discover_agents(scope, cwd, logger)
    if not agents:
        logger.warning("No agents found")
        logger.info("Make sure you have .md files with name and description frontmatter in your agents directories")
        return 0

    width = _preview_width(config)
    logger.success(f"Found {_plural(len(agents), 'agent')}")
    logger.header("Discovered Agents")
    for agent in agents:
        logger.log(f"- {agent.name} ({agent.scope.value})")
        logger.dim(f"    {agent.relative_path}")
        logger.dim(f"    {_truncate(agent.metadata.description, width)}")

    name_map = resolve_conflicts(agents)
    conflicts = renamed(name_map)
    if conflicts:
        logger.warning("Naming conflicts resolved:")
        for agent_name, command_name in conflicts:
            logger.dim(f"    {agent_name} -> /{command_name}")

    target = target_scope_for(scope, config)

    if dry_run:
        logger.header("Preview (--dry-run)")
        for agent in agents:
            command_name = name_map[agent.name]
            logger.info(f"Would generate: /{command_name}")
            logger.dim(f"    Source: {agent.relative_path} ({agent.scope.value})")
            logger.dim(f"    Target: {sanitize_error(str(command_path(command_name, target, cwd)))}")
        logger.log("Run without --dry-run to generate files.")
        return 0

    report = generate_commands(agents, target, force=force, name_map=name_map, cwd=cwd, logger=logger)

    logger.header("Generation Summary")
    if report.created:
        logger.success(f"Generated {_plural(len(report.created), 'command')}:")
        for name in report.created:
            logger.log(f"  - /{name}")
    if report.skipped:
        logger.warning(f"Skipped {_plural(len(report.skipped), 'existing command')}:")
        for name in report.skipped:
            logger.log(f"  - /{name} (use --force to overwrite)")
    _print_errors(logger, report.errors)

    if report.created:
        logger.header("Next Steps")
        logger.info("Your new slash commands are ready to use in Claude Code!")
        logger.dim("Run `ccsa list` to see all generated commands.")
        logger.dim("Run `ccsa sync` to update commands when agents change.")

    return 1 if report.errors else 0


def _print_agent(logger: Logger, agent: AgentEntry, verbose: bool, width: int) -> None:
    logger.log(f"- {agent.name} -> /{command_name_for_agent(agent)}")
    if verbose:
        logger.dim(f"    Path: {agent.relative_path}")
        logger.dim(f"    Description: {_truncate(agent.metadata.description, width)}")
        if agent.metadata.tools is not None:
            logger.dim(f"    Tools: {agent.metadata.tools_display()}")
        if agent.metadata.model:
            logger.dim(f"    Model: {agent.metadata.model}")


def _print_command(logger: Logger, command: CommandEntry, verbose: bool) -> None:
    logger.log(f"- /{command.command_name} ({command.scope.value})")
    if verbose:
        logger.dim(f"    Path: {command.relative_path}")
        if command.metadata.description:
            logger.dim(f"    Description: {command.metadata.description}")


def run_list(
    cwd: Path,
    config: dict,
    scope: ScopeOption,
    agents_only: bool,
    commands_only: bool,
    logger: Logger,
) -> int:
    show_agents = not commands_only
    show_commands = not agents_only
    verbose = logger.verbose
    width = _preview_width(config)

    agents = discover_agents(scope, cwd, logger) if show_agents else []
    commands = discover_commands(scope, cwd, logger) if show_commands else []
    generated: list[CommandEntry] = []
    manual: list[CommandEntry] = []
    for command in commands:
        (generated if is_generated_file(command.path) else manual).append(command)

    if not agents and not commands:
        logger.warning("No agents or commands found.")
        logger.info("Make sure you have .md files in .claude/agents/ or ~/.claude/agents/")
        logger.info("Run `ccsa generate` to create commands from agents")
        return 0

    if agents:
        logger.header(f"Agents ({len(agents)})")
        for label, group_scope in (("Project Agents", Scope.PROJECT), ("User Agents", Scope.USER)):
            group = [a for a in agents if a.scope is group_scope]
            if group:
                logger.info(f"{label}:")
                for agent in group:
                    _print_agent(logger, agent, verbose, width)

    if commands:
        logger.header(f"Commands ({len(commands)})")
        for label, group in (("Generated Commands", generated), ("Manual Commands", manual)):
            if group:
                logger.info(f"{label}:")
                for command in group:
                    _print_command(logger, command, verbose)

    logger.header("Summary")
    if show_agents:
        logger.log(f"Agents: {len(agents)}")
    if show_commands:
        logger.log(f"Commands: {len(commands)} ({len(generated)} generated, {len(manual)} manual)")

    if agents and show_commands:
        generated_names = {c.stem for c in generated}
        missing = [a for a in agents if command_name_for_agent(a) not in generated_names]
        if missing:
            logger.info(f"{_plural(len(missing), 'agent')} without generated commands.")
            logger.dim("Run `ccsa generate` to create slash commands for all agents.")

    return 0


def run_sync(
    cwd: Path,
    config: dict,
    scope: ScopeOption,
    clean: bool,
    dry_run: bool,
    logger: Logger,
) -> int:
    agents = discover_agents(scope, cwd, logger)
    commands = discover_commands(scope, cwd, logger)
    logger.success(f"Found {_plural(len(agents), 'agent')} and {_plural(len(commands), 'existing command')}")

    if not agents:
        logger.warning("No agents found to sync")
        return 0

    plan = plan_sync(agents, commands, target_scope_for(scope, config), clean=clean, cwd=cwd)

    logger.header("Sync Analysis")
    logger.log(f"Agents: {len(agents)}")
    logger.log(f"Generated commands: {len(plan.generated)}")
    logger.log(f"Manual commands: {len(plan.manual)}")

    if plan.to_create:
        logger.info(f"Commands to create ({len(plan.to_create)}):")
        for agent in plan.to_create:
            logger.log(f"  - /{plan.command_name(agent)} (from {agent.name})")
    if plan.to_update:
        logger.info(f"Commands to update ({len(plan.to_update)}):")
        for agent, _command in plan.to_update:
            logger.log(f"  - /{plan.command_name(agent)} ({agent.name})")
    if plan.to_delete:
        logger.warning(f"Orphaned commands to delete ({len(plan.to_delete)}):")
        for command in plan.to_delete:
            logger.log(f"  - /{command.command_name} ({command.scope.value})")
    if plan.blocked:
        logger.warning(f"Names taken by manual commands ({len(plan.blocked)}):")
        for agent, _path in plan.blocked:
            logger.log(f"  - /{plan.command_name(agent)} (from {agent.name}, not overwritten)")
    for agent in plan.duplicates:
        logger.warning(f"Duplicate agent name {agent.name!r} in {agent.relative_path} ({agent.scope.value}) ignored")

    if plan.is_empty:
        logger.success("All commands are already up to date!")
        return 0

    if dry_run:
        logger.log("Run without --dry-run to apply these changes.")
        return 0

    report = execute_sync(plan, cwd, logger)
    _print_sync_summary(logger, report)
    return 1 if report.errors else 0


def _print_sync_summary(logger: Logger, report: BatchReport) -> None:
    logger.header("Sync Summary")
    if report.created:
        logger.success(f"Created: {_plural(len(report.created), 'command')}")
    if report.updated:
        logger.success(f"Updated: {_plural(len(report.updated), 'command')}")
    if report.deleted:
        logger.success(f"Deleted: {_plural(len(report.deleted), 'orphaned command')}")
    if report.skipped:
        logger.warning(f"Skipped: {_plural(len(report.skipped), 'command')}")
    _print_errors(logger, report.errors)

    if report.changed:
        logger.header("Next Steps")
        logger.info("Your commands have been synchronized!")
        logger.dim("Run `ccsa list` to verify the changes.")


def run_clean(cwd: Path, config: dict, scope: ScopeOption, yes: bool, logger: Logger) -> int:
    logger.info(f"Cleaning generated commands ({scope.value} scope)...")
    commands = find_generated_commands(scope, cwd, logger)
    if not commands:
        logger.info("No generated commands found to clean.")
        return 0

    logger.warning(f"Found {_plural(len(commands), 'generated command')} to delete:")
    for label, group_scope in (("Project commands", Scope.PROJECT), ("User commands", Scope.USER)):
        group = [c for c in commands if c.scope is group_scope]
        if group:
            logger.info(f"{label}:")
            for command in group:
                logger.log(f"  - /{command.command_name}")

    if not yes:
        prompt = (
            "Delete this generated command?"
            if len(commands) == 1
            else f"Delete all {len(commands)} generated commands?"
        )
        if not click.confirm(prompt, default=False):
            logger.info("Operation cancelled.")
            return 0

    report = delete_commands(commands, logger)
    logger.success(f"Clean completed: {len(report.deleted)}/{len(commands)} commands deleted")
    _print_errors(logger, report.errors)

    if report.deleted:
        logger.dim("Run `ccsa generate` to recreate them from your agents.")
        logger.dim("Manual commands were not affected.")
    return 1 if report.errors else 0


def run_init(cwd: Path, config: dict, scope: Scope, logger: Logger) -> int:
    logger.info(f"Initializing {scope.value} Claude structure...")
    written = initialize_structure(scope, cwd, logger)
    for path in written:
        logger.success(f"Created {sanitize_error(str(path))}")

    logger.success(f"{scope.value.capitalize()} structure initialized!")
    logger.info("Next steps:")
    if scope is Scope.USER:
        logger.dim(f"  1. Customize agents in {sanitize_error(str(user_root('agents')))}")
        logger.dim("  2. Run `ccsa generate --scope user` to create commands")
    else:
        logger.dim("  1. Edit .claude/agents/example-agent.md or create new agents")
        logger.dim("  2. Run `ccsa generate` to create slash commands")
    return 0


def run_explore(
    cwd: Path,
    config: dict,
    scope: ScopeOption,
    group_by: str,
    query: Optional[str],
    logger: Logger,
) -> int:
    agents = discover_agents(scope, cwd, logger)
    if query:
        agents = search_agents(agents, query)
    if not agents:
        logger.warning("No matching agents found." if query else "No agents found.")
        return 0

    width = _preview_width(config)
    groups = group_by_scope(agents) if group_by == "scope" else group_by_category(agents)
    for label, group in groups.items():
        logger.header(f"{label} ({len(group)})")
        for agent in group:
            logger.log(f"- {agent.name} -> /{command_name_for_agent(agent)}")
            logger.dim(f"    {_truncate(agent.metadata.description, width)}")
    return 0
