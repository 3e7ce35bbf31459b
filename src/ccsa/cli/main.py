"""cc-slash-agents (ccsa) - generate slash commands from Claude Code agents."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..core.config import default_scope, get_effective_config, target_scope_for
from ..core.errors import CcsaError, InvalidScopeError
from ..models.scope import Scope, ScopeOption, parse_scope
from ..utils.logger import Logger
from ..utils.sanitize import sanitize_error

SCOPE_CHOICE = click.Choice([s.value for s in ScopeOption], case_sensitive=False)


class Context:
    """Per-invocation state shared by the subcommands."""

    def __init__(self, verbose: bool, cwd: Optional[Path] = None):
        self.cwd = cwd or Path.cwd()
        self.config = get_effective_config(self.cwd)
        self.verbose = verbose or bool(self.config.get("verbose"))

    def logger(self, verbose: bool = False) -> Logger:
        return Logger(verbose=self.verbose or verbose)

    def scope(self, value: Optional[str], command: str) -> ScopeOption:
        try:
            option = parse_scope(value or default_scope(self.config, command))
            target_scope_for(option, self.config)
        except InvalidScopeError as e:
            raise click.UsageError(str(e)) from None
        return option


pass_context = click.make_pass_decorator(Context)


def _run(logger: Logger, label: str, func, *args) -> None:
    """Run an orchestrator step; errors become one line and exit code 1."""
    try:
        exit_code = func(*args)
    except CcsaError as e:
        logger.error(sanitize_error(str(e)))
        sys.exit(1)
    except OSError as e:
        logger.error(f"{label} failed: {sanitize_error(str(e))}")
        sys.exit(1)
    if exit_code:
        sys.exit(exit_code)


@click.group()
@click.version_option(__version__, prog_name="ccsa")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def ccsa_cli(ctx: click.Context, verbose: bool) -> None:
    """Generate slash commands for Claude Code agents.

    \b
    Quick start:
      1. Create agents in .claude/agents/
      2. Run `ccsa generate` to create slash commands
      3. Use /command-name in Claude Code
    """
    ctx.obj = Context(verbose)


@ccsa_cli.command()
@click.option("--scope", "-s", type=SCOPE_CHOICE, help="Source scope: project, user, or both")
@click.option("--dry-run", "-d", is_flag=True, help="Preview changes without writing files")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing files")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@pass_context
def generate(ctx: Context, scope: Optional[str], dry_run: bool, force: bool, verbose: bool) -> None:
    """Generate slash commands from agents."""
    from ..core.orchestrator import run_generate

    logger = ctx.logger(verbose)
    _run(logger, "Generation", run_generate, ctx.cwd, ctx.config, ctx.scope(scope, "generate"), dry_run, force, logger)


@ccsa_cli.command("list")
@click.option("--scope", "-s", type=SCOPE_CHOICE, help="Scope to list: project, user, or both")
@click.option("--agents-only", "-a", is_flag=True, help="Show only agents")
@click.option("--commands-only", "-c", is_flag=True, help="Show only commands")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed information")
@pass_context
def list_cmd(ctx: Context, scope: Optional[str], agents_only: bool, commands_only: bool, verbose: bool) -> None:
    """List discovered agents and commands."""
    from ..core.orchestrator import run_list

    logger = ctx.logger(verbose)
    _run(logger, "List", run_list, ctx.cwd, ctx.config, ctx.scope(scope, "list"), agents_only, commands_only, logger)


@ccsa_cli.command()
@click.option("--scope", "-s", type=SCOPE_CHOICE, help="Scope to sync: project, user, or both")
@click.option("--clean", "-c", is_flag=True, help="Remove orphaned generated commands")
@click.option("--dry-run", "-d", is_flag=True, help="Show the plan without applying it")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@pass_context
def sync(ctx: Context, scope: Optional[str], clean: bool, dry_run: bool, verbose: bool) -> None:
    """Update generated commands when agents change."""
    from ..core.orchestrator import run_sync

    logger = ctx.logger(verbose)
    _run(logger, "Sync", run_sync, ctx.cwd, ctx.config, ctx.scope(scope, "sync"), clean, dry_run, logger)


@ccsa_cli.command()
@click.option("--scope", "-s", type=SCOPE_CHOICE, help="Scope to clean: project, user, or both")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@pass_context
def clean(ctx: Context, scope: Optional[str], yes: bool) -> None:
    """Remove all generated commands."""
    from ..core.orchestrator import run_clean

    logger = ctx.logger()
    _run(logger, "Clean", run_clean, ctx.cwd, ctx.config, ctx.scope(scope, "clean"), yes, logger)


@ccsa_cli.command()
@click.option("--global", "-g", "global_", is_flag=True, help="Initialize user-level structure")
@pass_context
def init(ctx: Context, global_: bool) -> None:
    """Initialize the .claude directory structure."""
    from ..core.orchestrator import run_init

    logger = ctx.logger()
    _run(logger, "Initialization", run_init, ctx.cwd, ctx.config, Scope.USER if global_ else Scope.PROJECT, logger)


@ccsa_cli.command()
@click.option("--scope", "-s", type=SCOPE_CHOICE, help="Scope to explore: project, user, or both")
@click.option("--by", "group_by", type=click.Choice(["category", "scope"]), default="category")
@click.option("--query", "-q", type=str, help="Filter by name or description")
@pass_context
def explore(ctx: Context, scope: Optional[str], group_by: str, query: Optional[str]) -> None:
    """Browse agents by category or scope."""
    from ..core.orchestrator import run_explore

    logger = ctx.logger()
    _run(logger, "Explore", run_explore, ctx.cwd, ctx.config, ctx.scope(scope, "explore"), group_by, query, logger)


def main() -> None:
    ccsa_cli()


if __name__ == "__main__":
    main()
