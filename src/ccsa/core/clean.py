"""Removal of generated command files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from ..models.command import CommandEntry
from ..models.report import BatchReport
from ..models.scope import ScopeOption
from ..utils.logger import Logger, quiet_logger
from ..utils.sanitize import sanitize_error
from .discovery import discover_commands, generated_commands


def find_generated_commands(
    scope: Union[str, ScopeOption] = ScopeOption.PROJECT,
    cwd: Optional[Path] = None,
    logger: Optional[Logger] = None,
) -> list[CommandEntry]:
    """Generated commands under the commands roots for scope."""
    return generated_commands(discover_commands(scope, cwd, logger))


def delete_commands(commands: list[CommandEntry], logger: Optional[Logger] = None) -> BatchReport:
    """Delete each command file, continuing past failures."""
    logger = logger or quiet_logger()
    report = BatchReport()
    for command in commands:
        try:
            command.path.unlink()
        except OSError as e:
            report.errors.append(f"Failed to delete {command.relative_path}: {sanitize_error(str(e))}")
            continue
        report.deleted.append(command.command_name)
        logger.debug(f"Deleted: {command.path}")
    return report
