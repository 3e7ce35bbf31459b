"""Console logger.

Wraps a rich Console. Verbosity is fixed at construction time and the
logger is passed explicitly to anything that reports progress.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape


class Logger:
    def __init__(self, verbose: bool = False, console: Optional[Console] = None):
        self.verbose = verbose
        self.console = console or Console(highlight=False, soft_wrap=True)

    def info(self, message: str) -> None:
        self.console.print(f"  [blue]INFO[/blue] {escape(message)}")

    def success(self, message: str) -> None:
        self.console.print(f"  [green]OK[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"  [yellow]WARN[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"  [red]ERROR[/red] {escape(message)}")

    def debug(self, message: str) -> None:
        if self.verbose:
            self.console.print(f"  [dim]DEBUG {escape(message)}[/dim]")

    def header(self, message: str) -> None:
        self.console.print(f"\n  [bold cyan]{escape(message)}[/bold cyan]")

    def dim(self, message: str) -> None:
        self.console.print(f"  [dim]{escape(message)}[/dim]")

    def log(self, message: str = "") -> None:
        self.console.print(f"  {escape(message)}" if message else "")


def quiet_logger() -> Logger:
    """Logger used when the caller does not supply one."""
    return Logger(verbose=False)
