"""Tests for utils/logger.py and utils/sanitize.py."""

from __future__ import annotations

import io
from pathlib import Path

from rich.console import Console

from ccsa.utils.logger import Logger
from ccsa.utils.sanitize import sanitize_error


def _logger(verbose: bool) -> tuple[Logger, io.StringIO]:
    buffer = io.StringIO()
    return Logger(verbose=verbose, console=Console(file=buffer, no_color=True, width=200)), buffer


class TestLogger:
    def test_debug_hidden_by_default(self):
        logger, buffer = _logger(verbose=False)
        logger.debug("hidden detail")
        assert buffer.getvalue() == ""

    def test_debug_shown_when_verbose(self):
        logger, buffer = _logger(verbose=True)
        logger.debug("shown detail")
        assert "shown detail" in buffer.getvalue()

    def test_levels_prefix(self):
        logger, buffer = _logger(verbose=False)
        logger.success("done")
        logger.warning("careful")
        logger.error("broken")
        out = buffer.getvalue()
        assert "OK done" in out
        assert "WARN careful" in out
        assert "ERROR broken" in out

    def test_markup_in_message_escaped(self):
        logger, buffer = _logger(verbose=False)
        logger.log("[task description]")
        assert "[task description]" in buffer.getvalue()

    def test_independent_instances(self):
        loud, loud_buffer = _logger(verbose=True)
        quiet, quiet_buffer = _logger(verbose=False)
        loud.debug("x")
        quiet.debug("x")
        assert loud_buffer.getvalue()
        assert not quiet_buffer.getvalue()


class TestSanitize:
    def test_home_replaced(self, home: Path):
        assert sanitize_error(f"cannot write {home}/.claude/commands/x.md") == "cannot write ~/.claude/commands/x.md"

    def test_empty(self):
        assert sanitize_error("") == ""
