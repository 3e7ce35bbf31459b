"""YAML frontmatter splitting, decoding and repair.

A frontmatter block is a leading ``---`` line, YAML, and a closing ``---``
line. Splitting and loading go through python-frontmatter's YAML handler.
Decoding happens in two phases: a plain load and, if that fails, one
retry after re-quoting scalar values that contain ``:`` or ``#``. The
repair is a targeted salvage for hand-written descriptions such as
``description: Use when: reviewing code``. It does not fix broken
indentation, unterminated quotes, or anything else YAML rejects.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import yaml
from frontmatter.default_handlers import YAMLHandler

from .errors import FrontmatterError

_KEY_VALUE_RE = re.compile(r"^(\s*[\w-]+):\s*(.*)$")


class FenceHandler(YAMLHandler):
    """YAML handler whose fences consume their own line break.

    The body after the closing fence is returned as written.
    """

    FM_BOUNDARY = re.compile(r"^---[ \t]*(?:\r?\n|\Z)", re.MULTILINE)


_HANDLER = FenceHandler()


class DecodeStatus(str, Enum):
    OK = "ok"
    REPAIRED = "repaired"
    FAILED = "failed"


@dataclass(frozen=True)
class ParseResult:
    status: DecodeStatus
    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    has_header: bool = False
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status is not DecodeStatus.FAILED

    def unwrap(self) -> tuple[dict[str, Any], str]:
        """Return (metadata, body) or raise FrontmatterError."""
        if self.status is DecodeStatus.FAILED:
            raise FrontmatterError(f"Invalid frontmatter: {self.error}", self.error)
        return self.metadata, self.body


def split_frontmatter(text: str) -> tuple[Optional[str], str]:
    """Split raw text into (header, body). header is None when absent."""
    if not _HANDLER.detect(text):
        return None, text
    try:
        header, body = _HANDLER.split(text)
    except ValueError:
        # opening fence without a closing one
        return None, text
    return header, body


def _decode(header: str) -> dict[str, Any]:
    data = _HANDLER.load(header)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise yaml.YAMLError(f"frontmatter must be a mapping, got {type(data).__name__}")
    return data


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def repair_header(header: str) -> str:
    """Quote unquoted scalar values containing ':' or '#'.

    Values already quoted or starting a flow collection are left alone.
    """
    fixed: list[str] = []
    for line in header.split("\n"):
        m = _KEY_VALUE_RE.match(line.rstrip("\r"))
        if m:
            key, value = m.group(1), m.group(2).rstrip()
            if (
                value
                and not value.startswith(('"', "'", "[", "{"))
                and (":" in value or "#" in value)
            ):
                line = f"{key}: {_quote(value)}"
        fixed.append(line)
    return "\n".join(fixed)


def parse(text: str) -> ParseResult:
    """Split and decode frontmatter without raising."""
    header, body = split_frontmatter(text)
    if header is None:
        return ParseResult(DecodeStatus.OK, {}, text, has_header=False)

    try:
        return ParseResult(DecodeStatus.OK, _decode(header), body, has_header=True)
    except yaml.YAMLError as original:
        try:
            metadata = _decode(repair_header(header))
        except yaml.YAMLError:
            return ParseResult(DecodeStatus.FAILED, body=body, has_header=True, error=original)
        return ParseResult(DecodeStatus.REPAIRED, metadata, body, has_header=True)


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (metadata, body), raising FrontmatterError on failure."""
    return parse(text).unwrap()
