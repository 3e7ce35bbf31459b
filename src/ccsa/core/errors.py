"""Exception hierarchy for ccsa."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class CcsaError(Exception):
    """Base class for all ccsa errors."""


class InvalidScopeError(CcsaError):
    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Scope must be one of: project, user, both (got {value!r})")


class FrontmatterError(CcsaError):
    """Frontmatter could not be decoded, even after the repair pass."""

    def __init__(self, message: str, original: Optional[Exception] = None):
        self.original = original
        super().__init__(message)


class AlreadyExistsError(CcsaError):
    """Generation target exists and force was not requested."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Command file already exists: {path}")


class NoAgentDirectoriesError(CcsaError):
    """None of the requested agent roots exist on disk."""

    def __init__(self, missing: list[Path]):
        self.missing = missing
        super().__init__("No agent directories found")
