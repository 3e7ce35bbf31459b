"""Scope enums."""

from __future__ import annotations

from enum import Enum

from ..core.errors import InvalidScopeError


class Scope(str, Enum):
    PROJECT = "project"
    USER = "user"


class ScopeOption(str, Enum):
    PROJECT = "project"
    USER = "user"
    BOTH = "both"

    def includes(self, scope: Scope) -> bool:
        return self is ScopeOption.BOTH or self.value == scope.value

    def scopes(self) -> list[Scope]:
        """Concrete scopes covered by this option, project first."""
        return [s for s in (Scope.PROJECT, Scope.USER) if self.includes(s)]


def parse_scope(value: "str | ScopeOption") -> ScopeOption:
    """Validate a scope argument. Raises InvalidScopeError for anything else.

    Matching is exact: "Project" or " both " are rejected.
    """
    if isinstance(value, ScopeOption):
        return value
    try:
        return ScopeOption(value)
    except ValueError:
        raise InvalidScopeError(value) from None
