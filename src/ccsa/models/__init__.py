"""Data models for agents, commands and batch results."""

from .agent import AgentEntry, AgentMetadata
from .command import CommandEntry, CommandMetadata
from .scope import Scope, ScopeOption, parse_scope

__all__ = [
    "AgentEntry",
    "AgentMetadata",
    "CommandEntry",
    "CommandMetadata",
    "Scope",
    "ScopeOption",
    "parse_scope",
]
