"""Read-only grouping and search over discovered agents."""

from __future__ import annotations

from collections import defaultdict

from ..models.agent import AgentEntry

UNCATEGORIZED = "(root)"


def group_by_category(agents: list[AgentEntry]) -> dict[str, list[AgentEntry]]:
    """Group agents by the first directory of their relative path."""
    groups: dict[str, list[AgentEntry]] = defaultdict(list)
    for agent in agents:
        groups[agent.category or UNCATEGORIZED].append(agent)
    return dict(sorted(groups.items()))


def group_by_scope(agents: list[AgentEntry]) -> dict[str, list[AgentEntry]]:
    groups: dict[str, list[AgentEntry]] = defaultdict(list)
    for agent in agents:
        groups[agent.scope.value].append(agent)
    return dict(groups)


def search_agents(agents: list[AgentEntry], query: str) -> list[AgentEntry]:
    """Case-insensitive substring match on name and description."""
    needle = query.strip().lower()
    if not needle:
        return list(agents)
    return [
        a for a in agents
        if needle in a.metadata.name.lower() or needle in a.metadata.description.lower()
    ]
