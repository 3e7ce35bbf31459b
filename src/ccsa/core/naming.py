"""Command name derivation and conflict resolution.

Normalization: NFKD-fold to ASCII, lowercase, collapse every run of
characters outside ``[a-z0-9]`` into one hyphen, trim hyphens at both
ends. A name with nothing left becomes ``agent``. The rule is idempotent.

Conflicts: agents are processed in input order. The first agent to claim
a name keeps it; later agents get ``-2``, ``-3`` ... until the name is
free.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable

from ..models.agent import AgentEntry

FALLBACK_NAME = "agent"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def derive_name(agent_name: str) -> str:
    folded = unicodedata.normalize("NFKD", agent_name).encode("ascii", "ignore").decode("ascii")
    slug = _NON_ALNUM.sub("-", folded.lower()).strip("-")
    return slug or FALLBACK_NAME


def resolve_conflicts(agents: Iterable[AgentEntry]) -> dict[str, str]:
    """Map each distinct agent name to a unique command name.

    An agent whose logical name was already seen keeps the first mapping.
    """
    name_map: dict[str, str] = {}
    claimed: set[str] = set()

    for agent in agents:
        if agent.name in name_map:
            continue
        base = derive_name(agent.name)
        candidate = base
        suffix = 2
        while candidate in claimed:
            candidate = f"{base}-{suffix}"
            suffix += 1
        claimed.add(candidate)
        name_map[agent.name] = candidate

    return name_map


def renamed(name_map: dict[str, str]) -> list[tuple[str, str]]:
    """Entries whose final name differs from the isolated derivation."""
    return [(agent, command) for agent, command in name_map.items() if derive_name(agent) != command]
