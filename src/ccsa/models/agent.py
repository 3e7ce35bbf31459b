"""Agent data models."""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from .scope import Scope


class AgentMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    description: str
    # Kept exactly as written: "Read, Write" stays a string, a YAML list stays a list.
    tools: Optional[Union[str, list[str]]] = None
    model: Optional[str] = None

    def tools_list(self) -> list[str]:
        if self.tools is None:
            return []
        if isinstance(self.tools, str):
            return [t.strip() for t in self.tools.split(",") if t.strip()]
        return list(self.tools)

    def tools_display(self) -> str:
        if isinstance(self.tools, str):
            return self.tools
        return ", ".join(self.tools_list())


class AgentEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path
    relative_path: str
    metadata: AgentMetadata
    body: str
    scope: Scope

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def category(self) -> Optional[str]:
        """First directory under the scope root, or None for top-level files."""
        parts = PurePath(self.relative_path).parts
        return parts[0] if len(parts) > 1 else None
