"""Command file data models."""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .scope import Scope


class CommandMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    description: Optional[str] = None
    argument_hint: Optional[str] = Field(None, alias="argument-hint")
    allowed_tools: Optional[Union[str, list[str]]] = Field(None, alias="allowed-tools")
    model: Optional[str] = None


class CommandEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path
    relative_path: str
    metadata: CommandMetadata = CommandMetadata()
    body: str = ""
    scope: Scope

    @property
    def stem(self) -> str:
        """Relative path without the .md suffix, using forward slashes."""
        return PurePath(self.relative_path).with_suffix("").as_posix()

    @property
    def command_name(self) -> str:
        """Slash-command name; nested directories become ':' namespaces."""
        return self.stem.replace("/", ":")


class GenerateResult(BaseModel):
    command_name: str
    path: Path
