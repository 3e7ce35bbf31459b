"""Agent and command file discovery.

Scans the project and user .claude directories recursively for markdown
files. Every call re-reads the disk; nothing is cached between scans.
A file that cannot be read or decoded is logged and skipped so that one
bad file never hides its siblings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from ..models.agent import AgentEntry, AgentMetadata
from ..models.command import CommandEntry, CommandMetadata
from ..models.scope import ScopeOption
from ..utils.logger import Logger, quiet_logger
from .errors import FrontmatterError
from .frontmatter import DecodeStatus, parse
from .paths import ScopedRoot, valid_roots

MARKDOWN_SUFFIX = ".md"

SIGNATURE_PHRASE = "Generated by cc-slash-agents"
SIGNATURE_MARKER = "<!-- ccsa:generated -->"


def iter_markdown_files(root: Path) -> list[Path]:
    """All *.md files below root, including nested directories, sorted."""
    return sorted(p for p in root.rglob(f"*{MARKDOWN_SUFFIX}") if p.is_file())


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return None
    return str(value)


def _agent_metadata(data: dict[str, Any]) -> Optional[AgentMetadata]:
    """Build agent metadata, or None when name/description are missing or empty."""
    name = _as_text(data.get("name"))
    description = _as_text(data.get("description"))
    if not (name and name.strip() and description and description.strip()):
        return None

    tools = data.get("tools")
    if isinstance(tools, list):
        tools = [str(t) for t in tools if t is not None]
    else:
        tools = _as_text(tools)

    return AgentMetadata(
        name=name,
        description=description,
        tools=tools,
        model=_as_text(data.get("model")),
    )


def read_agent_file(path: Path, root: ScopedRoot, logger: Optional[Logger] = None) -> Optional[AgentEntry]:
    """Parse one agent file. Returns None when mandatory fields are absent.

    Raises FrontmatterError when the header cannot be decoded and OSError
    when the file cannot be read.
    """
    logger = logger or quiet_logger()
    result = parse(path.read_text(encoding="utf-8"))
    metadata_dict, body = result.unwrap()
    if result.status is DecodeStatus.REPAIRED:
        logger.debug(f"Recovered malformed agent file: {path}")

    metadata = _agent_metadata(metadata_dict)
    if metadata is None:
        logger.debug(f"Skipping {path}: missing required frontmatter (name, description)")
        return None

    return AgentEntry(
        path=path,
        relative_path=path.relative_to(root.path).as_posix(),
        metadata=metadata,
        body=body,
        scope=root.scope,
    )


def read_command_file(path: Path, root: ScopedRoot) -> CommandEntry:
    """Parse one command file. Any decodable file is accepted."""
    metadata_dict, body = parse(path.read_text(encoding="utf-8")).unwrap()
    try:
        metadata = CommandMetadata.model_validate(metadata_dict)
    except ValidationError:
        metadata = CommandMetadata()
    return CommandEntry(
        path=path,
        relative_path=path.relative_to(root.path).as_posix(),
        metadata=metadata,
        body=body,
        scope=root.scope,
    )


def discover_agents(
    scope: Union[str, ScopeOption] = ScopeOption.BOTH,
    cwd: Optional[Path] = None,
    logger: Optional[Logger] = None,
) -> list[AgentEntry]:
    """Discover valid agents under every existing agents root for scope."""
    logger = logger or quiet_logger()
    agents: list[AgentEntry] = []

    for root in valid_roots(scope, "agents", cwd):
        logger.debug(f"Scanning agents directory: {root.path}")
        try:
            files = iter_markdown_files(root.path)
        except OSError as e:
            logger.debug(f"Error scanning {root.path}: {e}")
            continue

        for file_path in files:
            try:
                agent = read_agent_file(file_path, root, logger)
            except (OSError, UnicodeDecodeError, FrontmatterError) as e:
                logger.warning(f"Failed to parse agent file {file_path}: {e}")
                continue
            if agent is not None:
                agents.append(agent)
                logger.debug(f"Found agent: {agent.name} ({root.scope.value})")

    return agents


def discover_commands(
    scope: Union[str, ScopeOption] = ScopeOption.BOTH,
    cwd: Optional[Path] = None,
    logger: Optional[Logger] = None,
) -> list[CommandEntry]:
    """Discover every decodable command file under the commands roots."""
    logger = logger or quiet_logger()
    commands: list[CommandEntry] = []

    for root in valid_roots(scope, "commands", cwd):
        logger.debug(f"Scanning commands directory: {root.path}")
        try:
            files = iter_markdown_files(root.path)
        except OSError as e:
            logger.debug(f"Error scanning {root.path}: {e}")
            continue

        for file_path in files:
            try:
                command = read_command_file(file_path, root)
            except (OSError, UnicodeDecodeError, FrontmatterError) as e:
                logger.warning(f"Failed to parse command file {file_path}: {e}")
                continue
            commands.append(command)
            logger.debug(f"Found command: {command.relative_path} ({root.scope.value})")

    return commands


def has_signature(text: str) -> bool:
    return SIGNATURE_PHRASE in text or SIGNATURE_MARKER in text


def is_generated_file(path: Union[str, Path]) -> bool:
    """True if the file carries the generated-by signature.

    Missing or unreadable files are reported as not generated.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return False
    return has_signature(text)


def generated_commands(commands: list[CommandEntry]) -> list[CommandEntry]:
    return [c for c in commands if is_generated_file(c.path)]
