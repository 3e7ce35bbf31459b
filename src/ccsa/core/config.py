"""Layered configuration for ccsa.

Loads and merges configuration from:
1. Default settings (built-in)
2. User config (~/.claude/ccsa.yaml)
3. Project config (.claude/ccsa.yaml)
4. CLI parameters (override)
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Optional, Union

import yaml

from ..models.scope import Scope, ScopeOption, parse_scope
from .errors import InvalidScopeError
from .paths import project_claude_dir, user_claude_dir

CONFIG_FILENAME = "ccsa.yaml"

DEFAULT_CONFIG: dict = {
    "scope": {
        "generate": "project",
        "sync": "project",
        "clean": "project",
        "list": "both",
        "explore": "both",
    },
    # Where commands go when the source scope is "both".
    "target_scope": "project",
    "description_preview": 80,
    "verbose": False,
}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Arrays are replaced, not merged."""
    result = {}
    for key in base:
        result[key] = base[key]
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value
    return result


def load_config_file(config_path: Path) -> dict:
    """Load one YAML config file; missing or malformed files give {}."""
    if not config_path.is_file():
        return {}
    try:
        content = config_path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
        data = yaml.safe_load(content)
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def get_effective_config(
    cwd: Optional[Path] = None,
    cli_overrides: Optional[dict] = None,
) -> dict:
    """Get the fully resolved configuration."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    for layer in (
        load_config_file(user_claude_dir() / CONFIG_FILENAME),
        load_config_file(project_claude_dir(cwd) / CONFIG_FILENAME),
    ):
        if layer:
            config = deep_merge(config, layer)

    if cli_overrides:
        config = deep_merge(config, {k: v for k, v in cli_overrides.items() if v is not None})

    return config


def default_scope(config: dict, command: str) -> str:
    scopes = config.get("scope")
    if isinstance(scopes, dict) and scopes.get(command):
        return scopes[command]
    return DEFAULT_CONFIG["scope"][command]


def target_scope_for(scope: Union[str, ScopeOption], config: Optional[dict] = None) -> Scope:
    """Concrete scope commands are written to for a source scope option."""
    option = parse_scope(scope)
    if option is not ScopeOption.BOTH:
        return Scope(option.value)
    value = (config or DEFAULT_CONFIG).get("target_scope") or "project"
    try:
        return Scope(value)
    except ValueError:
        raise InvalidScopeError(value) from None
