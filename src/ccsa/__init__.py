"""cc-slash-agents: generate slash commands from Claude Code agents."""

__version__ = "1.0.0"
