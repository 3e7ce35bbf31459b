"""Error message sanitization to keep home paths out of console output."""

from __future__ import annotations

import os


def sanitize_error(message: str) -> str:
    """Replace the user's home directory with ``~`` in a message."""
    if not message:
        return message

    home = os.environ.get("HOME") or os.environ.get("USERPROFILE") or ""
    if home and home != os.sep:
        message = message.replace(home.rstrip(os.sep), "~")
    return message
