"""Utility functions and helpers for the originctl application."""
import shlex
from typing import Any, Iterable

from ..config import Config


def _is_sensitive(key: str) -> bool:
    return any(redact_key.lower() in key.lower() for redact_key in Config.REDACT_KEYS)


def redact_sensitive_data(data: Any) -> Any:
    """Recursively redact sensitive data from dictionaries and lists.

    Args:
        data: Input data that might contain sensitive information

    Returns:
        Data with sensitive values redacted
    """
    if isinstance(data, dict):
        return {
            k: "[REDACTED]" if _is_sensitive(str(k)) else redact_sensitive_data(v)
            for k, v in data.items()
        }
    elif isinstance(data, (list, tuple)):
        return [redact_sensitive_data(item) for item in data]
    return data


def format_command(cmd: Iterable[str]) -> str:
    """Render a command for logging, hiding values of sensitive flags.

    ``--password=x`` becomes ``--password=[REDACTED]``; a sensitive flag
    followed by a separate value has that value hidden as well.
    """
    parts = []
    hide_next = False
    for arg in cmd:
        arg = str(arg)
        if hide_next:
            parts.append("[REDACTED]")
            hide_next = False
            continue
        if arg.startswith("-") and "=" in arg:
            key, _ = arg.split("=", 1)
            if _is_sensitive(key):
                parts.append(f"{key}=[REDACTED]")
                continue
        elif arg.startswith("-") and _is_sensitive(arg):
            hide_next = True
        parts.append(shlex.quote(arg))
    return " ".join(parts)
