"""
Human-readable, redacted rendering of resolved settings.
"""

from datetime import timedelta
from typing import Any, Mapping

from .registry import is_sensitive
from jproxy.outils.time_parser import timedelta_to_str

MASK = "***"


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, timedelta):
        return timedelta_to_str(value)
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(str(item) for item in value) + "]"
    return str(value)


def redact(settings: Mapping[str, Any]) -> dict:
    """Copy of `settings` with the values of sensitive keys masked."""
    return {key: MASK if is_sensitive(key) else value for key, value in settings.items()}


def render(settings: Mapping[str, Any]) -> str:
    """
    Render settings as ``{key: value, ...}`` sorted by key.

    Sensitive values are masked whatever their type or content. The input
    mapping is left untouched.
    """
    masked = redact(settings)
    body = ", ".join(f"{key}: {format_value(value)}" for key, value in sorted(masked.items()))
    return "{" + body + "}"
