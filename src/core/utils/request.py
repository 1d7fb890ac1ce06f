"""Helpers for reading API Gateway proxy events."""

from typing import Any


def get_header(event: dict[str, Any], name: str) -> str | None:
    """Case-insensitive header lookup (API Gateway keeps client casing)."""
    headers = event.get("headers") or {}
    wanted = name.lower()

    for key, value in headers.items():
        if key.lower() == wanted:
            return value

    return None
