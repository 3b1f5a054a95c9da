"""Environment variable parsing utilities."""

from __future__ import annotations


def parse_bool_env(value: str | None) -> bool | None:
    """Parse a boolean from an environment variable string.

    Returns True for "1", "true", "yes", "on" (case-insensitive).
    Returns None if value is None.
    """
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_int_env(value: str | None) -> int | None:
    """Parse an integer from an environment variable string.

    Returns None if value is None or cannot be parsed.
    """
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_list_env(value: str | None) -> list[str] | None:
    """Parse a comma-separated list from an environment variable string.

    Example: "us-east-1, eu-west-1" -> ["us-east-1", "eu-west-1"]
    Returns None if value is None or holds no items.
    """
    if value is None:
        return None
    items = [token.strip() for token in value.split(",")]
    items = [item for item in items if item]
    return items or None
