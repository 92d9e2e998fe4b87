"""
Helpers for reading the acting user out of the JWT context.
"""

from typing import Any


def get_user_id(user: dict[str, Any]) -> int | None:
    """User id from the `sub` claim, or None when it is not numeric."""
    sub = user.get("sub")
    try:
        return int(sub)
    except (TypeError, ValueError):
        return None


def get_user_email(user: dict[str, Any]) -> str | None:
    return user.get("email") or None


def get_user_name(user: dict[str, Any]) -> str | None:
    return user.get("name") or None
