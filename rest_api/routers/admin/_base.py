"""
Shared dependencies and helpers for admin routers.

This module provides common imports, dependencies, and utility functions
used across all admin sub-routers.
"""

from typing import Any

from fastapi import Depends
from sqlalchemy.orm import Session

from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context as current_user
from shared.utils.exceptions import InsufficientRoleError
from rest_api.routers._common.base import get_user_id, get_user_email, get_user_name
from rest_api.services.crud.snapshot import serialize_model


# =============================================================================
# Role-based Dependencies
# =============================================================================


def require_admin(user: dict = Depends(current_user)) -> dict:
    """Dependency that requires ADMIN role."""
    if Roles.ADMIN not in user.get("roles", []):
        raise InsufficientRoleError([Roles.ADMIN], user_id=user.get("sub"))
    return user


def actor(user: dict) -> dict[str, Any]:
    """Audit keyword arguments for the acting user."""
    return {
        "changed_by": get_user_id(user),
        "changed_by_name": get_user_name(user),
        "changed_by_email": get_user_email(user),
    }


__all__ = [
    "Depends",
    "Session",
    "get_db",
    "current_user",
    "require_admin",
    "actor",
    "get_user_id",
    "get_user_email",
    "get_user_name",
    "serialize_model",
]
