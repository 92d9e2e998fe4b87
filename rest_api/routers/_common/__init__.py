"""
Common utilities shared across routers.

NOTE: Admin schemas live in shared/utils/admin_schemas.py
(services should not import from routers).
"""

from .base import get_user_id, get_user_email, get_user_name
from .pagination import (
    Pagination,
    get_pagination,
    get_recycle_bin_pagination,
    get_recent_history_pagination,
)

__all__ = [
    # Base utilities
    "get_user_id",
    "get_user_email",
    "get_user_name",
    # Pagination
    "Pagination",
    "get_pagination",
    "get_recycle_bin_pagination",
    "get_recent_history_pagination",
]
