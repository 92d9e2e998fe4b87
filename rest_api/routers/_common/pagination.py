"""
Standardized page-based pagination for admin routers.

Usage:
    from rest_api.routers._common.pagination import Pagination, get_pagination

    @router.get("/items")
    def list_items(pagination: Pagination = Depends(get_pagination)):
        page = service.list(page=pagination.page, limit=pagination.limit)
"""

from dataclasses import dataclass
from typing import Any

from fastapi import Query

from shared.config.constants import Limits


@dataclass
class Pagination:
    """
    Pagination parameters with validation.

    Attributes:
        page: 1-indexed page number
        limit: Maximum items per page (1 to max_limit)
        max_limit: Maximum allowed limit (default 200)
    """

    page: int
    limit: int
    max_limit: int = Limits.MAX_PAGE_SIZE

    def __post_init__(self):
        """Validate and normalize values."""
        self.page = max(1, self.page)
        self.limit = min(max(1, self.limit), self.max_limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def to_dict(self, total: int) -> dict[str, Any]:
        """Pagination metadata for a response."""
        return {
            "total": total,
            "page": self.page,
            "limit": self.limit,
            "pages": (total + self.limit - 1) // self.limit,
        }


def get_pagination(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(
        default=Limits.DEFAULT_PAGE_SIZE,
        ge=1,
        le=Limits.MAX_PAGE_SIZE,
        description="Maximum number of items per page",
    ),
) -> Pagination:
    """
    FastAPI dependency for pagination.

    Usage:
        @router.get("/items")
        def list_items(pagination: Pagination = Depends(get_pagination)):
            ...
    """
    return Pagination(page=page, limit=limit)


def get_recycle_bin_pagination(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(
        default=Limits.RECYCLE_BIN_PAGE_SIZE,
        ge=1,
        le=Limits.MAX_PAGE_SIZE,
        description="Maximum number of items per page",
    ),
) -> Pagination:
    """Pagination dependency with the recycle bin's default page size."""
    return Pagination(page=page, limit=limit)


def get_recent_history_pagination(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(
        default=Limits.RECENT_HISTORY_PAGE_SIZE,
        ge=1,
        le=Limits.MAX_PAGE_SIZE,
        description="Maximum number of items per page",
    ),
) -> Pagination:
    """Pagination dependency with the activity feed's default page size."""
    return Pagination(page=page, limit=limit)
