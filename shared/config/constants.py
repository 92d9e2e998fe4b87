"""
Centralized constants for the backend application.
Avoid magic strings and repeated constants.

Usage:
    from shared.config.constants import Roles, ChangeType, Limits

    if change_type == ChangeType.RESTORE:
        ...
"""

from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """User role constants."""

    ADMIN: Final[str] = "ADMIN"


# =============================================================================
# Version History
# =============================================================================


class ChangeType:
    """Why a version snapshot was taken."""

    CREATE: Final[str] = "create"
    UPDATE: Final[str] = "update"
    STATUS_CHANGE: Final[str] = "status_change"
    RESTORE: Final[str] = "restore"


# Fields compared when building a version's change summary
WATCHED_FIELDS: Final[tuple[str, ...]] = (
    "title",
    "name",
    "description",
    "status",
    "email",
    "phone",
    "address",
    "price",
    "category",
    "featured",
    "is_published",
)

# Bookkeeping columns that never take part in diffs or restores
IDENTITY_FIELDS: Final[frozenset[str]] = frozenset({"id", "created_at", "updated_at", "revision"})

# Internal counters stripped from every snapshot
INTERNAL_FIELDS: Final[frozenset[str]] = frozenset({"revision"})


# =============================================================================
# Recycle Bin
# =============================================================================


class RecycleBinState:
    """Lifecycle of a recycle bin item."""

    ACTIVE: Final[str] = "active"
    RESTORED: Final[str] = "restored"
    PURGED: Final[str] = "purged"

    TERMINAL: Final[frozenset[str]] = frozenset({RESTORED, PURGED})


EXPIRY_WARNING_SUBJECT: Final[str] = "Recycle bin items scheduled for removal"


# =============================================================================
# Limits and Pagination
# =============================================================================


class Limits:
    """Pagination and size limits."""

    DEFAULT_PAGE_SIZE: Final[int] = 20
    MAX_PAGE_SIZE: Final[int] = 200

    RECYCLE_BIN_PAGE_SIZE: Final[int] = 30
    RECENT_HISTORY_PAGE_SIZE: Final[int] = 50

    MAX_BULK_DELETE: Final[int] = 100
    MAX_SEARCH_LENGTH: Final[int] = 100

    # Attempts at claiming a version number before giving up
    VERSION_WRITE_ATTEMPTS: Final[int] = 3
