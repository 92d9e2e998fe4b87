"""
Centralized HTTP exceptions for consistent error handling.

Usage:
    from shared.utils.exceptions import NotFoundError, AlreadyResolvedError

    raise NotFoundError("Version", version_id)
    raise AlreadyResolvedError(item_id, "restored")
    raise UnknownEntityTypeError("widget")
"""

from fastapi import HTTPException, status
from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        # Log the error with context
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Version", version_id)
        raise NotFoundError("Recycle bin item", item_id)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with ID {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 410 Gone
# =============================================================================


class EntityGoneError(AppException):
    """
    The live record behind a version no longer exists (410).

    Raised when restoring to a version of an entity that was hard-deleted
    outside the recycle bin; the record is never recreated implicitly.
    """

    def __init__(self, entity_type: str, entity_id: int | str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_410_GONE,
            detail=f"Entity no longer exists ({entity_type} {entity_id})",
            log_level="warning",
            entity_type=entity_type,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 401 / 403 Errors
# =============================================================================


class UnauthorizedError(AppException):
    """Missing or invalid credentials (401)."""

    def __init__(self, detail: str = "Unauthorized", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError("restore versions")
    """

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Not authorized to {action}"
        else:
            detail = "Access denied"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            log_level="warning",
            action=action,
            **log_context,
        )


class InsufficientRoleError(ForbiddenError):
    """User doesn't have the required role."""

    def __init__(self, required_roles: list[str], **log_context: Any):
        roles_str = ", ".join(required_roles)
        super().__init__(
            f"perform this action (requires role: {roles_str})",
            required_roles=required_roles,
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("page must be positive", field="page", value=0)
    """

    def __init__(self, detail: str, log_level: str = "warning", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level=log_level,
            **log_context,
        )


class UnknownEntityTypeError(ValidationError):
    """
    Entity-kind tag not present in the registry.

    This is a programming/configuration error on the caller's side, so it is
    logged at error level.
    """

    def __init__(self, entity_type: str, **log_context: Any):
        self.entity_type = entity_type
        super().__init__(
            f"Unknown entity type: {entity_type}",
            log_level="error",
            entity_type=entity_type,
            **log_context,
        )


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).

    Usage:
        raise ConflictError("A live job with ID 12 already exists")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class AlreadyResolvedError(ConflictError):
    """Restore/purge attempted on a recycle bin item in a terminal state."""

    def __init__(self, item_id: int, state: str, **log_context: Any):
        self.state = state
        super().__init__(
            f"Recycle bin item {item_id} is already {state}",
            item_id=item_id,
            state=state,
            **log_context,
        )


# =============================================================================
# 500 Internal Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    Usage:
        raise InternalError("Failed to capture pre-restore snapshot", version_id=123)
    """

    def __init__(self, detail: str = "Internal server error", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            log_level="error",
            **log_context,
        )
