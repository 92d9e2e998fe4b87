"""
Utilities module: Exceptions, validators.
"""

from shared.utils.exceptions import (
    NotFoundError,
    ForbiddenError,
    ValidationError,
    ConflictError,
    UnknownEntityTypeError,
    AlreadyResolvedError,
    EntityGoneError,
)
from shared.utils.validators import (
    escape_like_pattern,
    sanitize_search_term,
    as_utc,
    validate_page,
)

__all__ = [
    # exceptions
    "NotFoundError",
    "ForbiddenError",
    "ValidationError",
    "ConflictError",
    "UnknownEntityTypeError",
    "AlreadyResolvedError",
    "EntityGoneError",
    # validators
    "escape_like_pattern",
    "sanitize_search_term",
    "as_utc",
    "validate_page",
]
