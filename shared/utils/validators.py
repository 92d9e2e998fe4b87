"""
Shared validators for input sanitization.
"""

import re
from datetime import date, datetime, time, timezone
from typing import Optional

from shared.config.constants import Limits


def escape_like_pattern(value: str) -> str:
    """
    Escape special characters in LIKE patterns.

    SQL LIKE uses % and _ as wildcards. This function escapes them
    so user search terms are matched literally.

    Args:
        value: The search string to escape

    Returns:
        The escaped string safe for use in LIKE patterns (escape char "\\")
    """
    if not value:
        return value

    # Escape the escape character first, then the wildcards
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


def sanitize_search_term(term: Optional[str], max_length: int = Limits.MAX_SEARCH_LENGTH) -> str:
    """
    Sanitize search term for safe use in queries.

    Args:
        term: The search term to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized search term ("" when nothing usable is left)
    """
    if not term:
        return ""

    term = term.strip()

    if len(term) > max_length:
        term = term[:max_length]

    # Remove null bytes and other control characters
    term = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", term)

    return term


def as_utc(value: date | datetime | None, *, end_of_day: bool = False) -> Optional[datetime]:
    """
    Normalize a date filter bound to an aware UTC datetime.

    Plain dates become the start of that day, or its last instant when
    ``end_of_day`` is set, so "2024-05-01..2024-05-01" covers the whole day.
    Naive datetimes are taken as UTC.
    """
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.max if end_of_day else time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def validate_page(page: int, limit: int, max_limit: int = Limits.MAX_PAGE_SIZE) -> tuple[int, int]:
    """
    Clamp page/limit into the accepted range.

    Returns:
        (page, limit) with page >= 1 and 1 <= limit <= max_limit
    """
    page = max(1, int(page or 1))
    limit = min(max(1, int(limit or 1)), max_limit)
    return page, limit
