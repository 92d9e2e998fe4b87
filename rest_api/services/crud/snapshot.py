"""
Snapshot helpers shared by the version history log and the recycle bin.

A snapshot is the JSON-safe dict of a record's column values. It is what
gets stored in `version_history.snapshot` and `recycle_bin_item.snapshot`,
and what a record is rebuilt from on restore.
"""

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

from sqlalchemy import Date, DateTime

from shared.config.constants import IDENTITY_FIELDS, INTERNAL_FIELDS, WATCHED_FIELDS


def _jsonable(value: Any) -> Any:
    """Convert a column value into something json.dumps accepts."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value


def _canonical(value: Any) -> str:
    """Stable text form used for equality checks between snapshot values."""
    return json.dumps(_jsonable(value), sort_keys=True, default=str)


def serialize_model(obj: Any, exclude: Optional[Iterable[str]] = None) -> dict[str, Any]:
    """
    Serialize a SQLAlchemy model to a snapshot dict.

    Args:
        obj: SQLAlchemy model instance
        exclude: Extra fields to leave out (internal counters are always left out)

    Returns:
        Dictionary of column name -> JSON-safe value
    """
    skip = set(INTERNAL_FIELDS)
    if exclude:
        skip.update(exclude)

    result = {}
    for column in obj.__table__.columns:
        if column.key in skip:
            continue
        result[column.key] = _jsonable(getattr(obj, column.key))
    return result


def deserialize_snapshot(model: type, snapshot: dict[str, Any]) -> dict[str, Any]:
    """
    Turn a snapshot back into model keyword arguments.

    Keys that are not columns of `model` are dropped. ISO strings are parsed
    back for date and datetime columns.
    """
    values = {}
    for column in model.__table__.columns:
        if column.key not in snapshot:
            continue
        value = snapshot[column.key]
        if isinstance(value, str):
            if isinstance(column.type, DateTime):
                value = datetime.fromisoformat(value)
            elif isinstance(column.type, Date):
                value = date.fromisoformat(value)
        values[column.key] = value
    return values


def _render_change(field: str, old_value: Any, new_value: Any) -> str:
    if field == "status":
        return f"Status: {old_value or 'none'} → {new_value}"
    if field == "featured":
        return f"Featured: {'Yes' if new_value else 'No'}"
    if field == "is_published":
        return f"Published: {'Yes' if new_value else 'No'}"
    return f"{field.replace('_', ' ').capitalize()} updated"


def generate_change_summary(old_snapshot: dict[str, Any], new_data: dict[str, Any]) -> list[str]:
    """
    Describe what an update changes, in human-readable lines.

    Only watched fields present in `new_data` are considered, in watch-list order.

    Example:
        >>> generate_change_summary({"status": "pending"}, {"status": "approved"})
        ['Status: pending → approved']
    """
    changes = []
    for field in WATCHED_FIELDS:
        if field not in new_data:
            continue
        old_value = old_snapshot.get(field)
        new_value = new_data[field]
        if _jsonable(old_value) != _jsonable(new_value):
            changes.append(_render_change(field, old_value, new_value))
    return changes or ["General update"]


def compare_snapshots(a: dict[str, Any], b: dict[str, Any]) -> list[dict[str, Any]]:
    """
    Field-level differences between two snapshots.

    Identity and bookkeeping fields are ignored. Values are compared by their
    canonical JSON form, so nested lists/dicts compare structurally.

    Returns:
        [{"field", "old_value", "new_value"}, ...] sorted by field name
    """
    differences = []
    for field in sorted((set(a) | set(b)) - IDENTITY_FIELDS):
        old_value = a.get(field)
        new_value = b.get(field)
        if _canonical(old_value) != _canonical(new_value):
            differences.append({"field": field, "old_value": old_value, "new_value": new_value})
    return differences


def restorable_fields(snapshot: dict[str, Any], owner_field: Optional[str] = None) -> dict[str, Any]:
    """Snapshot minus identity fields and the ownership field."""
    excluded = set(IDENTITY_FIELDS)
    if owner_field:
        excluded.add(owner_field)
    return {key: value for key, value in snapshot.items() if key not in excluded}


def dumps(data: Any) -> str:
    """JSON text for snapshot/summary columns."""
    return json.dumps(data, default=str)
