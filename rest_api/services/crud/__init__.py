"""
CRUD Services - Generic building blocks shared by every entity kind.

Provides:
- Entity Registry: closed set of entity-kind tags -> storage model
- Snapshot helpers: serialize, rebuild, summarize and diff record states
"""

from .entity_registry import (
    EntityType,
    EntityKind,
    resolve,
    metadata_of,
    list_entity_types,
    humanize,
)
from .snapshot import (
    serialize_model,
    deserialize_snapshot,
    generate_change_summary,
    compare_snapshots,
    restorable_fields,
)

__all__ = [
    # Registry
    "EntityType",
    "EntityKind",
    "resolve",
    "metadata_of",
    "list_entity_types",
    "humanize",
    # Snapshots
    "serialize_model",
    "deserialize_snapshot",
    "generate_change_summary",
    "compare_snapshots",
    "restorable_fields",
]
