"""
Pydantic schemas for admin API endpoints.
Centralized here so services and routers can share them without circular imports.

Snapshot and summary columns hold JSON text; the `from_model` constructors
decode them so responses carry real objects.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from shared.config.constants import Limits


# =============================================================================
# Version History Schemas
# =============================================================================


class VersionOutput(BaseModel):
    id: int
    entity_type: str
    entity_id: int
    collection_name: str
    version: int
    snapshot: dict[str, Any]
    change_summary: list[str]
    metadata: dict[str, str]
    changed_by: int | None = None
    changed_by_name: str | None = None
    changed_by_email: str | None = None
    change_type: str
    restored_from_version: int | None = None
    created_at: datetime

    @classmethod
    def from_model(cls, version: Any) -> "VersionOutput":
        return cls(
            id=version.id,
            entity_type=version.entity_type,
            entity_id=version.entity_id,
            collection_name=version.collection_name,
            version=version.version,
            snapshot=version.snapshot_data,
            change_summary=version.summary,
            metadata=version.entity_metadata,
            changed_by=version.changed_by,
            changed_by_name=version.changed_by_name,
            changed_by_email=version.changed_by_email,
            change_type=version.change_type,
            restored_from_version=version.restored_from_version,
            created_at=version.created_at,
        )


class VersionPageOutput(BaseModel):
    versions: list[VersionOutput]
    total: int
    page: int
    limit: int
    pages: int


class FieldDifference(BaseModel):
    field: str
    old_value: Any = None
    new_value: Any = None


class VersionCompareOutput(BaseModel):
    differences: list[FieldDifference]
    version1: VersionOutput
    version2: VersionOutput


class RestoreVersionOutput(BaseModel):
    success: bool
    message: str
    entity: dict[str, Any]
    version: VersionOutput


class VersionStatsOutput(BaseModel):
    total_versions: int
    by_entity_type: dict[str, int]
    recent_changes: int
    recent_hours: int


class EntityTypeOutput(BaseModel):
    value: str
    label: str


class DeleteHistoryOutput(BaseModel):
    entity_type: str
    entity_id: int
    deleted: int


# =============================================================================
# Recycle Bin Schemas
# =============================================================================


class RecycleBinItemOutput(BaseModel):
    id: int
    entity_type: str
    entity_id: int
    collection_name: str
    snapshot: dict[str, Any]
    metadata: dict[str, str]
    deleted_by: int | None = None
    deleted_by_email: str | None = None
    deleted_at: datetime
    expires_at: datetime
    warning_sent_at: datetime | None = None
    state: str

    @classmethod
    def from_model(cls, item: Any) -> "RecycleBinItemOutput":
        return cls(
            id=item.id,
            entity_type=item.entity_type,
            entity_id=item.entity_id,
            collection_name=item.collection_name,
            snapshot=item.snapshot_data,
            metadata=item.entity_metadata,
            deleted_by=item.deleted_by,
            deleted_by_email=item.deleted_by_email,
            deleted_at=item.deleted_at,
            expires_at=item.expires_at,
            warning_sent_at=item.warning_sent_at,
            state=item.state,
        )


class RecycleBinPageOutput(BaseModel):
    items: list[RecycleBinItemOutput]
    total: int
    page: int
    limit: int
    pages: int


class RecycleBinRestoreOutput(BaseModel):
    success: bool
    message: str
    entity_type: str
    entity_id: int
    entity: dict[str, Any]


class PurgeOutput(BaseModel):
    success: bool
    message: str


class BulkDeleteInput(BaseModel):
    item_ids: list[int] = Field(min_length=1, max_length=Limits.MAX_BULK_DELETE)


class BulkDeleteFailure(BaseModel):
    id: int
    reason: str


class BulkDeleteOutput(BaseModel):
    purged: list[int]
    failed: list[BulkDeleteFailure]


class SweepOutput(BaseModel):
    success: bool
    warning_count: int
    notified: bool
    purged: int


# =============================================================================
# Entity Schemas
# =============================================================================


class EntityMutationOutput(BaseModel):
    entity: dict[str, Any]
    history_recorded: bool
    history_error: Optional[str] = None


class EntityDeleteOutput(BaseModel):
    success: bool
    message: str
    recycle_bin_item: RecycleBinItemOutput
