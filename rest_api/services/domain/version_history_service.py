"""
Version History Service - per-entity snapshot log.

Every meaningful mutation of an entity first records the entity's current
state as a numbered version. Versions are kept newest-first up to a cap
(oldest pruned), can be diffed against each other, and any version can be
written back onto the live record.

Usage:
    from rest_api.services.domain import VersionHistoryService

    service = VersionHistoryService(db)
    result = service.update_with_history(
        "job", job, {"status": "approved"}, changed_by=user_id,
    )
    if not result.history.ok:
        ...  # the update went through, only the audit trail is missing
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Callable

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import VersionHistory
from rest_api.models.base import utcnow
from rest_api.services.crud.entity_registry import EntityKind, EntityType, resolve
from rest_api.services.crud.snapshot import (
    compare_snapshots,
    dumps,
    generate_change_summary,
    restorable_fields,
    serialize_model,
)
from rest_api.services.domain.results import (
    MutationResult,
    Page,
    RestoreResult,
    SnapshotOutcome,
    VersionComparison,
)
from shared.config.constants import ChangeType, Limits
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import (
    ConflictError,
    EntityGoneError,
    InternalError,
    NotFoundError,
    UnknownEntityTypeError,
)
from shared.utils.validators import as_utc, validate_page

logger = get_logger(__name__)


class VersionHistoryService:
    """
    Service for the version history log.

    Business rules:
    - Version numbers per entity start at 1 and increase by one per snapshot
    - At most `max_versions` versions are kept per entity (highest numbers win)
    - Snapshots taken around ordinary updates are best effort and never block
      the update; the snapshot taken before a restore is mandatory
    - Restoring never touches identity fields or the ownership field
    """

    def __init__(
        self,
        db: Session,
        *,
        max_versions: int | None = None,
        recent_hours: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._db = db
        if max_versions is None:
            max_versions = settings.max_versions_per_entity
        if recent_hours is None:
            recent_hours = settings.version_history_recent_hours
        self._max_versions = max_versions
        self._recent_hours = recent_hours
        self._clock = clock or utcnow

    @property
    def db(self) -> Session:
        return self._db

    # =========================================================================
    # Writing versions
    # =========================================================================

    def create_snapshot(
        self,
        entity_type: EntityType | str,
        record: Any,
        *,
        changed_by: int | None = None,
        changed_by_name: str | None = None,
        changed_by_email: str | None = None,
        change_type: str = ChangeType.UPDATE,
        new_data: dict[str, Any] | None = None,
        restored_from_version: int | None = None,
    ) -> SnapshotOutcome:
        """
        Record the current state of `record` as its next version and commit.

        Best effort: failures are logged and reported through the outcome,
        never raised. The session must not hold other pending changes, since
        a failed attempt rolls the session back.
        """
        try:
            kind = resolve(entity_type)
        except UnknownEntityTypeError as exc:
            return SnapshotOutcome(ok=False, error=exc.detail)

        outcome = self._record_version(
            kind,
            record,
            changed_by=changed_by,
            changed_by_name=changed_by_name,
            changed_by_email=changed_by_email,
            change_type=change_type,
            new_data=new_data,
            restored_from_version=restored_from_version,
        )
        if not outcome.ok:
            return outcome

        entity_id = outcome.version.entity_id
        try:
            self._prune(kind, entity_id)
            safe_commit(self._db)
        except Exception as exc:
            self._db.rollback()
            logger.error(
                "Failed to commit version snapshot",
                entity_type=kind.entity_type.value,
                entity_id=entity_id,
                exc_info=True,
            )
            return SnapshotOutcome(ok=False, error=str(exc))

        logger.debug(
            "Version snapshot created",
            entity_type=kind.entity_type.value,
            entity_id=entity_id,
            version=outcome.version.version,
            change_type=change_type,
        )
        return outcome

    def update_with_history(
        self,
        entity_type: EntityType | str,
        record: Any,
        new_data: dict[str, Any],
        *,
        changed_by: int | None = None,
        changed_by_name: str | None = None,
        changed_by_email: str | None = None,
        change_type: str | None = None,
    ) -> MutationResult:
        """
        Snapshot the record, then apply `new_data` and commit.

        The snapshot and the update are committed together. The snapshot is
        best effort; its outcome is returned next to the updated record. A
        status-only change is recorded as "status_change".

        Raises:
            UnknownEntityTypeError: tag not registered (nothing is written)
            ConflictError: the new values break a constraint of the live
                table (nothing is written, the snapshot included)
        """
        kind = resolve(entity_type)
        if change_type is None:
            change_type = ChangeType.STATUS_CHANGE if set(new_data) == {"status"} else ChangeType.UPDATE

        entity_id = record.id
        history = self._record_version(
            kind,
            record,
            changed_by=changed_by,
            changed_by_name=changed_by_name,
            changed_by_email=changed_by_email,
            change_type=change_type,
            new_data=new_data,
            restored_from_version=None,
        )

        self._save_live(
            kind,
            record,
            new_data,
            failure=f"Could not update {kind.label.lower()} {entity_id}",
        )
        if history.ok:
            self._prune(kind, entity_id)
        safe_commit(self._db)
        self._db.refresh(record)

        logger.info(
            "Entity updated",
            entity_type=kind.entity_type.value,
            entity_id=entity_id,
            fields=sorted(kind.writable_fields(new_data)),
            history_ok=history.ok,
        )
        return MutationResult(record=record, history=history)

    def _next_version(self, kind: EntityKind, entity_id: int) -> int:
        current = self._db.scalar(
            select(func.max(VersionHistory.version)).where(
                VersionHistory.entity_type == kind.entity_type.value,
                VersionHistory.entity_id == entity_id,
            )
        )
        return (current or 0) + 1

    def _record_version(self, kind: EntityKind, record: Any, **fields: Any) -> SnapshotOutcome:
        """
        Best-effort `_flush_version`. Does not commit.

        A failure rolls the session back and is reported through the outcome.
        """
        try:
            version = self._flush_version(kind, record, **fields)
        except Exception as exc:
            self._db.rollback()
            logger.error(
                "Failed to create version snapshot",
                entity_type=kind.entity_type.value,
                entity_id=getattr(record, "id", None),
                exc_info=True,
            )
            return SnapshotOutcome(ok=False, error=getattr(exc, "detail", None) or str(exc))
        return SnapshotOutcome(ok=True, version=version)

    def _flush_version(self, kind: EntityKind, record: Any, **fields: Any) -> VersionHistory:
        """
        Flush the next version row, retrying when the number is taken.

        Raises:
            InternalError: no free version number after all attempts
        """
        entity_id = record.id
        for attempt in range(1, Limits.VERSION_WRITE_ATTEMPTS + 1):
            try:
                return self._add_version(kind, record, **fields)
            except IntegrityError:
                self._db.rollback()
                logger.warning(
                    "Version number already taken, retrying",
                    entity_type=kind.entity_type.value,
                    entity_id=entity_id,
                    attempt=attempt,
                )

        raise InternalError(
            "Could not allocate a version number",
            entity_type=kind.entity_type.value,
            entity_id=entity_id,
            attempts=Limits.VERSION_WRITE_ATTEMPTS,
        )

    def _save_live(self, kind: EntityKind, record: Any, values: dict[str, Any], *, failure: str) -> None:
        """
        Apply `values` to the live record and flush.

        Raises:
            ConflictError: a unique or not-null constraint rejected the values;
                the session is rolled back
        """
        try:
            kind.save(self._db, record, values)
        except IntegrityError:
            self._db.rollback()
            raise ConflictError(
                f"{failure}: a unique value is already taken by another "
                f"{kind.label.lower()} or a required field is missing",
                entity_type=kind.entity_type.value,
            ) from None

    def _add_version(
        self,
        kind: EntityKind,
        record: Any,
        *,
        changed_by: int | None,
        changed_by_name: str | None,
        changed_by_email: str | None,
        change_type: str,
        new_data: dict[str, Any] | None,
        restored_from_version: int | None,
    ) -> VersionHistory:
        """Add (and flush) the next version row for `record`. Does not commit."""
        snapshot = serialize_model(record)
        if new_data:
            summary = generate_change_summary(snapshot, new_data)
        else:
            summary = ["Created" if change_type == ChangeType.CREATE else "Updated"]

        version = VersionHistory(
            entity_type=kind.entity_type.value,
            entity_id=record.id,
            collection_name=kind.collection_name,
            version=self._next_version(kind, record.id),
            snapshot=dumps(snapshot),
            change_summary=dumps(summary),
            changed_by=changed_by,
            changed_by_name=changed_by_name,
            changed_by_email=changed_by_email,
            change_type=change_type,
            restored_from_version=restored_from_version,
            created_at=self._clock(),
        )
        version.apply_metadata(kind.metadata(snapshot))
        self._db.add(version)
        self._db.flush()
        return version

    def _prune(self, kind: EntityKind, entity_id: int) -> int:
        """Delete versions beyond the cap, oldest first. Does not commit."""
        stale_ids = self._db.scalars(
            select(VersionHistory.id)
            .where(
                VersionHistory.entity_type == kind.entity_type.value,
                VersionHistory.entity_id == entity_id,
            )
            .order_by(VersionHistory.version.desc())
            .offset(self._max_versions)
        ).all()
        if not stale_ids:
            return 0

        self._db.execute(delete(VersionHistory).where(VersionHistory.id.in_(stale_ids)))
        logger.debug(
            "Pruned old versions",
            entity_type=kind.entity_type.value,
            entity_id=entity_id,
            pruned=len(stale_ids),
        )
        return len(stale_ids)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_versions(
        self,
        entity_type: EntityType | str,
        entity_id: int,
        page: int = 1,
        limit: int = Limits.DEFAULT_PAGE_SIZE,
    ) -> Page[VersionHistory]:
        """Versions of one entity, newest first."""
        kind = resolve(entity_type)
        page, limit = validate_page(page, limit)

        conditions = (
            VersionHistory.entity_type == kind.entity_type.value,
            VersionHistory.entity_id == entity_id,
        )
        total = self._db.scalar(select(func.count()).select_from(VersionHistory).where(*conditions))
        items = self._db.scalars(
            select(VersionHistory)
            .where(*conditions)
            .order_by(VersionHistory.version.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()
        return Page(items=list(items), total=total or 0, page=page, limit=limit)

    def get_version(self, version_id: int) -> VersionHistory:
        """
        Raises:
            NotFoundError: no version with this id
        """
        version = self._db.get(VersionHistory, version_id)
        if version is None:
            raise NotFoundError("Version", version_id)
        return version

    def compare_versions(self, version_id_1: int, version_id_2: int) -> VersionComparison:
        """Field differences between two versions (old = first, new = second)."""
        version1 = self.get_version(version_id_1)
        version2 = self.get_version(version_id_2)
        differences = compare_snapshots(version1.snapshot_data, version2.snapshot_data)
        return VersionComparison(differences=differences, version1=version1, version2=version2)

    def recent_history(
        self,
        *,
        entity_type: EntityType | str | None = None,
        changed_by: int | None = None,
        start_date: date | datetime | None = None,
        end_date: date | datetime | None = None,
        page: int = 1,
        limit: int = Limits.RECENT_HISTORY_PAGE_SIZE,
    ) -> Page[VersionHistory]:
        """Versions across all entities, newest first."""
        page, limit = validate_page(page, limit)

        conditions = []
        if entity_type:
            conditions.append(VersionHistory.entity_type == resolve(entity_type).entity_type.value)
        if changed_by is not None:
            conditions.append(VersionHistory.changed_by == changed_by)
        if start_date is not None:
            conditions.append(VersionHistory.created_at >= as_utc(start_date))
        if end_date is not None:
            conditions.append(VersionHistory.created_at <= as_utc(end_date, end_of_day=True))

        total = self._db.scalar(select(func.count()).select_from(VersionHistory).where(*conditions))
        items = self._db.scalars(
            select(VersionHistory)
            .where(*conditions)
            .order_by(VersionHistory.created_at.desc(), VersionHistory.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()
        return Page(items=list(items), total=total or 0, page=page, limit=limit)

    def stats(self) -> dict[str, Any]:
        """Total versions, count per entity type, and versions in the recent window."""
        total = self._db.scalar(select(func.count()).select_from(VersionHistory)) or 0
        rows = self._db.execute(
            select(VersionHistory.entity_type, func.count())
            .group_by(VersionHistory.entity_type)
            .order_by(func.count().desc())
        ).all()
        since = self._clock() - timedelta(hours=self._recent_hours)
        recent = self._db.scalar(
            select(func.count()).select_from(VersionHistory).where(VersionHistory.created_at >= since)
        ) or 0
        return {
            "total_versions": total,
            "by_entity_type": {entity_type: count for entity_type, count in rows},
            "recent_changes": recent,
            "recent_hours": self._recent_hours,
        }

    # =========================================================================
    # Command Methods
    # =========================================================================

    def restore_to_version(
        self,
        version_id: int,
        *,
        restored_by: int | None = None,
        restored_by_name: str | None = None,
        restored_by_email: str | None = None,
    ) -> RestoreResult:
        """
        Write a past version back onto the live record.

        The current state is first recorded as a "restore" version pointing at
        the restored version number; then the version's fields (minus identity
        and ownership) are applied. Both happen in one transaction.

        Raises:
            NotFoundError: version does not exist
            UnknownEntityTypeError: version's tag is no longer registered
            EntityGoneError: the live record no longer exists
            ConflictError: the restored values clash with another live record
            InternalError: no version number could be allocated
        """
        target = self.get_version(version_id)
        kind = resolve(target.entity_type)
        target_number = target.version
        entity_id = target.entity_id
        fields = restorable_fields(target.snapshot_data, kind.owner_field)

        record = kind.load(self._db, entity_id)
        if record is None:
            raise EntityGoneError(kind.entity_type.value, entity_id)

        pre_restore = self._flush_version(
            kind,
            record,
            changed_by=restored_by,
            changed_by_name=restored_by_name,
            changed_by_email=restored_by_email,
            change_type=ChangeType.RESTORE,
            new_data=None,
            restored_from_version=target_number,
        )
        self._save_live(
            kind,
            record,
            fields,
            failure=f"Could not restore {kind.label.lower()} {entity_id} to version {target_number}",
        )
        self._prune(kind, entity_id)
        safe_commit(self._db)
        self._db.refresh(record)

        logger.info(
            "Entity restored to version",
            entity_type=kind.entity_type.value,
            entity_id=entity_id,
            restored_version=target_number,
            new_version=pre_restore.version,
            restored_by=restored_by,
        )
        return RestoreResult(
            record=record,
            message=f"Restored to version {target_number}",
            version=pre_restore,
        )

    def delete_history(self, entity_type: EntityType | str, entity_id: int) -> int:
        """Drop every version of one entity. Returns the number removed."""
        kind = resolve(entity_type)
        result = self._db.execute(
            delete(VersionHistory).where(
                VersionHistory.entity_type == kind.entity_type.value,
                VersionHistory.entity_id == entity_id,
            )
        )
        safe_commit(self._db)
        logger.info(
            "Version history deleted",
            entity_type=kind.entity_type.value,
            entity_id=entity_id,
            deleted=result.rowcount,
        )
        return result.rowcount
