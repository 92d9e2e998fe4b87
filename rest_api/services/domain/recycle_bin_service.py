"""
Recycle Bin Service - soft delete with time-bounded retention.

Deleting an entity moves its full snapshot into the recycle bin and removes
the live row. Items can be restored (same id, same collection) until they
expire; the scheduled sweep warns the operator about items close to expiry
and purges the expired ones.

Usage:
    from rest_api.services.domain import RecycleBinService

    service = RecycleBinService(db)
    item = service.move_to_recycle_bin("job", job, deleted_by=user_id)
    service.restore_item(item.id)

    # From the maintenance trigger
    result = service.sweep()
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Callable, Iterable

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import RecycleBinItem
from rest_api.models.base import utcnow
from rest_api.services.crud.entity_registry import EntityType, resolve
from rest_api.services.crud.snapshot import dumps, serialize_model
from rest_api.services.domain.results import BulkPurgeResult, Page, SweepResult
from rest_api.services.notifications import ExpiryWarningNotifier
from shared.config.constants import Limits, RecycleBinState
from shared.config.logging import get_logger, maintenance_logger
from shared.config.settings import settings
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import (
    AlreadyResolvedError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from shared.utils.validators import as_utc, escape_like_pattern, sanitize_search_term, validate_page

logger = get_logger(__name__)

# Items not yet restored or purged
_UNRESOLVED = (
    RecycleBinItem.restored_at.is_(None),
    RecycleBinItem.permanently_deleted_at.is_(None),
)


class RecycleBinService:
    """
    Service for the recycle bin.

    Business rules:
    - Moving to the bin and deleting the live row happen in one transaction
    - An item expires `retention_days` after deletion
    - Restore recreates the record with its original id and never touches
      the version history log
    - Restore and purge only act on active items; a resolved item is rejected
    - Sweep is idempotent: each item is warned about once and purged once
    """

    def __init__(
        self,
        db: Session,
        *,
        retention_days: int | None = None,
        warning_days: int | None = None,
        clock: Callable[[], datetime] | None = None,
        notifier: ExpiryWarningNotifier | None = None,
    ):
        self._db = db
        if retention_days is None:
            retention_days = settings.recycle_bin_retention_days
        if warning_days is None:
            warning_days = settings.recycle_bin_warning_days
        self._retention = timedelta(days=retention_days)
        self._warning = timedelta(days=warning_days)
        self._clock = clock or utcnow
        self._notifier = notifier

    @property
    def db(self) -> Session:
        return self._db

    @property
    def notifier(self) -> ExpiryWarningNotifier:
        if self._notifier is None:
            self._notifier = ExpiryWarningNotifier.from_settings()
        return self._notifier

    # =========================================================================
    # Soft delete
    # =========================================================================

    def move_to_recycle_bin(
        self,
        entity_type: EntityType | str,
        record: Any,
        *,
        deleted_by: int | None = None,
        deleted_by_email: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> RecycleBinItem:
        """
        Snapshot `record` into the bin and delete the live row.

        Raises:
            UnknownEntityTypeError: tag not registered (nothing is written)
            ValidationError: record is not of the tag's model
        """
        kind = resolve(entity_type)
        if not isinstance(record, kind.model):
            raise ValidationError(
                f"Record is not a {kind.label.lower()}",
                entity_type=kind.entity_type.value,
                record_type=type(record).__name__,
            )

        snapshot = serialize_model(record)
        now = self._clock()
        item = RecycleBinItem(
            entity_type=kind.entity_type.value,
            entity_id=record.id,
            collection_name=kind.collection_name,
            snapshot=dumps(snapshot),
            deleted_by=deleted_by,
            deleted_by_email=deleted_by_email,
            deleted_at=now,
            expires_at=now + self._retention,
            created_at=now,
        )
        item.apply_metadata(metadata or kind.metadata(snapshot))

        self._db.add(item)
        self._db.delete(record)
        safe_commit(self._db)
        self._db.refresh(item)

        logger.info(
            "Moved to recycle bin",
            item_id=item.id,
            entity_type=item.entity_type,
            entity_id=item.entity_id,
            deleted_by=deleted_by,
        )
        return item

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_items(
        self,
        *,
        entity_type: EntityType | str | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int = Limits.RECYCLE_BIN_PAGE_SIZE,
        start_date: date | datetime | None = None,
        end_date: date | datetime | None = None,
    ) -> Page[RecycleBinItem]:
        """Active items, most recently deleted first."""
        page, limit = validate_page(page, limit)

        conditions = list(_UNRESOLVED)
        if entity_type:
            conditions.append(RecycleBinItem.entity_type == resolve(entity_type).entity_type.value)

        term = sanitize_search_term(search)
        if term:
            pattern = f"%{escape_like_pattern(term)}%"
            conditions.append(
                or_(
                    RecycleBinItem.meta_title.ilike(pattern, escape="\\"),
                    RecycleBinItem.meta_name.ilike(pattern, escape="\\"),
                    RecycleBinItem.meta_email.ilike(pattern, escape="\\"),
                )
            )

        if start_date is not None:
            conditions.append(RecycleBinItem.deleted_at >= as_utc(start_date))
        if end_date is not None:
            conditions.append(RecycleBinItem.deleted_at <= as_utc(end_date, end_of_day=True))

        total = self._db.scalar(select(func.count()).select_from(RecycleBinItem).where(*conditions))
        items = self._db.scalars(
            select(RecycleBinItem)
            .where(*conditions)
            .order_by(RecycleBinItem.deleted_at.desc(), RecycleBinItem.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()
        return Page(items=list(items), total=total or 0, page=page, limit=limit)

    def get_item(self, item_id: int) -> RecycleBinItem:
        """
        Raises:
            NotFoundError: no bin item with this id
        """
        item = self._db.get(RecycleBinItem, item_id)
        if item is None:
            raise NotFoundError("Recycle bin item", item_id)
        return item

    def expiring_soon(self, *, now: datetime | None = None) -> list[RecycleBinItem]:
        """Active items expiring within the warning window, soonest first."""
        now = now or self._clock()
        return list(
            self._db.scalars(
                select(RecycleBinItem)
                .where(
                    *_UNRESOLVED,
                    RecycleBinItem.expires_at > now,
                    RecycleBinItem.expires_at <= now + self._warning,
                )
                .order_by(RecycleBinItem.expires_at.asc())
            ).all()
        )

    # =========================================================================
    # Command Methods
    # =========================================================================

    def _active_item(self, item_id: int) -> RecycleBinItem:
        item = self.get_item(item_id)
        if item.state in RecycleBinState.TERMINAL:
            raise AlreadyResolvedError(item_id, item.state)
        return item

    def _resolve(self, item: RecycleBinItem, marker: str, now: datetime) -> None:
        """
        Mark the item and remove it, only if it is still unresolved.
        A concurrent restore/purge that won the race has already removed
        the row, so losing the race reads as NotFound.
        """
        item_id = item.id
        marked = self._db.execute(
            update(RecycleBinItem)
            .where(RecycleBinItem.id == item_id, *_UNRESOLVED)
            .values({marker: now})
            .execution_options(synchronize_session=False)
        )
        if marked.rowcount == 0:
            self._db.rollback()
            raise NotFoundError("Recycle bin item", item_id)

        self._db.execute(
            delete(RecycleBinItem)
            .where(RecycleBinItem.id == item_id)
            .execution_options(synchronize_session=False)
        )
        self._db.expunge(item)

    def restore_item(self, item_id: int, *, restored_by: int | None = None) -> Any:
        """
        Recreate the live record from the bin snapshot, with its original id.

        Raises:
            NotFoundError: item does not exist (or was already removed)
            AlreadyResolvedError: item is restored or purged
            ConflictError: a live record with the same id exists
        """
        item = self._active_item(item_id)
        kind = resolve(item.entity_type)
        entity_id = item.entity_id

        if kind.exists(self._db, entity_id):
            raise ConflictError(
                f"A live {kind.label.lower()} with ID {entity_id} already exists",
                item_id=item_id,
                entity_type=kind.entity_type.value,
                entity_id=entity_id,
            )

        record = kind.build(item.snapshot_data)
        self._db.add(record)
        try:
            self._db.flush()
        except IntegrityError:
            self._db.rollback()
            raise ConflictError(
                f"A live {kind.label.lower()} with ID {entity_id} already exists",
                item_id=item_id,
                entity_type=kind.entity_type.value,
                entity_id=entity_id,
            ) from None

        self._resolve(item, "restored_at", self._clock())
        safe_commit(self._db)
        self._db.refresh(record)

        logger.info(
            "Restored from recycle bin",
            item_id=item_id,
            entity_type=kind.entity_type.value,
            entity_id=entity_id,
            restored_by=restored_by,
        )
        return record

    def purge_item(self, item_id: int) -> None:
        """
        Permanently remove one item. Irreversible.

        Raises:
            NotFoundError: item does not exist (or was already removed)
            AlreadyResolvedError: item is restored or purged
        """
        item = self._active_item(item_id)
        entity_type, entity_id = item.entity_type, item.entity_id

        self._resolve(item, "permanently_deleted_at", self._clock())
        safe_commit(self._db)

        logger.info(
            "Permanently deleted from recycle bin",
            item_id=item_id,
            entity_type=entity_type,
            entity_id=entity_id,
        )

    def purge_items(self, item_ids: Iterable[int]) -> BulkPurgeResult:
        """Purge several items; each one succeeds or fails on its own."""
        item_ids = list(dict.fromkeys(item_ids))
        if len(item_ids) > Limits.MAX_BULK_DELETE:
            raise ValidationError(
                f"At most {Limits.MAX_BULK_DELETE} items can be deleted at once",
                count=len(item_ids),
            )

        result = BulkPurgeResult()
        for item_id in item_ids:
            try:
                self.purge_item(item_id)
            except (NotFoundError, AlreadyResolvedError) as exc:
                result.failed.append({"id": item_id, "reason": exc.detail})
            else:
                result.purged.append(item_id)
        return result

    def purge_expired(self, *, now: datetime | None = None) -> int:
        """
        Remove every active item whose expiry has passed.
        Rows already removed by a concurrent sweep are not counted.
        """
        now = now or self._clock()
        expired = self._db.execute(
            delete(RecycleBinItem)
            .where(*_UNRESOLVED, RecycleBinItem.expires_at <= now)
            .execution_options(synchronize_session=False)
        )
        safe_commit(self._db)
        purged = expired.rowcount or 0
        if purged:
            maintenance_logger.info("Purged expired recycle bin items", purged=purged)
        return purged

    def sweep(self) -> SweepResult:
        """
        Scheduled maintenance: warn about items close to expiry, then purge
        expired ones. Safe to run repeatedly or concurrently.
        """
        now = self._clock()

        pending = [item for item in self.expiring_soon(now=now) if item.warning_sent_at is None]
        notified = False
        if pending:
            outcome = self.notifier.notify(pending)
            if outcome.sent:
                self._db.execute(
                    update(RecycleBinItem)
                    .where(RecycleBinItem.id.in_([item.id for item in pending]))
                    .values(warning_sent_at=now)
                )
                safe_commit(self._db)
                notified = True

        purged = self.purge_expired(now=now)

        maintenance_logger.info(
            "Recycle bin sweep finished",
            warning_count=len(pending),
            notified=notified,
            purged=purged,
        )
        return SweepResult(warning_count=len(pending), notified=notified, purged=purged)
