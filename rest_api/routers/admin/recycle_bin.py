"""
Recycle bin endpoints: browse, restore and permanently delete soft-deleted
entities, plus the scheduled sweep trigger.
"""

from datetime import date

from fastapi import APIRouter, Query

from rest_api.routers._common.pagination import Pagination, get_recycle_bin_pagination
from rest_api.routers.admin._base import (
    Depends,
    Session,
    get_db,
    get_user_id,
    require_admin,
    serialize_model,
)
from rest_api.services.domain import RecycleBinService
from rest_api.services.notifications import ExpiryWarningNotifier
from shared.config.logging import maintenance_logger
from shared.security.auth import verify_cron_key
from shared.utils.admin_schemas import (
    BulkDeleteInput,
    BulkDeleteOutput,
    PurgeOutput,
    RecycleBinItemOutput,
    RecycleBinPageOutput,
    RecycleBinRestoreOutput,
    SweepOutput,
)


router = APIRouter(prefix="/recycle-bin", tags=["admin-recycle-bin"])


def get_expiry_notifier() -> ExpiryWarningNotifier:
    """Dependency for the sweep's operator notification channel."""
    return ExpiryWarningNotifier.from_settings()


# =============================================================================
# Maintenance trigger (shared secret, no user token)
# =============================================================================


@router.post("/cron/run", response_model=SweepOutput, dependencies=[Depends(verify_cron_key)])
def run_sweep(
    db: Session = Depends(get_db),
    notifier: ExpiryWarningNotifier = Depends(get_expiry_notifier),
) -> SweepOutput:
    """
    Warn about items close to expiry and purge expired ones.
    Called by an external scheduler with the X-Cron-Key header.
    """
    maintenance_logger.info("Recycle bin sweep triggered")
    result = RecycleBinService(db, notifier=notifier).sweep()
    return SweepOutput(
        success=True,
        warning_count=result.warning_count,
        notified=result.notified,
        purged=result.purged,
    )


# =============================================================================
# Admin endpoints
# =============================================================================


@router.get("", response_model=RecycleBinPageOutput)
def list_recycle_bin(
    entity_type: str | None = Query(default=None, description="Filter by entity type tag"),
    search: str | None = Query(default=None, description="Match title, name or email"),
    start_date: date | None = Query(default=None, description="Deleted on or after"),
    end_date: date | None = Query(default=None, description="Deleted on or before"),
    pagination: Pagination = Depends(get_recycle_bin_pagination),
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> RecycleBinPageOutput:
    """List active recycle bin items, most recently deleted first."""
    page = RecycleBinService(db).list_items(
        entity_type=entity_type,
        search=search,
        page=pagination.page,
        limit=pagination.limit,
        start_date=start_date,
        end_date=end_date,
    )
    return RecycleBinPageOutput(
        items=[RecycleBinItemOutput.from_model(item) for item in page.items],
        total=page.total,
        page=page.page,
        limit=page.limit,
        pages=page.pages,
    )


@router.post("/bulk-delete", response_model=BulkDeleteOutput)
def bulk_delete_items(
    body: BulkDeleteInput,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> BulkDeleteOutput:
    """Permanently delete several items; failures are reported per item."""
    result = RecycleBinService(db).purge_items(body.item_ids)
    return BulkDeleteOutput(purged=result.purged, failed=result.failed)


@router.post("/{item_id}/restore", response_model=RecycleBinRestoreOutput)
def restore_item(
    item_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> RecycleBinRestoreOutput:
    """Recreate the deleted entity with its original id."""
    service = RecycleBinService(db)
    item = service.get_item(item_id)
    entity_type, entity_id = item.entity_type, item.entity_id

    record = service.restore_item(item_id, restored_by=get_user_id(user))
    return RecycleBinRestoreOutput(
        success=True,
        message=f"{entity_type} {entity_id} restored successfully",
        entity_type=entity_type,
        entity_id=entity_id,
        entity=serialize_model(record),
    )


@router.delete("/{item_id}", response_model=PurgeOutput)
def purge_item(
    item_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> PurgeOutput:
    """Permanently delete one item. Irreversible."""
    RecycleBinService(db).purge_item(item_id)
    return PurgeOutput(success=True, message=f"Recycle bin item {item_id} permanently deleted")
