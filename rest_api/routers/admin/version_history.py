"""
Version history endpoints: browse, compare and restore entity versions.

Note: fixed paths are declared before /{entity_type}/{entity_id} so that
e.g. /version/12 is not read as entity type "version".
"""

from datetime import date

from fastapi import APIRouter, Query

from rest_api.routers._common.pagination import (
    Pagination,
    get_pagination,
    get_recent_history_pagination,
)
from rest_api.routers.admin._base import (
    Depends,
    Session,
    get_db,
    get_user_email,
    get_user_id,
    get_user_name,
    require_admin,
    serialize_model,
)
from rest_api.services.crud.entity_registry import list_entity_types
from rest_api.services.domain import Page, VersionHistoryService
from shared.utils.admin_schemas import (
    DeleteHistoryOutput,
    EntityTypeOutput,
    RestoreVersionOutput,
    VersionCompareOutput,
    VersionOutput,
    VersionPageOutput,
    VersionStatsOutput,
)


router = APIRouter(prefix="/version-history", tags=["admin-version-history"])


def _page_output(page: Page) -> VersionPageOutput:
    return VersionPageOutput(
        versions=[VersionOutput.from_model(version) for version in page.items],
        total=page.total,
        page=page.page,
        limit=page.limit,
        pages=page.pages,
    )


@router.get("/entity-types", response_model=list[EntityTypeOutput])
def get_entity_types(user: dict = Depends(require_admin)) -> list[EntityTypeOutput]:
    """Known entity type tags with display labels, for filter UIs."""
    return [EntityTypeOutput(**entry) for entry in list_entity_types()]


@router.get("/stats", response_model=VersionStatsOutput)
def get_stats(
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> VersionStatsOutput:
    return VersionStatsOutput(**VersionHistoryService(db).stats())


@router.get("/recent", response_model=VersionPageOutput)
def get_recent_history(
    entity_type: str | None = Query(default=None),
    changed_by: int | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    pagination: Pagination = Depends(get_recent_history_pagination),
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> VersionPageOutput:
    """Versions across all entities, newest first."""
    page = VersionHistoryService(db).recent_history(
        entity_type=entity_type,
        changed_by=changed_by,
        start_date=start_date,
        end_date=end_date,
        page=pagination.page,
        limit=pagination.limit,
    )
    return _page_output(page)


@router.get("/version/{version_id}", response_model=VersionOutput)
def get_version(
    version_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> VersionOutput:
    return VersionOutput.from_model(VersionHistoryService(db).get_version(version_id))


@router.get("/compare/{version_id_1}/{version_id_2}", response_model=VersionCompareOutput)
def compare_versions(
    version_id_1: int,
    version_id_2: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> VersionCompareOutput:
    """Field-level differences between two versions."""
    comparison = VersionHistoryService(db).compare_versions(version_id_1, version_id_2)
    return VersionCompareOutput(
        differences=comparison.differences,
        version1=VersionOutput.from_model(comparison.version1),
        version2=VersionOutput.from_model(comparison.version2),
    )


@router.post("/restore/{version_id}", response_model=RestoreVersionOutput)
def restore_version(
    version_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> RestoreVersionOutput:
    """
    Write a past version back onto the live entity.
    The current state is kept as a new "restore" version first.
    """
    result = VersionHistoryService(db).restore_to_version(
        version_id,
        restored_by=get_user_id(user),
        restored_by_name=get_user_name(user),
        restored_by_email=get_user_email(user),
    )
    return RestoreVersionOutput(
        success=True,
        message=result.message,
        entity=serialize_model(result.record),
        version=VersionOutput.from_model(result.version),
    )


@router.get("/{entity_type}/{entity_id}", response_model=VersionPageOutput)
def get_entity_history(
    entity_type: str,
    entity_id: int,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> VersionPageOutput:
    """Versions of one entity, newest first."""
    page = VersionHistoryService(db).list_versions(
        entity_type, entity_id, page=pagination.page, limit=pagination.limit
    )
    return _page_output(page)


@router.delete("/{entity_type}/{entity_id}", response_model=DeleteHistoryOutput)
def delete_entity_history(
    entity_type: str,
    entity_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> DeleteHistoryOutput:
    """Drop every version of one entity (cleanup after a permanent delete)."""
    deleted = VersionHistoryService(db).delete_history(entity_type, entity_id)
    return DeleteHistoryOutput(entity_type=entity_type, entity_id=entity_id, deleted=deleted)
