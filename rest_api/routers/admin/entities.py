"""
Generic entity endpoints.

Any registered entity kind can be read, created, updated and deleted here.
Updates always snapshot the current state first; deletes always go through
the recycle bin.
"""

from typing import Any

from fastapi import APIRouter, Body, status
from sqlalchemy.exc import IntegrityError

from rest_api.routers.admin._base import (
    Depends,
    Session,
    actor,
    get_db,
    get_user_email,
    get_user_id,
    require_admin,
    serialize_model,
)
from rest_api.services.crud.entity_registry import EntityKind, resolve
from rest_api.services.crud.snapshot import deserialize_snapshot
from rest_api.services.domain import RecycleBinService, VersionHistoryService
from shared.config.constants import ChangeType
from shared.infrastructure.db import safe_commit
from shared.utils.admin_schemas import (
    EntityDeleteOutput,
    EntityMutationOutput,
    RecycleBinItemOutput,
)
from shared.utils.exceptions import NotFoundError, ValidationError


router = APIRouter(prefix="/entities", tags=["admin-entities"])


def _load_or_404(db: Session, kind: EntityKind, entity_id: int) -> Any:
    record = kind.load(db, entity_id)
    if record is None:
        raise NotFoundError(kind.label, entity_id)
    return record


def _reject_unknown_fields(kind: EntityKind, data: dict[str, Any]) -> None:
    unknown = kind.unknown_fields(data)
    if unknown:
        raise ValidationError(
            f"Unknown fields for {kind.entity_type.value}: {', '.join(unknown)}",
            entity_type=kind.entity_type.value,
            fields=unknown,
        )


@router.get("/{entity_type}/{entity_id}", response_model=dict[str, Any])
def get_entity(
    entity_type: str,
    entity_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict[str, Any]:
    kind = resolve(entity_type)
    return serialize_model(_load_or_404(db, kind, entity_id))


@router.post(
    "/{entity_type}",
    response_model=EntityMutationOutput,
    status_code=status.HTTP_201_CREATED,
)
def create_entity(
    entity_type: str,
    data: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> EntityMutationOutput:
    """Create an entity and record it as version 1 ("Created")."""
    kind = resolve(entity_type)
    _reject_unknown_fields(kind, data)

    record = kind.model(**deserialize_snapshot(kind.model, kind.writable_fields(data)))
    db.add(record)
    try:
        safe_commit(db)
    except IntegrityError:
        raise ValidationError(
            f"Invalid {kind.entity_type.value}: required field missing or duplicate value",
            entity_type=kind.entity_type.value,
        ) from None
    db.refresh(record)

    history = VersionHistoryService(db).create_snapshot(
        kind.entity_type, record, change_type=ChangeType.CREATE, **actor(user)
    )
    return EntityMutationOutput(
        entity=serialize_model(record),
        history_recorded=history.ok,
        history_error=history.error,
    )


@router.patch("/{entity_type}/{entity_id}", response_model=EntityMutationOutput)
def update_entity(
    entity_type: str,
    entity_id: int,
    data: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> EntityMutationOutput:
    """
    Snapshot the current state, then apply the changes.

    A duplicate unique value answers 409 and records no version.
    """
    kind = resolve(entity_type)
    _reject_unknown_fields(kind, data)
    record = _load_or_404(db, kind, entity_id)

    result = VersionHistoryService(db).update_with_history(kind.entity_type, record, data, **actor(user))
    return EntityMutationOutput(
        entity=serialize_model(result.record),
        history_recorded=result.history.ok,
        history_error=result.history.error,
    )


@router.delete("/{entity_type}/{entity_id}", response_model=EntityDeleteOutput)
def delete_entity(
    entity_type: str,
    entity_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> EntityDeleteOutput:
    """Soft delete: move the entity into the recycle bin."""
    kind = resolve(entity_type)
    record = _load_or_404(db, kind, entity_id)

    item = RecycleBinService(db).move_to_recycle_bin(
        kind.entity_type,
        record,
        deleted_by=get_user_id(user),
        deleted_by_email=get_user_email(user),
    )
    return EntityDeleteOutput(
        success=True,
        message=f"{kind.label} {entity_id} moved to the recycle bin",
        recycle_bin_item=RecycleBinItemOutput.from_model(item),
    )
