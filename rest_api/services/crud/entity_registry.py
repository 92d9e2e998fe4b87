"""
Entity Registry.

Maps every entity-kind tag the admin works with to its storage model.
The version history log and the recycle bin only ever reach entity tables
through this registry, so the set of kinds is closed: an unknown tag fails
with UnknownEntityTypeError instead of silently touching nothing.

Usage:
    from rest_api.services.crud.entity_registry import EntityType, resolve

    kind = resolve("job")
    job = kind.load(db, 42)
    kind.save(db, job, {"status": "approved"})
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from rest_api.models import (
    Base,
    Blog,
    Category,
    Coupon,
    EducationCategory,
    Education,
    EmailTemplate,
    Event,
    Job,
    Listing,
    MemberVideo,
    MembershipPlan,
    Product,
    SeekingEmployment,
    ShippingMethod,
    ShippingZone,
    TrainerListing,
    User,
)
from rest_api.services.crud.snapshot import deserialize_snapshot
from shared.config.constants import IDENTITY_FIELDS
from shared.utils.exceptions import UnknownEntityTypeError


class EntityType(str, Enum):
    """Closed set of entity-kind tags."""

    LISTING = "listing"
    TRAINER = "trainer"
    EVENT = "event"
    PRODUCT = "product"
    STORE_PRODUCT = "store-product"
    JOB = "job"
    BLOG = "blog"
    EDUCATION = "education"
    EDUCATION_CATEGORY = "education-category"
    MEMBER_VIDEO = "memberVideo"
    USER = "user"
    CATEGORY = "category"
    SEEKING_EMPLOYMENT = "seekingEmployment"
    COUPON = "coupon"
    MEMBERSHIP_PLAN = "membership-plan"
    SHIPPING_ZONE = "shipping-zone"
    SHIPPING_METHOD = "shipping-method"
    EMAIL_TEMPLATE = "email-template"


def humanize(tag: str) -> str:
    """
    Display label for a tag.

    >>> humanize("membership-plan")
    'Membership plan'
    >>> humanize("memberVideo")
    'Member video'
    """
    words = re.sub(r"(?<=[a-z])(?=[A-Z])", " ", tag).replace("-", " ").replace("_", " ")
    return words.lower().capitalize()


@dataclass(frozen=True)
class EntityKind:
    """
    One registered kind: tag, storage model and how to read its display fields.

    owner_field: ownership column, never overwritten by a version restore
    title_fields: columns tried in order for the display title
    """

    entity_type: EntityType
    model: Type[Base]
    owner_field: Optional[str] = "owner_id"
    title_fields: tuple[str, ...] = ("title", "slug")

    @property
    def label(self) -> str:
        return humanize(self.entity_type.value)

    @property
    def collection_name(self) -> str:
        return self.model.__tablename__

    @property
    def column_names(self) -> frozenset[str]:
        return frozenset(column.key for column in self.model.__table__.columns)

    def load(self, db: Session, entity_id: int) -> Any:
        """Fetch the live record, or None."""
        return db.scalar(select(self.model).where(self.model.id == entity_id))

    def exists(self, db: Session, entity_id: int) -> bool:
        count = db.scalar(
            select(func.count()).select_from(self.model).where(self.model.id == entity_id)
        )
        return bool(count)

    def writable_fields(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Subset of `fields` that maps onto non-identity columns."""
        allowed = self.column_names - IDENTITY_FIELDS
        return {key: value for key, value in fields.items() if key in allowed}

    def unknown_fields(self, fields: dict[str, Any]) -> list[str]:
        return sorted(set(fields) - self.column_names)

    def save(self, db: Session, record: Any, fields: dict[str, Any]) -> Any:
        """
        Apply field values to a live record and flush.

        Identity columns and unknown keys are ignored. Date/datetime values
        given as ISO strings are parsed. The caller commits.
        """
        values = deserialize_snapshot(self.model, self.writable_fields(fields))
        for key, value in values.items():
            setattr(record, key, value)
        record.bump_revision()
        db.flush()
        return record

    def build(self, snapshot: dict[str, Any]) -> Any:
        """New (unsaved) record from a snapshot, keeping the snapshot's id."""
        return self.model(**deserialize_snapshot(self.model, snapshot))

    def metadata(self, snapshot: dict[str, Any]) -> dict[str, str]:
        """
        Display metadata {title, name, email, status}.
        Absent or empty values are omitted, never invented.
        """
        metadata = {}
        for field in self.title_fields:
            if snapshot.get(field):
                metadata["title"] = str(snapshot[field])
                break
        for field in ("name", "email", "status"):
            if snapshot.get(field):
                metadata[field] = str(snapshot[field])
        return metadata


_KINDS: dict[EntityType, EntityKind] = {
    kind.entity_type: kind
    for kind in (
        EntityKind(EntityType.LISTING, Listing),
        EntityKind(EntityType.TRAINER, TrainerListing),
        EntityKind(EntityType.EVENT, Event),
        EntityKind(EntityType.PRODUCT, Product, owner_field=None),
        EntityKind(EntityType.STORE_PRODUCT, Product, owner_field=None),
        EntityKind(EntityType.JOB, Job),
        EntityKind(EntityType.BLOG, Blog),
        EntityKind(EntityType.EDUCATION, Education),
        EntityKind(EntityType.EDUCATION_CATEGORY, EducationCategory, owner_field=None, title_fields=("slug",)),
        EntityKind(EntityType.MEMBER_VIDEO, MemberVideo),
        EntityKind(EntityType.USER, User, owner_field=None, title_fields=()),
        EntityKind(EntityType.CATEGORY, Category, owner_field=None, title_fields=("slug",)),
        EntityKind(EntityType.SEEKING_EMPLOYMENT, SeekingEmployment, title_fields=("desired_role",)),
        EntityKind(EntityType.COUPON, Coupon, owner_field=None, title_fields=("code",)),
        EntityKind(EntityType.MEMBERSHIP_PLAN, MembershipPlan, owner_field=None, title_fields=("slug",)),
        EntityKind(EntityType.SHIPPING_ZONE, ShippingZone, owner_field=None, title_fields=()),
        EntityKind(EntityType.SHIPPING_METHOD, ShippingMethod, owner_field=None, title_fields=()),
        EntityKind(EntityType.EMAIL_TEMPLATE, EmailTemplate, owner_field=None, title_fields=("subject",)),
    )
}


def resolve(entity_type: EntityType | str) -> EntityKind:
    """
    Look up a kind by tag.

    Raises:
        UnknownEntityTypeError: tag is not registered
    """
    try:
        return _KINDS[EntityType(entity_type)]
    except ValueError:
        raise UnknownEntityTypeError(str(entity_type)) from None


def metadata_of(entity_type: EntityType | str, snapshot: dict[str, Any]) -> dict[str, str]:
    return resolve(entity_type).metadata(snapshot)


def list_entity_types() -> list[dict[str, str]]:
    """[{value, label}] for every registered tag, in declaration order."""
    return [{"value": kind.entity_type.value, "label": kind.label} for kind in _KINDS.values()]
