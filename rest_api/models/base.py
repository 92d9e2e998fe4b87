"""
Base class and EntityMixin for all SQLAlchemy ORM models.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# BIGINT in PostgreSQL; SQLite only autoincrements an INTEGER PRIMARY KEY
BigIntPK = BigInteger().with_variant(Integer, "sqlite")


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class EntityMixin:
    """
    Bookkeeping shared by every live entity kind.

    Fields added:
    - id: Primary key, preserved across recycle bin round trips
    - created_at, updated_at: Audit timestamps
    - revision: Internal save counter, never captured in snapshots

    Entities are not soft-deleted in place: deleting one moves a snapshot
    into the recycle bin and removes the row.
    """

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=utcnow, nullable=True
    )

    revision: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    def bump_revision(self) -> None:
        """Mark a save; updated_at is refreshed by the onupdate hook."""
        self.revision = (self.revision or 0) + 1

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        return f"<{class_name}(id={getattr(self, 'id', None)}, rev={self.revision})>"


class ModeratedMixin:
    """
    Columns of user-submitted content that goes through moderation
    (pending -> approved -> published, or rejected / changes requested).
    """

    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[Optional[str]] = mapped_column(String(255), index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(32), default="pending", nullable=False, index=True)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Submitting user; no FK so a recycled owner does not block restores
    owner_id: Mapped[Optional[int]] = mapped_column(BigInteger, index=True)


class ContactMixin:
    """Public contact details shown on directory pages."""

    email: Mapped[Optional[str]] = mapped_column(String(255))
    phone: Mapped[Optional[str]] = mapped_column(String(64))
    address: Mapped[Optional[str]] = mapped_column(Text)
