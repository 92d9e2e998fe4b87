"""
Version History Model.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import BigInteger, DateTime, Index, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, BigIntPK, utcnow


class SnapshotMetadataMixin:
    """
    Display metadata captured alongside a snapshot.
    Denormalized into columns so listings can search them without parsing JSON.
    """

    meta_title: Mapped[Optional[str]] = mapped_column(Text)
    meta_name: Mapped[Optional[str]] = mapped_column(Text)
    meta_email: Mapped[Optional[str]] = mapped_column(Text)
    meta_status: Mapped[Optional[str]] = mapped_column(String(32))

    @property
    def entity_metadata(self) -> dict[str, str]:
        values = {
            "title": self.meta_title,
            "name": self.meta_name,
            "email": self.meta_email,
            "status": self.meta_status,
        }
        return {key: value for key, value in values.items() if value is not None}

    def apply_metadata(self, metadata: dict[str, Any]) -> None:
        self.meta_title = metadata.get("title")
        self.meta_name = metadata.get("name")
        self.meta_email = metadata.get("email")
        self.meta_status = metadata.get("status")

    @property
    def snapshot_data(self) -> dict[str, Any]:
        return json.loads(self.snapshot) if self.snapshot else {}


class VersionHistory(SnapshotMetadataMixin, Base):
    """
    One saved state of one entity. Append-only: rows are only removed by
    pruning (oldest beyond the retention cap) or an explicit cleanup.
    """

    __tablename__ = "version_history"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    entity_type: Mapped[str] = mapped_column(String(64), nullable=False)
    entity_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    collection_name: Mapped[str] = mapped_column(String(64), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    snapshot: Mapped[str] = mapped_column(Text, nullable=False)  # JSON object
    change_summary: Mapped[str] = mapped_column(Text, nullable=False, default="[]")  # JSON array

    # Who made the change
    changed_by: Mapped[Optional[int]] = mapped_column(BigInteger)
    changed_by_name: Mapped[Optional[str]] = mapped_column(Text)
    changed_by_email: Mapped[Optional[str]] = mapped_column(Text)

    change_type: Mapped[str] = mapped_column(String(32), default="update", nullable=False)  # create, update, status_change, restore
    restored_from_version: Mapped[Optional[int]] = mapped_column(Integer)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("entity_type", "entity_id", "version", name="uq_version_history_entity_version"),
        Index("ix_version_history_type_created", "entity_type", "created_at"),
        Index("ix_version_history_changed_by_created", "changed_by", "created_at"),
    )

    @property
    def summary(self) -> list[str]:
        return json.loads(self.change_summary) if self.change_summary else []

    def __repr__(self) -> str:
        return f"<VersionHistory({self.entity_type}:{self.entity_id} v{self.version})>"
