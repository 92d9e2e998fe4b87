"""
Recycle Bin Model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from shared.config.constants import RecycleBinState

from .base import Base, BigIntPK, utcnow
from .history import SnapshotMetadataMixin


class RecycleBinItem(SnapshotMetadataMixin, Base):
    """
    A soft-deleted entity awaiting restore or permanent removal.
    The live row is gone while this item exists; `snapshot` holds its full
    state including the original id.
    """

    __tablename__ = "recycle_bin_item"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    entity_type: Mapped[str] = mapped_column(String(64), nullable=False)
    entity_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    collection_name: Mapped[str] = mapped_column(String(64), nullable=False)
    snapshot: Mapped[str] = mapped_column(Text, nullable=False)  # JSON object

    deleted_by: Mapped[Optional[int]] = mapped_column(BigInteger)
    deleted_by_email: Mapped[Optional[str]] = mapped_column(Text)
    deleted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Stamped once the expiry warning for this item has been delivered
    warning_sent_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    restored_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    permanently_deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_recycle_bin_item_expires_at", "expires_at"),
        Index("ix_recycle_bin_item_type_deleted", "entity_type", "deleted_at"),
    )

    @property
    def state(self) -> str:
        if self.permanently_deleted_at is not None:
            return RecycleBinState.PURGED
        if self.restored_at is not None:
            return RecycleBinState.RESTORED
        return RecycleBinState.ACTIVE

    def __repr__(self) -> str:
        return f"<RecycleBinItem(id={self.id}, {self.entity_type}:{self.entity_id}, {self.state})>"
