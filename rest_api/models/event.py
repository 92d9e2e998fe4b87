"""
Event Model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, ContactMixin, EntityMixin, ModeratedMixin


class Event(EntityMixin, ModeratedMixin, ContactMixin, Base):
    """
    A community event (workshop, competition, seminar) submitted for review.
    """

    __tablename__ = "event"

    category: Mapped[Optional[str]] = mapped_column(String(120), index=True)
    price: Mapped[Optional[float]] = mapped_column(Float)
    venue: Mapped[Optional[str]] = mapped_column(Text)
    starts_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), index=True)
    ends_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    capacity: Mapped[Optional[int]] = mapped_column(Integer)
