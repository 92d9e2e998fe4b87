"""
Directory listing models: Listing, TrainerListing.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, ContactMixin, EntityMixin, ModeratedMixin


class Listing(EntityMixin, ModeratedMixin, ContactMixin, Base):
    """
    A business listing in the public directory (gyms, studios, suppliers).
    """

    __tablename__ = "listing"

    category: Mapped[Optional[str]] = mapped_column(String(120), index=True)
    website: Mapped[Optional[str]] = mapped_column(Text)
    city: Mapped[Optional[str]] = mapped_column(String(120))


class TrainerListing(EntityMixin, ModeratedMixin, ContactMixin, Base):
    """
    A trainer's profile listing.
    Specialties and certifications are stored as JSON arrays in text columns.
    """

    __tablename__ = "trainer_listing"

    category: Mapped[Optional[str]] = mapped_column(String(120), index=True)
    price: Mapped[Optional[float]] = mapped_column(Float)  # Hourly rate
    city: Mapped[Optional[str]] = mapped_column(String(120))
    specialties: Mapped[Optional[str]] = mapped_column(Text)  # JSON array
    certifications: Mapped[Optional[str]] = mapped_column(Text)  # JSON array
    is_verified: Mapped[bool] = mapped_column(default=False, nullable=False)
