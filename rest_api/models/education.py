"""
Education models: Education (classes/courses), EducationCategory.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Date, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, ContactMixin, EntityMixin, ModeratedMixin


class Education(EntityMixin, ModeratedMixin, ContactMixin, Base):
    """
    An education class or certification course offered by a provider.
    """

    __tablename__ = "education"

    category: Mapped[Optional[str]] = mapped_column(String(120), index=True)
    price: Mapped[Optional[float]] = mapped_column(Float)
    provider: Mapped[Optional[str]] = mapped_column(Text)
    format: Mapped[Optional[str]] = mapped_column(String(32))  # online, in_person, hybrid
    starts_on: Mapped[Optional[date]] = mapped_column(Date)
    duration_hours: Mapped[Optional[int]] = mapped_column(Integer)


class EducationCategory(EntityMixin, Base):
    """Category used to group education classes."""

    __tablename__ = "education_category"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
