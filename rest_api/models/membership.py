"""
Membership Plan Model.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, EntityMixin


class MembershipPlan(EntityMixin, Base):
    """
    A paid membership tier. Billing lives with the payment provider;
    this row only describes the plan.
    """

    __tablename__ = "membership_plan"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    interval: Mapped[str] = mapped_column(String(16), default="month", nullable=False)  # month, year
    features: Mapped[Optional[str]] = mapped_column(Text)  # JSON array
    status: Mapped[str] = mapped_column(String(32), default="active", nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
