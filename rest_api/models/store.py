"""
Store models: Product, Coupon, ShippingZone, ShippingMethod.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, EntityMixin


class Product(EntityMixin, Base):
    """
    A product sold in the store.
    Also exposed to the admin as the "store-product" entity kind.
    """

    __tablename__ = "product"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[Optional[str]] = mapped_column(String(255), index=True)
    sku: Mapped[Optional[str]] = mapped_column(String(64), unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[Optional[str]] = mapped_column(String(120), index=True)
    price: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="draft", nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    images: Mapped[Optional[str]] = mapped_column(Text)  # JSON array of URLs


class Coupon(EntityMixin, Base):
    """A store discount code."""

    __tablename__ = "coupon"

    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    discount_type: Mapped[str] = mapped_column(String(16), default="percent", nullable=False)  # percent, fixed
    discount_value: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="active", nullable=False)
    starts_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    ends_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    max_redemptions: Mapped[Optional[int]] = mapped_column(Integer)


class ShippingZone(EntityMixin, Base):
    """A set of destinations sharing shipping methods."""

    __tablename__ = "shipping_zone"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    countries: Mapped[Optional[str]] = mapped_column(Text)  # JSON array of ISO codes
    status: Mapped[str] = mapped_column(String(32), default="active", nullable=False)


class ShippingMethod(EntityMixin, Base):
    """A shipping option priced per zone."""

    __tablename__ = "shipping_method"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    zone_id: Mapped[Optional[int]] = mapped_column(BigInteger, index=True)
    price: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    estimated_days: Mapped[Optional[int]] = mapped_column(Integer)
    status: Mapped[str] = mapped_column(String(32), default="active", nullable=False)
