"""
User Model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, EntityMixin


class User(EntityMixin, Base):
    """
    A site account (member, trainer, moderator or admin).
    Credentials are managed by the auth service and are not stored here.
    """

    __tablename__ = "app_user"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(64))
    address: Mapped[Optional[str]] = mapped_column(Text)
    role: Mapped[str] = mapped_column(String(32), default="MEMBER", nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="active", nullable=False)
    avatar_url: Mapped[Optional[str]] = mapped_column(Text)
    last_login_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
