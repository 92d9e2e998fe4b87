"""
Email Template Model.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, EntityMixin


class EmailTemplate(EntityMixin, Base):
    """
    Editable subject/body for a transactional email event
    (e.g. "listing.approved", "admin.recycle-bin-warning").
    """

    __tablename__ = "email_template"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    event_key: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(32), default="active", nullable=False)
