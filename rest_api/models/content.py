"""
Editorial content models: Blog, MemberVideo.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, EntityMixin, ModeratedMixin


class Blog(EntityMixin, ModeratedMixin, Base):
    """
    A blog article. `description` holds the excerpt, `body` the full text.
    """

    __tablename__ = "blog"

    category: Mapped[Optional[str]] = mapped_column(String(120), index=True)
    body: Mapped[Optional[str]] = mapped_column(Text)
    cover_image: Mapped[Optional[str]] = mapped_column(Text)
    tags: Mapped[Optional[str]] = mapped_column(Text)  # JSON array
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))


class MemberVideo(EntityMixin, ModeratedMixin, Base):
    """
    A members-only video published by a trainer.
    """

    __tablename__ = "member_video"

    category: Mapped[Optional[str]] = mapped_column(String(120), index=True)
    video_url: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(Text)
    duration_seconds: Mapped[Optional[int]] = mapped_column(Integer)
    trainer_id: Mapped[Optional[int]] = mapped_column(BigInteger, index=True)
