"""
Job board models: Job, SeekingEmployment.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import BigInteger, Boolean, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, ContactMixin, EntityMixin, ModeratedMixin


class Job(EntityMixin, ModeratedMixin, ContactMixin, Base):
    """
    A job posting from an employer.
    """

    __tablename__ = "job"

    category: Mapped[Optional[str]] = mapped_column(String(120), index=True)
    company: Mapped[Optional[str]] = mapped_column(Text)
    employment_type: Mapped[Optional[str]] = mapped_column(String(32))  # full_time, part_time, contract
    salary_min: Mapped[Optional[float]] = mapped_column(Float)
    salary_max: Mapped[Optional[float]] = mapped_column(Float)
    is_remote: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class SeekingEmployment(EntityMixin, ContactMixin, Base):
    """
    A member's "open to work" post.
    """

    __tablename__ = "seeking_employment"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    desired_role: Mapped[Optional[str]] = mapped_column(Text)
    resume_url: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(32), default="pending", nullable=False)
    owner_id: Mapped[Optional[int]] = mapped_column(BigInteger, index=True)
