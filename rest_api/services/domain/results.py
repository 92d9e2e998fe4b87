"""
Result types returned by the domain services.

Best-effort side effects (version snapshots, e-mail warnings) report through
outcome objects instead of raising, so the primary operation's result and
the side effect's result stay separate.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from rest_api.models import VersionHistory

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a listing plus totals."""

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


@dataclass
class SnapshotOutcome:
    """Result of a best-effort version snapshot."""

    ok: bool
    version: Optional[VersionHistory] = None
    error: Optional[str] = None


@dataclass
class MutationResult:
    """An update's primary result and its history side effect."""

    record: Any
    history: SnapshotOutcome


@dataclass
class RestoreResult:
    record: Any
    message: str
    version: VersionHistory  # the "restore" version capturing the pre-restore state


@dataclass
class VersionComparison:
    differences: list[dict[str, Any]]
    version1: VersionHistory
    version2: VersionHistory


@dataclass
class BulkPurgeResult:
    purged: list[int] = field(default_factory=list)
    failed: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class SweepResult:
    """Counts from one maintenance sweep."""

    warning_count: int
    notified: bool
    purged: int
