"""
Domain Services - Clean Architecture Application Layer.

CLEAN-ARCH: Services contain business logic and orchestrate operations.
Entity tables are only reached through the Entity Registry.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Entity Registry / snapshot helpers
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import VersionHistoryService

    # In router
    service = VersionHistoryService(db)
    page = service.list_versions("job", job_id, page=1, limit=20)
"""

from .results import (
    Page,
    SnapshotOutcome,
    MutationResult,
    RestoreResult,
    VersionComparison,
    BulkPurgeResult,
    SweepResult,
)
from .version_history_service import VersionHistoryService
from .recycle_bin_service import RecycleBinService

__all__ = [
    # Services
    "VersionHistoryService",
    "RecycleBinService",
    # Results
    "Page",
    "SnapshotOutcome",
    "MutationResult",
    "RestoreResult",
    "VersionComparison",
    "BulkPurgeResult",
    "SweepResult",
]
