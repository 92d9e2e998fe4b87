"""
Admin API router - combines all admin sub-routers.

- recycle_bin: Soft-deleted entities, restore, purge and the sweep trigger
- version_history: Entity versions, compare, restore, activity feed
- entities: Generic read/create/update/delete for every registered kind

All routes are prefixed with /api/admin
"""

from fastapi import APIRouter

from .recycle_bin import router as recycle_bin_router
from .version_history import router as version_history_router
from .entities import router as entities_router


# Create the main admin router
router = APIRouter(prefix="/api/admin")

router.include_router(recycle_bin_router)
router.include_router(version_history_router)
router.include_router(entities_router)


__all__ = ["router"]
