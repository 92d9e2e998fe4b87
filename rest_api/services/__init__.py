"""
Services module for business logic.

CLEAN ARCHITECTURE:
- domain/: Application services (version history, recycle bin) - USE THESE
- crud/: Entity registry and snapshot helpers
- notifications/: Outgoing e-mail for operator alerts

Usage:
    from rest_api.services.domain import VersionHistoryService, RecycleBinService

    history = VersionHistoryService(db)
    result = history.update_with_history("job", job, {"status": "approved"})

    bin_service = RecycleBinService(db)
    bin_service.move_to_recycle_bin("job", job, deleted_by=user_id)
"""
