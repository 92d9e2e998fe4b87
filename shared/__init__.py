"""
Shared module for common utilities used by the REST API.

STRUCTURE:
- shared.security: Admin JWT verification, maintenance trigger guard
  - auth.py: verify_jwt, current_user_context, verify_cron_key

- shared.infrastructure: Database
  - db.py: SQLAlchemy sessions, safe_commit()

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, ChangeType, RecycleBinState, Limits

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Input validation helpers
  - admin_schemas.py: Pydantic schemas for the admin surface

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, current_user_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import ChangeType, Limits
    from shared.utils.exceptions import NotFoundError, AlreadyResolvedError
"""
