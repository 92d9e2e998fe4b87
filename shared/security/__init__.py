"""
Security module: JWT verification for the admin surface and the
shared-secret guard for maintenance triggers.
"""

from shared.security.auth import (
    sign_jwt,
    verify_jwt,
    get_bearer_token,
    current_user_context,
    verify_cron_key,
)

__all__ = [
    "sign_jwt",
    "verify_jwt",
    "get_bearer_token",
    "current_user_context",
    "verify_cron_key",
]
