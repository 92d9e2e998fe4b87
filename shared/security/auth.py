"""
Authentication and authorization utilities for the admin surface.

Staff tokens are issued by the auth service; this module only signs tokens
for tooling/tests and verifies them on incoming admin requests. The
maintenance trigger authenticates with a shared secret instead of a JWT.
"""

from __future__ import annotations

import hmac
import time
import uuid
from typing import Any

import jwt
from fastapi import Header, HTTPException, status

from shared.config.settings import settings
from shared.config.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# JWT Functions (for staff authentication)
# =============================================================================


def sign_jwt(payload: dict[str, Any], ttl_seconds: int | None = None) -> str:
    """
    Sign an access token with the given payload.

    Args:
        payload: Claims to include in the token (sub, email, name, roles).
        ttl_seconds: Token lifetime in seconds. Defaults to access token expiry.

    Returns:
        Signed JWT token string.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    now = int(time.time())
    data = {
        **payload,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + ttl_seconds,
        "type": "access",
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, settings.jwt_secret, algorithm="HS256")


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Verify and decode a JWT token.

    Returns:
        Decoded token claims.

    Raises:
        HTTPException: If token is invalid or expired.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=["HS256"],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError as e:
        # Log the actual error for debugging, but return generic message to client
        logger.warning("JWT validation failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )

    if "sub" not in payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing subject claim",
        )

    if payload.get("type") not in ("access", None):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: invalid type claim",
        )

    return payload


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Raises:
        HTTPException: If header is missing or malformed.
    """
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header",
        )
    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Authorization header format. Expected: Bearer <token>",
        )
    return authorization.split(" ", 1)[1].strip()


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency to get the current user context from JWT.

    Usage:
        @router.get("/protected")
        def protected_endpoint(ctx = Depends(current_user_context)):
            user_id = ctx["sub"]
            ...

    Returns:
        Dict with: sub (user_id), email, name, roles
    """
    token = get_bearer_token(authorization)
    return verify_jwt(token)


# =============================================================================
# Maintenance trigger
# =============================================================================


def verify_cron_key(
    x_cron_key: str | None = Header(default=None, alias="X-Cron-Key"),
) -> None:
    """
    FastAPI dependency guarding scheduled maintenance endpoints.

    The trigger is disabled (always 401) while no cron secret is configured.
    """
    secret = settings.cron_secret
    if not secret or not x_cron_key or not hmac.compare_digest(
        x_cron_key.encode(), secret.encode()
    ):
        logger.warning("Rejected maintenance trigger", has_key=bool(x_cron_key))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
