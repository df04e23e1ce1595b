"""
JWT issuance and validation for bearer authentication.

Access tokens carry the caller identity (``sub`` = user id, ``email``,
``role``) plus the standard iss/aud/iat/exp claims and a unique ``jti``.
Refresh tokens carry only ``sub`` and can only be exchanged for a new
access token.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import jwt
from fastapi import Header

from shared.config.logging import get_logger
from shared.config.settings import JWT_AUDIENCE, JWT_ISSUER, JWT_SECRET, settings
from shared.utils.exceptions import AuthenticationError

logger = get_logger(__name__)

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def sign_jwt(
    payload: dict[str, Any],
    ttl_seconds: int | None = None,
    token_type: str = ACCESS_TOKEN,
) -> str:
    """
    Sign a JWT token with the given payload.

    Args:
        payload: Claims to include in the token (sub, email, role).
        ttl_seconds: Token lifetime in seconds. Defaults to the configured
            expiry for ``token_type``.
        token_type: "access" or "refresh".

    Returns:
        Signed JWT token string.
    """
    if ttl_seconds is None:
        if token_type == REFRESH_TOKEN:
            ttl_seconds = settings.jwt_refresh_token_expire_days * 24 * 60 * 60
        else:
            ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    now = int(time.time())
    data = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": now,
        "exp": now + ttl_seconds,
        "type": token_type,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, JWT_SECRET, algorithm=JWT_ALGORITHM)


def sign_access_token(user_id: int, email: str, role: str) -> str:
    return sign_jwt({"sub": str(user_id), "email": email, "role": role})


def sign_refresh_token(user_id: int) -> str:
    return sign_jwt({"sub": str(user_id)}, token_type=REFRESH_TOKEN)


def verify_jwt(token: str, expected_type: str = ACCESS_TOKEN) -> dict[str, Any]:
    """
    Verify and decode a JWT token.

    Raises:
        AuthenticationError: If the token is expired, malformed, signed with
            another key, of the wrong type or missing required claims.
    """
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
            options={"require": ["exp", "iat", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired") from None
    except jwt.InvalidTokenError as e:
        # The client only gets a generic message
        logger.warning("JWT validation failed", error=str(e))
        raise AuthenticationError("Invalid token") from None

    if payload.get("type") != expected_type:
        raise AuthenticationError(
            f"Invalid token type. Expected {expected_type} token.",
            token_type=payload.get("type"),
        )

    try:
        int(payload["sub"])
    except (ValueError, TypeError):
        raise AuthenticationError("Invalid token: malformed subject claim") from None

    if expected_type == ACCESS_TOKEN and not payload.get("email"):
        raise AuthenticationError("Invalid token: missing email claim")

    return payload


def verify_refresh_token(token: str) -> dict[str, Any]:
    return verify_jwt(token, expected_type=REFRESH_TOKEN)


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Raises:
        AuthenticationError: If header is missing or malformed.
    """
    if not authorization:
        raise AuthenticationError("Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError(
            "Invalid Authorization header format. Expected: Bearer <token>"
        )
    return token.strip()


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency returning the verified access-token claims.

    Routers normally depend on ``current_principal`` instead, which wraps
    these claims in a Principal.
    """
    token = get_bearer_token(authorization)
    return verify_jwt(token)
