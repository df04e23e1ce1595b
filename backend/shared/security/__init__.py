"""
Security module: Authentication, password hashing, rate limiting.
"""

from shared.security.auth import (
    sign_jwt,
    sign_access_token,
    sign_refresh_token,
    verify_jwt,
    verify_refresh_token,
    get_bearer_token,
    current_user_context,
)
from shared.security.password import hash_password, verify_password, needs_rehash
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler

__all__ = [
    # auth
    "sign_jwt",
    "sign_access_token",
    "sign_refresh_token",
    "verify_jwt",
    "verify_refresh_token",
    "get_bearer_token",
    "current_user_context",
    # password
    "hash_password",
    "verify_password",
    "needs_rehash",
    # rate_limit
    "limiter",
    "rate_limit_exceeded_handler",
]
