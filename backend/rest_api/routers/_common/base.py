"""
Shared router dependencies: the authenticated principal and role gates.

Usage:
    @router.post("/restaurants", status_code=201)
    def create_restaurant(
        body: RestaurantCreate,
        db: Session = Depends(get_db),
        principal: Principal = Depends(require_role(Roles.OWNER)),
    ):
        ...
"""

from typing import Any, Callable

from fastapi import Depends
from sqlalchemy.orm import Session

from rest_api.repositories import get_user_repository
from rest_api.services.permissions import Principal, ensure_role
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.exceptions import AuthenticationError


def current_principal(
    claims: dict[str, Any] = Depends(current_user_context),
    db: Session = Depends(get_db),
) -> Principal:
    """
    Principal of the request.

    401 when the bearer token is missing or invalid, or when its account
    has been deleted since the token was issued.
    """
    principal = Principal.from_claims(claims)
    user = get_user_repository(db).find_by_id(principal.user_id)
    if user is None:
        raise AuthenticationError("Invalid token: account no longer active", user_id=principal.user_id)
    return Principal.from_user(user)


def require_role(role: str) -> Callable[..., Principal]:
    """Dependency factory: the principal, provided it has ``role`` (403 otherwise)."""

    def _dependency(principal: Principal = Depends(current_principal)) -> Principal:
        ensure_role(principal, role, "access this endpoint")
        return principal

    return _dependency

