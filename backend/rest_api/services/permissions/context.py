"""
Principal - the authenticated caller, passed explicitly to every service
method that authorizes something.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from shared.utils.exceptions import (
    AuthenticationError,
    InsufficientRoleError,
    UnauthorizedAccessError,
)


class _UserLike(Protocol):
    id: int
    email: str
    role: str


@dataclass(frozen=True)
class Principal:
    """
    Identity resolved from a verified access token (or a User row).

    Usage:
        principal = Principal.from_claims(claims)
        ensure_owner(principal, restaurant.owner.email, "update this restaurant")
    """

    user_id: int
    email: str
    role: str

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "Principal":
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token: malformed subject claim") from None
        return cls(
            user_id=user_id,
            email=str(claims.get("email", "")).lower(),
            role=str(claims.get("role", "")),
        )

    @classmethod
    def from_user(cls, user: _UserLike) -> "Principal":
        return cls(user_id=user.id, email=user.email.lower(), role=user.role)

    def owns(self, owner_email: str | None) -> bool:
        """Ownership is decided by email, case-insensitively."""
        return bool(owner_email) and owner_email.lower() == self.email

    def to_log_context(self) -> dict[str, Any]:
        return {"principal_id": self.user_id, "principal_role": self.role}


def ensure_owner(principal: Principal, owner_email: str | None, action: str, **log_context: Any) -> None:
    """Raise UnauthorizedAccessError unless the principal owns the resource."""
    if not principal.owns(owner_email):
        raise UnauthorizedAccessError(action, **principal.to_log_context(), **log_context)


def ensure_role(principal: Principal, role: str, action: str) -> None:
    """Raise InsufficientRoleError unless the principal has ``role``."""
    if principal.role != role:
        raise InsufficientRoleError(role, attempted=action, **principal.to_log_context())


def ensure_self(principal: Principal, user_id: int, action: str) -> None:
    """Raise UnauthorizedAccessError unless ``user_id`` is the caller."""
    if principal.user_id != user_id:
        raise UnauthorizedAccessError(action, target_user_id=user_id, **principal.to_log_context())
