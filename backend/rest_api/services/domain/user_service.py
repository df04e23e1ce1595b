"""
User Service - account registration, profile and deletion.

Usage:
    from rest_api.services.domain import UserService

    service = UserService(db)
    user = service.register(UserCreate(...))
    profile = service.get_profile(principal)
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.repositories import get_user_repository
from rest_api.services.base_service import BaseService
from rest_api.services.permissions import Principal, ensure_self
from shared.config.logging import get_logger, mask_email
from shared.security.password import hash_password, verify_password
from shared.utils.exceptions import DuplicateEntityError, UserNotFoundError
from shared.utils.schemas import UserCreate, UserOutput, UserUpdate
from shared.utils.validators import require_text, validate_password, validate_role

logger = get_logger(__name__)


class UserService(BaseService):
    """
    Service for user accounts.

    Business rules:
    - Emails are unique (case-insensitive) across active and deleted accounts
    - Role defaults to CLIENT; only CLIENT and RESTAURANT can be registered
    - Passwords are stored as bcrypt hashes
    - Only the account holder can update or delete the account
    - Deletion is a soft delete; the account can no longer log in
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self._users = get_user_repository(db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_entity(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def get_by_id(self, user_id: int) -> UserOutput:
        return UserOutput.model_validate(self.get_entity(user_id))

    def get_by_email(self, email: str) -> User:
        user = self._users.find_by_email(email)
        if user is None:
            raise UserNotFoundError(email=mask_email(email))
        return user

    def get_profile(self, principal: Principal) -> UserOutput:
        """Profile of the caller, looked up by the email in the token."""
        return UserOutput.model_validate(self.get_by_email(principal.email))

    def authenticate(self, email: str, password: str) -> User | None:
        """The active user with these credentials, or None."""
        user = self._users.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    # =========================================================================
    # Command Methods
    # =========================================================================

    def register(self, data: UserCreate) -> UserOutput:
        email = data.email.lower()
        role = validate_role(data.role)
        validate_password(data.password)

        if self._users.email_taken(email):
            raise DuplicateEntityError("User", email)

        user = User(
            name=require_text(data.name, "name"),
            email=email,
            role=role,
            phone=data.phone,
            address=require_text(data.address, "address", max_length=500),
            password_hash=hash_password(data.password),
        )
        self._users.save(user)
        self._commit()

        logger.info("User registered", user_id=user.id, email=mask_email(email), role=role)
        return UserOutput.model_validate(user)

    def update(self, user_id: int, data: UserUpdate, principal: Principal) -> UserOutput:
        """Partial update of name, phone, address and (when non-empty) password."""
        ensure_self(principal, user_id, "update this user")
        user = self.get_entity(user_id)

        if data.name is not None:
            user.name = require_text(data.name, "name")
        if data.phone is not None:
            user.phone = data.phone
        if data.address is not None:
            user.address = require_text(data.address, "address", max_length=500)
        if data.password:
            user.password_hash = hash_password(validate_password(data.password))

        self._users.save(user)
        self._commit()

        logger.info("User updated", user_id=user.id)
        return UserOutput.model_validate(user)

    def delete(self, principal: Principal) -> None:
        """Soft-delete the caller's own account."""
        user = self.get_entity(principal.user_id)
        user.soft_delete()
        self._users.save(user)
        self._commit()

        logger.info("User deleted", user_id=user.id, email=mask_email(user.email))
