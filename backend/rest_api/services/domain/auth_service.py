"""
Auth Service - registration and login flows that hand out bearer tokens.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from rest_api.services.base_service import BaseService
from rest_api.services.domain.user_service import UserService
from shared.config.logging import audit_auth_event, get_logger, mask_email
from shared.config.settings import settings
from shared.security.auth import sign_access_token, sign_refresh_token, verify_refresh_token
from shared.security.password import hash_password, needs_rehash
from shared.utils.exceptions import AuthenticationError, UserNotFoundError
from shared.utils.schemas import AuthResponse, UserCreate, UserOutput

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService(BaseService):
    """
    Issues access and refresh tokens.

    The access token carries sub (user id), email and role; it is all the
    API needs to build the request Principal.
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self._user_service = UserService(db)

    def _issue(self, user: UserOutput, message: str) -> AuthResponse:
        return AuthResponse(
            token=sign_access_token(user.id, user.email, user.role),
            refresh_token=sign_refresh_token(user.id),
            expires_in=settings.jwt_access_token_expire_minutes * 60,
            message=message,
            user=user,
        )

    def register(self, data: UserCreate, ip_address: str | None = None) -> AuthResponse:
        user = self._user_service.register(data)
        audit_auth_event("REGISTER", user_id=user.id, email=user.email, ip_address=ip_address)
        return self._issue(user, "User registered successfully")

    def login(self, email: str, password: str, ip_address: str | None = None) -> AuthResponse:
        """
        Check credentials and issue tokens.

        Unknown email, wrong password and deleted account all produce the
        same 401 so the response does not reveal which accounts exist.
        """
        user = self._user_service.authenticate(email, password)
        if user is None:
            audit_auth_event(
                "LOGIN", email=email, success=False, reason="invalid_credentials", ip_address=ip_address
            )
            raise AuthenticationError(INVALID_CREDENTIALS, email=mask_email(email))

        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)
            self._commit()
            logger.info("Password hash upgraded", user_id=user.id)

        audit_auth_event("LOGIN", user_id=user.id, email=user.email, ip_address=ip_address)
        return self._issue(UserOutput.model_validate(user), "Login successful")

    def refresh(self, refresh_token: str) -> AuthResponse:
        """Exchange a refresh token for a fresh token pair."""
        claims = verify_refresh_token(refresh_token)
        user_id = int(claims["sub"])
        try:
            user = self._user_service.get_by_id(user_id)
        except UserNotFoundError:
            # Deleted accounts cannot refresh
            audit_auth_event("TOKEN_REFRESH", user_id=user_id, success=False, reason="user_not_found")
            raise AuthenticationError("Invalid token") from None

        audit_auth_event("TOKEN_REFRESH", user_id=user.id, email=user.email)
        return self._issue(user, "Token refreshed")
