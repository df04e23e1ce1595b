"""
Authentication router.
Handles registration, login, token refresh and the current identity.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from rest_api.routers._common import current_principal
from rest_api.services.domain import AuthService
from rest_api.services.permissions import Principal
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.rate_limit import limiter
from shared.utils.schemas import (
    AuthResponse,
    LoginRequest,
    PrincipalOutput,
    RefreshTokenRequest,
    UserCreate,
)


router = APIRouter(prefix="/api/auth", tags=["auth"])


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: Request, body: UserCreate, db: Session = Depends(get_db)) -> AuthResponse:
    """
    Create an account and return its tokens.

    Role is CLIENT unless RESTAURANT is requested.
    """
    return AuthService(db).register(body, ip_address=_client_ip(request))


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.login_rate_limit_rule)
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """
    Authenticate with email and password.

    The access token contains:
    - sub: user ID
    - email: user's email
    - role: CLIENT or RESTAURANT

    Rate limited per client IP.
    """
    return AuthService(db).login(body.email, body.password, ip_address=_client_ip(request))


@router.post("/refresh", response_model=AuthResponse)
def refresh(body: RefreshTokenRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Exchange a refresh token for a new token pair."""
    return AuthService(db).refresh(body.refresh_token)


@router.get("/me", response_model=PrincipalOutput)
def me(principal: Principal = Depends(current_principal)) -> PrincipalOutput:
    """Identity carried by the bearer token."""
    return PrincipalOutput(user_id=principal.user_id, email=principal.email, role=principal.role)
