"""
User account endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rest_api.routers._common import current_principal
from rest_api.services.domain import UserService
from rest_api.services.permissions import Principal
from shared.infrastructure.db import get_db
from shared.utils.schemas import UserOutput, UserUpdate


router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserOutput)
def get_me(
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> UserOutput:
    """Profile of the authenticated user."""
    return UserService(db).get_profile(principal)


@router.patch("/{user_id}", response_model=UserOutput)
def update_user(
    user_id: int,
    body: UserUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> UserOutput:
    """Update name, phone, address or password. Only the account holder."""
    return UserService(db).update(user_id, body, principal)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_me(
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> None:
    """Delete the authenticated account. Existing tokens stop resolving a profile."""
    UserService(db).delete(principal)
