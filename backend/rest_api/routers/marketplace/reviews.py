"""
Review endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rest_api.routers._common import current_principal, require_role
from rest_api.services.domain import ReviewService
from rest_api.services.permissions import Principal
from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from shared.utils.schemas import ReviewCreate, ReviewOutput, ReviewUpdate


router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("", response_model=ReviewOutput, status_code=status.HTTP_201_CREATED)
def create_review(
    body: ReviewCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_role(Roles.CLIENT)),
) -> ReviewOutput:
    """Review a restaurant. Requires CLIENT role; score from 0 to 10."""
    return ReviewService(db).create(body, principal)


@router.get("/{review_id}", response_model=ReviewOutput)
def get_review(review_id: int, db: Session = Depends(get_db)) -> ReviewOutput:
    return ReviewService(db).get_by_id(review_id)


@router.patch("/{review_id}", response_model=ReviewOutput)
def update_review(
    review_id: int,
    body: ReviewUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> ReviewOutput:
    return ReviewService(db).update(review_id, body, principal)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(
    review_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> None:
    ReviewService(db).delete(review_id, principal)
