"""
Category endpoints (read only; restaurants manage their offer under
/api/restaurants/{id}/categories).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rest_api.services.domain import CategoryService
from shared.infrastructure.db import get_db
from shared.utils.schemas import CategoryOutput


router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryOutput])
def list_categories(db: Session = Depends(get_db)) -> list[CategoryOutput]:
    return CategoryService(db).list_all()


@router.get("/{category_id}", response_model=CategoryOutput)
def get_category(category_id: int, db: Session = Depends(get_db)) -> CategoryOutput:
    return CategoryService(db).get_by_id(category_id)
