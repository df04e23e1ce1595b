"""
Cuisine catalog endpoints (read only).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rest_api.services.domain import CuisineService
from shared.infrastructure.db import get_db
from shared.utils.schemas import CuisineOutput


router = APIRouter(prefix="/cuisines", tags=["cuisines"])


@router.get("", response_model=list[CuisineOutput])
def list_cuisines(db: Session = Depends(get_db)) -> list[CuisineOutput]:
    return CuisineService(db).list_all()


@router.get("/{cuisine_id}", response_model=CuisineOutput)
def get_cuisine(cuisine_id: int, db: Session = Depends(get_db)) -> CuisineOutput:
    return CuisineService(db).get_by_id(cuisine_id)
