"""
Product endpoints.

CLEAN-ARCH: Thin router that delegates to ProductService.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.routers._common import current_principal, require_role
from rest_api.services.domain import ProductService
from rest_api.services.permissions import Principal
from shared.config.constants import Limits, Roles
from shared.infrastructure.db import get_db
from shared.utils.schemas import ProductCreate, ProductOutput, ProductSummary, ProductUpdate


router = APIRouter(prefix="/products", tags=["products"])


def _get_service(db: Session) -> ProductService:
    """Get ProductService instance."""
    return ProductService(db)


@router.get("", response_model=list[ProductOutput])
def list_products(db: Session = Depends(get_db)) -> list[ProductOutput]:
    return _get_service(db).list_all()


@router.get("/search", response_model=list[ProductSummary])
def search_products(
    name: str = Query(default="", max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    db: Session = Depends(get_db),
) -> list[ProductSummary]:
    """Case-insensitive search by product name."""
    return _get_service(db).search_by_name(name)


@router.get("/category/{category_id}", response_model=list[ProductSummary])
def list_products_by_category(category_id: int, db: Session = Depends(get_db)) -> list[ProductSummary]:
    return _get_service(db).list_by_category(category_id)


@router.get("/{product_id}", response_model=ProductOutput)
def get_product(product_id: int, db: Session = Depends(get_db)) -> ProductOutput:
    return _get_service(db).get_by_id(product_id)


@router.post("", response_model=ProductOutput, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_role(Roles.OWNER)),
) -> ProductOutput:
    """Add a product to one of the caller's restaurants."""
    return _get_service(db).create(body, principal)


@router.patch("/{product_id}", response_model=ProductOutput)
def update_product(
    product_id: int,
    body: ProductUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> ProductOutput:
    return _get_service(db).update(product_id, body, principal)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> None:
    """Delete a product. 409 when order lines reference it."""
    _get_service(db).delete(product_id, principal)
