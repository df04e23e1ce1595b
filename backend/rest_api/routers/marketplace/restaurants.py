"""
Restaurant endpoints.

Also serves the restaurant-scoped views of other resources: the
categories it offers, its products and menu, its reviews and rating.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rest_api.routers._common import current_principal, require_role
from rest_api.services.domain import (
    CategoryService,
    ProductService,
    RestaurantService,
    ReviewService,
)
from rest_api.services.permissions import Principal
from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    CategoryCreate,
    CategoryDeletionOutput,
    CategoryOutput,
    CategoryProductsOutput,
    ProductOutput,
    RatingOutput,
    RestaurantCreate,
    RestaurantOutput,
    RestaurantUpdate,
    RestaurantWithCategoriesOutput,
    ReviewOutput,
)


router = APIRouter(prefix="/restaurants", tags=["restaurants"])


def _get_service(db: Session) -> RestaurantService:
    return RestaurantService(db)


# =============================================================================
# Restaurants
# =============================================================================


@router.post("", response_model=RestaurantOutput, status_code=status.HTTP_201_CREATED)
def register_restaurant(
    body: RestaurantCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_role(Roles.OWNER)),
) -> RestaurantOutput:
    """Register a restaurant owned by the caller. Requires RESTAURANT role."""
    return _get_service(db).register(body, principal)


@router.get("", response_model=list[RestaurantOutput])
def list_restaurants(db: Session = Depends(get_db)) -> list[RestaurantOutput]:
    return _get_service(db).list_all()


@router.get("/owner/{owner_id}", response_model=list[RestaurantOutput])
def list_owner_restaurants(
    owner_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> list[RestaurantOutput]:
    """Restaurants of an owner. Only the owner can list them."""
    return _get_service(db).list_by_owner(owner_id, principal)


@router.get("/{restaurant_id}", response_model=RestaurantWithCategoriesOutput)
def get_restaurant(restaurant_id: int, db: Session = Depends(get_db)) -> RestaurantWithCategoriesOutput:
    """Restaurant profile with the categories it offers."""
    return _get_service(db).get_with_categories(restaurant_id)


@router.patch("/{restaurant_id}", response_model=RestaurantOutput)
def update_restaurant(
    restaurant_id: int,
    body: RestaurantUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> RestaurantOutput:
    return _get_service(db).update(restaurant_id, body, principal)


@router.delete("/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_restaurant(
    restaurant_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> None:
    """
    Delete a restaurant with its products, reviews and category links.

    409 when the restaurant has orders.
    """
    _get_service(db).delete(restaurant_id, principal)


# =============================================================================
# Categories offered
# =============================================================================


@router.get("/{restaurant_id}/categories", response_model=list[CategoryOutput])
def list_restaurant_categories(restaurant_id: int, db: Session = Depends(get_db)) -> list[CategoryOutput]:
    return _get_service(db).list_categories(restaurant_id)


@router.post(
    "/{restaurant_id}/categories",
    response_model=CategoryOutput,
    status_code=status.HTTP_201_CREATED,
)
def add_restaurant_category(
    restaurant_id: int,
    body: CategoryCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> CategoryOutput:
    """Offer a category, reusing an existing one with the same name."""
    return _get_service(db).add_category(restaurant_id, body, principal)


@router.delete("/{restaurant_id}/categories/{category_id}", response_model=CategoryDeletionOutput)
def remove_restaurant_category(
    restaurant_id: int,
    category_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> CategoryDeletionOutput:
    """
    Stop offering a category.

    The category itself is deleted when no other restaurant offers it and
    no product is filed under it.
    """
    result = CategoryService(db).delete_from_restaurant(restaurant_id, category_id, principal)
    return result.to_output()


# =============================================================================
# Menu and reviews
# =============================================================================


@router.get("/{restaurant_id}/products", response_model=list[ProductOutput])
def list_restaurant_products(restaurant_id: int, db: Session = Depends(get_db)) -> list[ProductOutput]:
    return ProductService(db).list_by_restaurant(restaurant_id)


@router.get("/{restaurant_id}/menu", response_model=list[CategoryProductsOutput])
def get_restaurant_menu(restaurant_id: int, db: Session = Depends(get_db)) -> list[CategoryProductsOutput]:
    """Products grouped by category, both ordered by name."""
    return ProductService(db).grouped_by_category(restaurant_id)


@router.get("/{restaurant_id}/reviews", response_model=list[ReviewOutput])
def list_restaurant_reviews(restaurant_id: int, db: Session = Depends(get_db)) -> list[ReviewOutput]:
    return ReviewService(db).list_for_restaurant(restaurant_id)


@router.get("/{restaurant_id}/rating", response_model=RatingOutput)
def get_restaurant_rating(restaurant_id: int, db: Session = Depends(get_db)) -> RatingOutput:
    return ReviewService(db).restaurant_rating(restaurant_id)
