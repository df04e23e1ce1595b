"""
Restaurant Service - registration, profile and category offer of restaurants.

Usage:
    from rest_api.services.domain import RestaurantService

    service = RestaurantService(db)
    restaurant = service.register(RestaurantCreate(...), principal)
    service.add_category(restaurant.id, CategoryCreate(name="Pizzas"), principal)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Restaurant
from rest_api.repositories import (
    get_category_repository,
    get_order_repository,
    get_restaurant_repository,
    get_user_repository,
)
from rest_api.services.base_service import BaseService
from rest_api.services.domain.category_service import CategoryService
from rest_api.services.domain.cuisine_service import CuisineService
from rest_api.services.permissions import Principal, ensure_owner, ensure_role, ensure_self
from shared.config.constants import Roles
from shared.config.logging import get_logger
from shared.utils.exceptions import (
    ConflictError,
    DuplicateEntityError,
    InvalidCuisineError,
    RestaurantNotFoundError,
    UserNotFoundError,
)
from shared.utils.schemas import (
    CategoryCreate,
    CategoryOutput,
    RestaurantCreate,
    RestaurantOutput,
    RestaurantUpdate,
    RestaurantWithCategoriesOutput,
)
from shared.utils.validators import require_text, validate_image_url

logger = get_logger(__name__)

IMAGE_FIELDS = ("logo", "cover_image")
REQUIRED_TEXT_FIELDS = ("name", "description", "phone", "address")


def to_output(restaurant: Restaurant) -> RestaurantOutput:
    return RestaurantOutput(
        id=restaurant.id,
        owner_id=restaurant.owner_id,
        name=restaurant.name,
        description=restaurant.description,
        cuisine_id=restaurant.cuisine_id,
        cuisine_name=restaurant.cuisine.name if restaurant.cuisine else None,
        phone=restaurant.phone,
        email=restaurant.email,
        address=restaurant.address,
        opening_hours=restaurant.opening_hours,
        logo=restaurant.logo,
        cover_image=restaurant.cover_image,
        created_at=restaurant.created_at,
        updated_at=restaurant.updated_at,
    )


class RestaurantService(BaseService):
    """
    Service for restaurant management.

    Business rules:
    - Only RESTAURANT accounts can register restaurants
    - The cuisine must exist (400 otherwise)
    - Restaurant emails are unique
    - Only the owner (matched by email) can update or delete a restaurant
      or change the categories it offers
    - A restaurant with orders cannot be deleted
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self._restaurants = get_restaurant_repository(db)
        self._users = get_user_repository(db)
        self._orders = get_order_repository(db)
        self._categories = get_category_repository(db)
        self._category_service = CategoryService(db)
        self._cuisine_service = CuisineService(db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_entity(self, restaurant_id: int) -> Restaurant:
        restaurant = self._restaurants.find_by_id(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)
        return restaurant

    def get_owned(self, restaurant_id: int, principal: Principal, action: str) -> Restaurant:
        """The restaurant, provided the principal owns it (404, then 403)."""
        restaurant = self.get_entity(restaurant_id)
        ensure_owner(principal, restaurant.owner.email, action, restaurant_id=restaurant_id)
        return restaurant

    def list_all(self) -> list[RestaurantOutput]:
        return [to_output(r) for r in self._restaurants.find_all()]

    def get_by_id(self, restaurant_id: int) -> RestaurantOutput:
        return to_output(self.get_entity(restaurant_id))

    def get_with_categories(self, restaurant_id: int) -> RestaurantWithCategoriesOutput:
        restaurant = self.get_entity(restaurant_id)
        categories = self._categories.find_by_restaurant(restaurant_id)
        return RestaurantWithCategoriesOutput(
            **to_output(restaurant).model_dump(),
            categories=[CategoryOutput.model_validate(c) for c in categories],
        )

    def list_by_owner(self, owner_id: int, principal: Principal) -> list[RestaurantOutput]:
        ensure_self(principal, owner_id, "list restaurants of another owner")
        if self._users.find_by_id(owner_id) is None:
            raise UserNotFoundError(owner_id)
        return [to_output(r) for r in self._restaurants.find_by_owner(owner_id)]

    def list_categories(self, restaurant_id: int) -> list[CategoryOutput]:
        return self._category_service.list_for_restaurant(restaurant_id)

    # =========================================================================
    # Command Methods
    # =========================================================================

    def register(self, data: RestaurantCreate, principal: Principal) -> RestaurantOutput:
        owner = self._users.find_by_email(principal.email)
        if owner is None:
            raise UserNotFoundError(principal.user_id)
        ensure_role(Principal.from_user(owner), Roles.OWNER, "register restaurants")
        self._validate_cuisine(data.cuisine_id)

        email = data.email.lower()
        self._validate_unique_email(email)

        restaurant = Restaurant(
            owner_id=owner.id,
            cuisine_id=data.cuisine_id,
            name=require_text(data.name, "name"),
            description=require_text(data.description, "description", max_length=2000),
            phone=require_text(data.phone, "phone"),
            email=email,
            address=require_text(data.address, "address", max_length=500),
            opening_hours=data.opening_hours,
            logo=validate_image_url(data.logo, "logo"),
            cover_image=validate_image_url(data.cover_image, "cover_image"),
        )
        self._restaurants.save(restaurant)
        self._commit()

        logger.info("Restaurant registered", restaurant_id=restaurant.id, owner_id=owner.id)
        return to_output(restaurant)

    def update(
        self,
        restaurant_id: int,
        data: RestaurantUpdate,
        principal: Principal,
    ) -> RestaurantOutput:
        restaurant = self.get_owned(restaurant_id, principal, "update this restaurant")
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)

        if changes.get("cuisine_id") is not None:
            self._validate_cuisine(changes["cuisine_id"])
            restaurant.cuisine_id = changes["cuisine_id"]

        if changes.get("email") is not None:
            email = changes["email"].lower()
            if email != restaurant.email:
                self._validate_unique_email(email)
            restaurant.email = email

        for field in REQUIRED_TEXT_FIELDS:
            if changes.get(field) is not None:
                setattr(restaurant, field, require_text(changes[field], field, max_length=2000))

        if "opening_hours" in changes:
            restaurant.opening_hours = changes["opening_hours"]

        for field in IMAGE_FIELDS:
            if field in changes:
                setattr(restaurant, field, validate_image_url(changes[field], field))

        restaurant.touch()
        self._restaurants.save(restaurant)
        self._commit()

        logger.info("Restaurant updated", restaurant_id=restaurant_id, fields=sorted(changes))
        return to_output(restaurant)

    def delete(self, restaurant_id: int, principal: Principal) -> None:
        """
        Delete a restaurant with its products, reviews and category links.

        Categories left without restaurants or products are deleted too.
        """
        restaurant = self.get_owned(restaurant_id, principal, "delete this restaurant")
        if self._orders.exists_for_restaurant(restaurant_id):
            raise ConflictError(
                "Restaurant has orders and cannot be deleted",
                restaurant_id=restaurant_id,
            )

        category_ids = [c.id for c in self._categories.find_by_restaurant(restaurant_id)]
        self._categories.disassociate_all(restaurant_id)
        self._restaurants.delete(restaurant)

        removed = [cid for cid in category_ids if self._category_service.remove_if_orphan(cid)]
        self._commit()

        logger.info(
            "Restaurant deleted",
            restaurant_id=restaurant_id,
            orphan_categories_removed=len(removed),
        )

    def add_category(
        self,
        restaurant_id: int,
        data: CategoryCreate,
        principal: Principal,
    ) -> CategoryOutput:
        """Offer a category (found or created by name). Idempotent."""
        self.get_owned(restaurant_id, principal, "add categories to this restaurant")

        category = self._category_service.find_or_create(data.name, data.description)
        added = self._category_service.attach_to_restaurant(restaurant_id, category.id)
        self._commit()

        logger.info(
            "Category added to restaurant",
            restaurant_id=restaurant_id,
            category_id=category.id,
            already_offered=not added,
        )
        return CategoryOutput.model_validate(category)

    # =========================================================================
    # Validation Helpers
    # =========================================================================

    def _validate_cuisine(self, cuisine_id: int) -> None:
        if self._cuisine_service.find_entity(cuisine_id) is None:
            raise InvalidCuisineError(cuisine_id)

    def _validate_unique_email(self, email: str) -> None:
        if self._restaurants.find_by_email(email) is not None:
            raise DuplicateEntityError("Restaurant", email)
