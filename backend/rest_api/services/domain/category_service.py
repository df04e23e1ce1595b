"""
Category Service - shared menu categories and their restaurant links.

Usage:
    from rest_api.services.domain import CategoryService

    service = CategoryService(db)
    category = service.find_or_create("Desserts", "Sweet things")
    result = service.delete_from_restaurant(restaurant_id, category.id, principal)
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from rest_api.models import Category
from rest_api.repositories import get_category_repository, get_restaurant_repository
from rest_api.services.base_service import BaseService
from rest_api.services.permissions import Principal, ensure_owner
from shared.config.logging import get_logger
from shared.utils.exceptions import CategoryNotFoundError, RestaurantNotFoundError
from shared.utils.schemas import CategoryDeletionOutput, CategoryOutput
from shared.utils.validators import require_text

logger = get_logger(__name__)


@dataclass(frozen=True)
class CategoryDeletionResult:
    """What delete_from_restaurant actually did."""

    restaurant_id: int
    category_id: int
    # The restaurant offered the category and no longer does
    disassociated: bool
    # The category row itself was removed
    deleted_globally: bool

    def to_output(self) -> CategoryDeletionOutput:
        return CategoryDeletionOutput(
            restaurant_id=self.restaurant_id,
            category_id=self.category_id,
            disassociated=self.disassociated,
            deleted_globally=self.deleted_globally,
        )


class CategoryService(BaseService):
    """
    Service for category management.

    Business rules:
    - Category names are global: find_or_create reuses an existing row
    - Restaurants offer categories through a many-to-many link
    - Removing a category from a restaurant only deletes the category row
      when no other restaurant offers it and no product is filed under it
    - Only the restaurant owner can remove a category from a restaurant
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self._categories = get_category_repository(db)
        self._restaurants = get_restaurant_repository(db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_all(self) -> list[CategoryOutput]:
        return [CategoryOutput.model_validate(c) for c in self._categories.find_all()]

    def get_entity(self, category_id: int) -> Category:
        category = self._categories.find_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    def get_by_id(self, category_id: int) -> CategoryOutput:
        return CategoryOutput.model_validate(self.get_entity(category_id))

    def list_for_restaurant(self, restaurant_id: int) -> list[CategoryOutput]:
        """Categories a restaurant offers, by name. 404 if the restaurant is unknown."""
        if not self._restaurants.exists(restaurant_id):
            raise RestaurantNotFoundError(restaurant_id)
        return [
            CategoryOutput.model_validate(c)
            for c in self._categories.find_by_restaurant(restaurant_id)
        ]

    # =========================================================================
    # Command Methods
    # =========================================================================

    def find_or_create(self, name: str, description: str | None = None) -> Category:
        """
        Category with this name, created when missing.

        Flushes but does not commit; callers commit as part of their own
        operation.
        """
        name = require_text(name, "name", max_length=120)
        category = self._categories.find_by_name(name)
        if category is not None:
            return category

        category = self._categories.save(Category(name=name, description=description))
        logger.info("Category created", category_id=category.id, name=name)
        return category

    def attach_to_restaurant(self, restaurant_id: int, category_id: int) -> bool:
        """Link without committing. Returns False when already linked."""
        return self._categories.associate(restaurant_id, category_id)

    def remove_if_orphan(self, category_id: int) -> bool:
        """Delete the category when nothing references it. Does not commit."""
        if not self._categories.is_orphan(category_id):
            return False
        self._categories.delete_by_id(category_id)
        logger.info("Orphan category deleted", category_id=category_id)
        return True

    def delete_from_restaurant(
        self,
        restaurant_id: int,
        category_id: int,
        principal: Principal,
    ) -> CategoryDeletionResult:
        """
        Remove a category from a restaurant's offer.

        The restaurant's link is removed first; then, if no product and
        no restaurant still reference the category, the category is
        deleted for everyone. A category the restaurant never offered is
        left untouched.
        """
        restaurant = self._restaurants.find_by_id(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)
        self.get_entity(category_id)
        ensure_owner(
            principal,
            restaurant.owner.email,
            "remove categories from this restaurant",
            restaurant_id=restaurant_id,
        )

        disassociated = self._categories.disassociate(restaurant_id, category_id)
        if not disassociated:
            logger.warning(
                "Category was not offered by restaurant",
                restaurant_id=restaurant_id,
                category_id=category_id,
            )
            return CategoryDeletionResult(
                restaurant_id=restaurant_id,
                category_id=category_id,
                disassociated=False,
                deleted_globally=False,
            )

        deleted_globally = self.remove_if_orphan(category_id)
        self._commit()

        logger.info(
            "Category removed from restaurant",
            restaurant_id=restaurant_id,
            category_id=category_id,
            disassociated=disassociated,
            deleted_globally=deleted_globally,
        )
        return CategoryDeletionResult(
            restaurant_id=restaurant_id,
            category_id=category_id,
            disassociated=disassociated,
            deleted_globally=deleted_globally,
        )
