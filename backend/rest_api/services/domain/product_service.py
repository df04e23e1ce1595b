"""
Product Service - menu items of a restaurant.

Usage:
    from rest_api.services.domain import ProductService

    service = ProductService(db)
    product = service.create(ProductCreate(...), principal)
    menu = service.grouped_by_category(restaurant_id)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Product
from rest_api.repositories import (
    get_category_repository,
    get_order_repository,
    get_product_repository,
    get_restaurant_repository,
)
from rest_api.services.base_service import BaseService
from rest_api.services.domain.category_service import CategoryService
from rest_api.services.permissions import Principal, ensure_owner, ensure_role
from shared.config.constants import Roles
from shared.config.logging import get_logger
from shared.utils.exceptions import (
    CategoryNotFoundError,
    ConflictError,
    ProductNotFoundError,
    RestaurantNotFoundError,
)
from shared.utils.schemas import (
    CategoryProductsOutput,
    ProductCreate,
    ProductOutput,
    ProductSummary,
    ProductUpdate,
)
from shared.utils.validators import require_text, sanitize_search_term, validate_image_url, validate_price

logger = get_logger(__name__)


def to_output(product: Product) -> ProductOutput:
    return ProductOutput(
        id=product.id,
        restaurant_id=product.restaurant_id,
        category_id=product.category_id,
        category_name=product.category.name,
        name=product.name,
        description=product.description,
        price=product.price,
        image=product.image,
        is_active=product.is_active,
        quantity=product.quantity,
    )


def to_summary(product: Product) -> ProductSummary:
    return ProductSummary(
        id=product.id,
        name=product.name,
        price=product.price,
        image=product.image,
        is_active=product.is_active,
        restaurant_id=product.restaurant_id,
        restaurant_name=product.restaurant.name,
    )


class ProductService(BaseService):
    """
    Service for product management.

    Business rules:
    - Only the owner of the restaurant can create, update or delete its products
    - The category must exist; filing a product under it makes the
      restaurant offer that category
    - Prices are non-negative amounts with at most two decimals
    - A product referenced by order lines cannot be deleted
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self._products = get_product_repository(db)
        self._restaurants = get_restaurant_repository(db)
        self._categories = get_category_repository(db)
        self._orders = get_order_repository(db)
        self._category_service = CategoryService(db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_entity(self, product_id: int) -> Product:
        product = self._products.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def get_by_id(self, product_id: int) -> ProductOutput:
        return to_output(self.get_entity(product_id))

    def list_all(self) -> list[ProductOutput]:
        return [to_output(p) for p in self._products.find_all()]

    def list_by_restaurant(self, restaurant_id: int) -> list[ProductOutput]:
        self._require_restaurant(restaurant_id)
        return [to_output(p) for p in self._products.find_by_restaurant(restaurant_id)]

    def list_by_category(self, category_id: int) -> list[ProductSummary]:
        if not self._categories.exists(category_id):
            raise CategoryNotFoundError(category_id)
        return [to_summary(p) for p in self._products.find_by_category(category_id)]

    def search_by_name(self, term: str | None) -> list[ProductSummary]:
        """Products whose name contains ``term`` (case-insensitive). Blank term: nothing."""
        term = sanitize_search_term(term)
        if not term:
            return []
        return [to_summary(p) for p in self._products.search_by_name(term)]

    def grouped_by_category(self, restaurant_id: int) -> list[CategoryProductsOutput]:
        """
        Restaurant menu: one section per category, sections ordered by
        category name and products by name within each section.
        """
        self._require_restaurant(restaurant_id)

        sections: dict[int, CategoryProductsOutput] = {}
        for product in self._products.find_for_menu(restaurant_id):
            section = sections.get(product.category_id)
            if section is None:
                section = CategoryProductsOutput(
                    category_id=product.category_id,
                    category_name=product.category.name,
                    products=[],
                )
                sections[product.category_id] = section
            section.products.append(to_output(product))
        return list(sections.values())

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create(self, data: ProductCreate, principal: Principal) -> ProductOutput:
        ensure_role(principal, Roles.OWNER, "create products")
        restaurant = self._require_restaurant(data.restaurant_id)
        ensure_owner(
            principal,
            restaurant.owner.email,
            "add products to this restaurant",
            restaurant_id=restaurant.id,
        )
        if not self._categories.exists(data.category_id):
            raise CategoryNotFoundError(data.category_id)

        product = Product(
            restaurant_id=restaurant.id,
            category_id=data.category_id,
            name=require_text(data.name, "name"),
            description=data.description,
            price=validate_price(data.price),
            image=validate_image_url(data.image),
            is_active=data.is_active,
            quantity=data.quantity,
        )
        self._products.save(product)
        self._category_service.attach_to_restaurant(restaurant.id, data.category_id)
        self._commit()

        logger.info(
            "Product created",
            product_id=product.id,
            restaurant_id=restaurant.id,
            category_id=data.category_id,
        )
        return to_output(product)

    def update(self, product_id: int, data: ProductUpdate, principal: Principal) -> ProductOutput:
        """
        Partial update. ``category_name`` takes precedence over
        ``category_id`` and creates the category when it does not exist.
        """
        product = self._get_owned(product_id, principal, "update this product")
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)

        new_category_id = None
        if changes.get("category_name"):
            new_category_id = self._category_service.find_or_create(changes["category_name"]).id
        elif changes.get("category_id") is not None:
            if not self._categories.exists(changes["category_id"]):
                raise CategoryNotFoundError(changes["category_id"])
            new_category_id = changes["category_id"]

        if new_category_id is not None and new_category_id != product.category_id:
            product.category_id = new_category_id
            self._category_service.attach_to_restaurant(product.restaurant_id, new_category_id)

        if changes.get("name") is not None:
            product.name = require_text(changes["name"], "name")
        if "description" in changes:
            product.description = changes["description"]
        if changes.get("price") is not None:
            product.price = validate_price(changes["price"])
        if "image" in changes:
            product.image = validate_image_url(changes["image"])
        if changes.get("is_active") is not None:
            product.is_active = changes["is_active"]
        if changes.get("quantity") is not None:
            product.quantity = changes["quantity"]

        product.touch()
        self._products.save(product)
        self._commit()

        logger.info("Product updated", product_id=product_id, fields=sorted(changes))
        return to_output(product)

    def delete(self, product_id: int, principal: Principal) -> None:
        product = self._get_owned(product_id, principal, "delete this product")
        if self._orders.exists_for_product(product_id):
            raise ConflictError(
                "Product is part of existing orders and cannot be deleted; deactivate it instead",
                product_id=product_id,
            )

        self._products.delete(product)
        self._commit()
        logger.info("Product deleted", product_id=product_id, restaurant_id=product.restaurant_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_restaurant(self, restaurant_id: int):
        restaurant = self._restaurants.find_by_id(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)
        return restaurant

    def _get_owned(self, product_id: int, principal: Principal, action: str) -> Product:
        product = self.get_entity(product_id)
        restaurant = self._require_restaurant(product.restaurant_id)
        ensure_owner(principal, restaurant.owner.email, action, product_id=product_id)
        return product
