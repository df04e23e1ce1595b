"""
Product Repository - Data access for menu items.
Eager loading of category and restaurant prevents N+1 when mapping outputs.
"""

from dataclasses import dataclass

from sqlalchemy import Select, select
from sqlalchemy.orm import Session, selectinload

from rest_api.models import Category, Product
from shared.utils.validators import escape_like_pattern
from .base import BaseRepository, RepositoryFilters


@dataclass
class ProductFilters(RepositoryFilters):
    """Filters specific to products."""

    restaurant_id: int | None = None
    category_id: int | None = None
    is_active: bool | None = None


class ProductRepository(BaseRepository[Product]):
    """
    Repository for Product entities.

    Guarantees eager loading of:
    - category
    - restaurant
    """

    @property
    def model(self) -> type[Product]:
        return Product

    def _base_query(self) -> Select:
        return (
            select(Product)
            .options(
                selectinload(Product.category),
                selectinload(Product.restaurant),
            )
            .order_by(Product.name, Product.id)
        )

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if not isinstance(filters, ProductFilters):
            return query

        if filters.restaurant_id is not None:
            query = query.where(Product.restaurant_id == filters.restaurant_id)
        if filters.category_id is not None:
            query = query.where(Product.category_id == filters.category_id)
        if filters.is_active is not None:
            query = query.where(Product.is_active.is_(filters.is_active))
        if filters.search:
            pattern = f"%{escape_like_pattern(filters.search)}%"
            query = query.where(Product.name.ilike(pattern, escape="\\"))

        return query

    def find_by_restaurant(self, restaurant_id: int) -> list[Product]:
        return self.find_all(ProductFilters(restaurant_id=restaurant_id))

    def find_by_category(self, category_id: int) -> list[Product]:
        return self.find_all(ProductFilters(category_id=category_id))

    def search_by_name(self, term: str) -> list[Product]:
        """Case-insensitive "contains" match on the product name."""
        return self.find_all(ProductFilters(search=term))

    def find_for_menu(self, restaurant_id: int) -> list[Product]:
        """Restaurant products ordered by category name, then product name."""
        query = (
            select(Product)
            .join(Category, Category.id == Product.category_id)
            .where(Product.restaurant_id == restaurant_id)
            .options(selectinload(Product.category))
            .order_by(Category.name, Product.name, Product.id)
        )
        return self._fetch(query)

    def find_for_order(self, product_ids: list[int]) -> dict[int, Product]:
        """Products by id, for pricing and validating order lines."""
        return {product.id: product for product in self.find_by_ids(product_ids)}


def get_product_repository(db: Session) -> ProductRepository:
    """Factory function for dependency injection."""
    return ProductRepository(db)
