"""
Category Repository - Data access for categories and their restaurant links.
"""

from sqlalchemy import Select, delete, func, insert, select
from sqlalchemy.orm import Session

from rest_api.models import Category, Product, restaurant_category
from .base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """
    Repository for Category entities.

    The restaurant/category association is read and written through the
    link table directly, so reference counts never depend on what happens
    to be loaded in the session.
    """

    @property
    def model(self) -> type[Category]:
        return Category

    def _base_query(self) -> Select:
        return select(Category).order_by(Category.name)

    def find_by_name(self, name: str) -> Category | None:
        return self._db.scalar(select(Category).where(Category.name == name))

    def find_by_restaurant(self, restaurant_id: int) -> list[Category]:
        query = (
            self._base_query()
            .join(restaurant_category, restaurant_category.c.category_id == Category.id)
            .where(restaurant_category.c.restaurant_id == restaurant_id)
        )
        return self._fetch(query)

    # -------------------------------------------------------------------------
    # Association
    # -------------------------------------------------------------------------

    def is_associated(self, restaurant_id: int, category_id: int) -> bool:
        query = select(restaurant_category.c.category_id).where(
            restaurant_category.c.restaurant_id == restaurant_id,
            restaurant_category.c.category_id == category_id,
        )
        return self._db.scalar(query) is not None

    def associate(self, restaurant_id: int, category_id: int) -> bool:
        """Link category to restaurant. Returns False if it already was."""
        if self.is_associated(restaurant_id, category_id):
            return False
        self._db.execute(
            insert(restaurant_category).values(
                restaurant_id=restaurant_id, category_id=category_id
            )
        )
        return True

    def disassociate(self, restaurant_id: int, category_id: int) -> bool:
        """Unlink category from restaurant. Returns True if a link was removed."""
        result = self._db.execute(
            delete(restaurant_category).where(
                restaurant_category.c.restaurant_id == restaurant_id,
                restaurant_category.c.category_id == category_id,
            )
        )
        return result.rowcount > 0

    def disassociate_all(self, restaurant_id: int) -> int:
        """Remove every link of a restaurant. Returns how many were removed."""
        result = self._db.execute(
            delete(restaurant_category).where(restaurant_category.c.restaurant_id == restaurant_id)
        )
        return result.rowcount

    # -------------------------------------------------------------------------
    # Reference counts
    # -------------------------------------------------------------------------

    def count_restaurants(self, category_id: int) -> int:
        query = (
            select(func.count())
            .select_from(restaurant_category)
            .where(restaurant_category.c.category_id == category_id)
        )
        return self._db.scalar(query) or 0

    def has_products(self, category_id: int) -> bool:
        query = select(Product.id).where(Product.category_id == category_id).limit(1)
        return self._db.scalar(query) is not None

    def is_orphan(self, category_id: int) -> bool:
        """No restaurant offers the category and no product is filed under it."""
        return self.count_restaurants(category_id) == 0 and not self.has_products(category_id)

    def delete_by_id(self, category_id: int) -> bool:
        category = self._db.get(Category, category_id)
        if category is None:
            return False
        self.delete(category)
        return True


def get_category_repository(db: Session) -> CategoryRepository:
    """Factory function for dependency injection."""
    return CategoryRepository(db)
