"""
Restaurant Repository - Data access for restaurants and cuisines.
"""

from sqlalchemy import Select, select
from sqlalchemy.orm import Session, selectinload

from rest_api.models import Restaurant, RestaurantCuisine
from .base import BaseRepository


class RestaurantRepository(BaseRepository[Restaurant]):
    """
    Repository for Restaurant entities.

    Guarantees eager loading of:
    - owner (ownership checks compare its email)
    - cuisine
    """

    @property
    def model(self) -> type[Restaurant]:
        return Restaurant

    def _base_query(self) -> Select:
        return (
            select(Restaurant)
            .options(
                selectinload(Restaurant.owner),
                selectinload(Restaurant.cuisine),
            )
            .order_by(Restaurant.name, Restaurant.id)
        )

    def find_by_owner(self, owner_id: int) -> list[Restaurant]:
        return self._fetch(self._base_query().where(Restaurant.owner_id == owner_id))

    def find_by_email(self, email: str) -> Restaurant | None:
        return self._db.scalar(select(Restaurant).where(Restaurant.email == email.lower()))


class CuisineRepository(BaseRepository[RestaurantCuisine]):
    """Repository for the cuisine catalog."""

    @property
    def model(self) -> type[RestaurantCuisine]:
        return RestaurantCuisine

    def _base_query(self) -> Select:
        return select(RestaurantCuisine).order_by(RestaurantCuisine.name)

    def find_by_name(self, name: str) -> RestaurantCuisine | None:
        return self._db.scalar(select(RestaurantCuisine).where(RestaurantCuisine.name == name))


def get_restaurant_repository(db: Session) -> RestaurantRepository:
    """Factory function for dependency injection."""
    return RestaurantRepository(db)


def get_cuisine_repository(db: Session) -> CuisineRepository:
    return CuisineRepository(db)
