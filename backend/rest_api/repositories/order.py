"""
Order Repository - Data access for orders and their line items.
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Select, select
from sqlalchemy.orm import Session, selectinload

from rest_api.models import Order, OrderDetail, Restaurant
from .base import BaseRepository, RepositoryFilters


@dataclass
class OrderFilters(RepositoryFilters):
    """
    Filters specific to orders.

    owner_id restricts to orders of restaurants owned by that user.
    start/end bound created_at (both inclusive).
    """

    restaurant_id: int | None = None
    client_id: int | None = None
    owner_id: int | None = None
    status: str | None = None
    start: datetime | None = None
    end: datetime | None = None


class OrderRepository(BaseRepository[Order]):
    """
    Repository for Order entities.

    Guarantees eager loading of:
    - details -> product
    - restaurant -> owner (ownership checks)
    - client

    Default ordering is newest first.
    """

    @property
    def model(self) -> type[Order]:
        return Order

    def _base_query(self) -> Select:
        return (
            select(Order)
            .options(
                selectinload(Order.details).selectinload(OrderDetail.product),
                selectinload(Order.restaurant).selectinload(Restaurant.owner),
                selectinload(Order.client),
            )
            .order_by(Order.created_at.desc(), Order.id.desc())
        )

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if not isinstance(filters, OrderFilters):
            return query

        if filters.restaurant_id is not None:
            query = query.where(Order.restaurant_id == filters.restaurant_id)
        if filters.client_id is not None:
            query = query.where(Order.client_id == filters.client_id)
        if filters.owner_id is not None:
            owned = select(Restaurant.id).where(Restaurant.owner_id == filters.owner_id)
            query = query.where(Order.restaurant_id.in_(owned))
        if filters.status is not None:
            query = query.where(Order.status == filters.status)
        if filters.start is not None:
            query = query.where(Order.created_at >= filters.start)
        if filters.end is not None:
            query = query.where(Order.created_at <= filters.end)

        return query

    def exists_for_restaurant(self, restaurant_id: int) -> bool:
        query = select(Order.id).where(Order.restaurant_id == restaurant_id).limit(1)
        return self._db.scalar(query) is not None

    def exists_for_product(self, product_id: int) -> bool:
        query = select(OrderDetail.id).where(OrderDetail.product_id == product_id).limit(1)
        return self._db.scalar(query) is not None


def get_order_repository(db: Session) -> OrderRepository:
    """Factory function for dependency injection."""
    return OrderRepository(db)
