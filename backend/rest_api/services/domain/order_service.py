"""
Order Service - order placement, status flow and ownership-scoped queries.

Usage:
    from rest_api.services.domain import OrderService

    service = OrderService(db)
    order = service.create(OrderCreate(...), principal)
    service.update(order.id, OrderUpdate(status="PAID"), owner_principal)
    page = service.page_for_owner(owner_id, principal, Pagination(limit=20))
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from rest_api.models import Order, OrderDetail
from rest_api.repositories import (
    OrderFilters,
    get_order_repository,
    get_product_repository,
    get_restaurant_repository,
)
from rest_api.services.base_service import BaseService
from rest_api.services.permissions import Principal, ensure_owner, ensure_self
from shared.config.constants import CANCELLABLE_STATUSES, ORDER_TRANSITIONS, OrderStatus
from shared.config.logging import get_logger
from shared.utils.exceptions import (
    InvalidOrderError,
    OrderNotFoundError,
    OrderStateError,
    ProductNotFoundError,
    RestaurantNotFoundError,
    UnauthorizedAccessError,
)
from shared.utils.pagination import Page, Pagination
from shared.utils.schemas import OrderCreate, OrderDetailOutput, OrderOutput, OrderUpdate
from shared.utils.validators import validate_date_range, validate_order_lines, validate_positive_id

logger = get_logger(__name__)


def to_output(order: Order) -> OrderOutput:
    return OrderOutput(
        id=order.id,
        client_id=order.client_id,
        restaurant_id=order.restaurant_id,
        restaurant_name=order.restaurant.name,
        status=order.status,
        total=order.total,
        comments=order.comments,
        details=[
            OrderDetailOutput(
                id=detail.id,
                product_id=detail.product_id,
                product_name=detail.product.name,
                quantity=detail.quantity,
                product_price=detail.product.price,
                subtotal=detail.subtotal,
            )
            for detail in order.details
        ],
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


class OrderService(BaseService):
    """
    Service for orders.

    Business rules:
    - The order total must equal the exact sum of its line subtotals
    - Every product must belong to the ordered restaurant and be active
    - Orders start PENDING; status changes follow ORDER_TRANSITIONS
    - The restaurant owner manages the order; the ordering client can
      read it and cancel it while it is PENDING
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self._orders = get_order_repository(db)
        self._restaurants = get_restaurant_repository(db)
        self._products = get_product_repository(db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_entity(self, order_id: int) -> Order:
        order = self._orders.find_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def get_by_id(self, order_id: int, principal: Principal) -> OrderOutput:
        order = self.get_entity(order_id)
        self._ensure_participant(order, principal, "view this order")
        return to_output(order)

    def list_for_restaurant(
        self,
        restaurant_id: int,
        principal: Principal,
        status: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[OrderOutput]:
        restaurant = self._restaurants.find_by_id(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)
        ensure_owner(
            principal,
            restaurant.owner.email,
            "list orders of this restaurant",
            restaurant_id=restaurant_id,
        )
        start, end = validate_date_range(start, end)

        filters = OrderFilters(restaurant_id=restaurant_id, status=status, start=start, end=end)
        return [to_output(o) for o in self._orders.find_all(filters)]

    def list_for_client(
        self,
        client_id: int,
        principal: Principal,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[OrderOutput]:
        ensure_self(principal, client_id, "list orders of another client")
        start, end = validate_date_range(start, end)

        filters = OrderFilters(client_id=client_id, start=start, end=end)
        return [to_output(o) for o in self._orders.find_all(filters)]

    def list_for_owner(self, owner_id: int, principal: Principal) -> list[OrderOutput]:
        """Orders across every restaurant of the owner, newest first."""
        ensure_self(principal, owner_id, "list orders of another owner")
        return [to_output(o) for o in self._orders.find_all(OrderFilters(owner_id=owner_id))]

    def page_for_owner(self, owner_id: int, principal: Principal, pagination: Pagination) -> Page:
        ensure_self(principal, owner_id, "list orders of another owner")

        filters = OrderFilters(owner_id=owner_id)
        total = self._orders.count(filters)
        filters.paginate(pagination)
        items = [to_output(o) for o in self._orders.find_all(filters)]
        return Page(items=items, pagination=pagination, total=total)

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create(self, data: OrderCreate, principal: Principal) -> OrderOutput:
        """
        Place an order for the caller.

        Line items are validated before anything is loaded, so a request
        whose total does not match its subtotals never touches products.
        """
        restaurant_id = validate_positive_id(data.restaurant_id, "restaurant_id")
        total = validate_order_lines(data.details, data.total)

        if data.client_id is not None and data.client_id != principal.user_id:
            raise UnauthorizedAccessError(
                "place orders for another client",
                client_id=data.client_id,
                **principal.to_log_context(),
            )

        restaurant = self._restaurants.find_by_id(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)

        products = self._products.find_for_order([line.product_id for line in data.details])
        for line in data.details:
            product = products.get(line.product_id)
            if product is None:
                raise ProductNotFoundError(line.product_id)
            if product.restaurant_id != restaurant_id:
                raise InvalidOrderError(
                    f"Product {product.id} does not belong to restaurant {restaurant_id}",
                    field="details",
                )
            if not product.is_active:
                raise InvalidOrderError(f"Product {product.id} is not available", field="details")

        order = Order(
            client_id=principal.user_id,
            restaurant_id=restaurant_id,
            status=OrderStatus.PENDING,
            total=total,
            comments=data.comments,
            details=[
                OrderDetail(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    subtotal=line.subtotal,
                )
                for line in data.details
            ],
        )
        self._orders.save(order)
        self._commit()

        logger.info(
            "Order created",
            order_id=order.id,
            restaurant_id=restaurant_id,
            client_id=principal.user_id,
            line_count=len(data.details),
            total=str(total),
        )
        return to_output(order)

    def update(self, order_id: int, data: OrderUpdate, principal: Principal) -> OrderOutput:
        order = self.get_entity(order_id)
        ensure_owner(principal, order.restaurant.owner.email, "update this order", order_id=order_id)

        previous = order.status
        if data.status is not None and data.status != order.status:
            if data.status not in ORDER_TRANSITIONS.get(order.status, frozenset()):
                raise OrderStateError(order_id, order.status, data.status)
            order.status = data.status
        if data.comments is not None:
            order.comments = data.comments

        order.touch()
        self._orders.save(order)
        self._commit()

        if order.status != previous:
            logger.info("Order status changed", order_id=order_id, from_status=previous, to_status=order.status)
        return to_output(order)

    def cancel(self, order_id: int, principal: Principal) -> OrderOutput:
        order = self.get_entity(order_id)
        self._ensure_participant(order, principal, "cancel this order")

        if order.status not in CANCELLABLE_STATUSES:
            raise OrderStateError(order_id, order.status, OrderStatus.CANCELLED)

        order.status = OrderStatus.CANCELLED
        order.touch()
        self._orders.save(order)
        self._commit()

        logger.info("Order cancelled", order_id=order_id, cancelled_by=principal.user_id)
        return to_output(order)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _ensure_participant(self, order: Order, principal: Principal, action: str) -> None:
        """Restaurant owner or ordering client."""
        if order.client_id == principal.user_id:
            return
        ensure_owner(principal, order.restaurant.owner.email, action, order_id=order.id)
