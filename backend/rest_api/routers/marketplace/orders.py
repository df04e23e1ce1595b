"""
Order endpoints.

Placement by any authenticated user; management by the restaurant owner;
cancellation by the owner or the ordering client while PENDING.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.routers._common import Pagination, current_principal, get_pagination
from rest_api.services.domain import OrderService
from rest_api.services.permissions import Principal
from shared.infrastructure.db import get_db
from shared.utils.schemas import OrderCreate, OrderOutput, OrderPage, OrderStatusName, OrderUpdate


router = APIRouter(prefix="/orders", tags=["orders"])


def _get_service(db: Session) -> OrderService:
    return OrderService(db)


@router.post("", response_model=OrderOutput, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> OrderOutput:
    """
    Place an order for the caller.

    The total must equal the exact sum of the line subtotals.
    """
    return _get_service(db).create(body, principal)


@router.get("/restaurant/{restaurant_id}", response_model=list[OrderOutput])
def list_restaurant_orders(
    restaurant_id: int,
    order_status: Optional[OrderStatusName] = Query(default=None, alias="status"),
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> list[OrderOutput]:
    """Orders of a restaurant, newest first. Owner only."""
    return _get_service(db).list_for_restaurant(
        restaurant_id, principal, status=order_status, start=start, end=end
    )


@router.get("/client/{client_id}", response_model=list[OrderOutput])
def list_client_orders(
    client_id: int,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> list[OrderOutput]:
    return _get_service(db).list_for_client(client_id, principal, start=start, end=end)


@router.get("/owner/{owner_id}", response_model=list[OrderOutput])
def list_owner_orders(
    owner_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> list[OrderOutput]:
    """Orders across all restaurants of the owner."""
    return _get_service(db).list_for_owner(owner_id, principal)


@router.get("/owner/{owner_id}/paged", response_model=OrderPage)
def page_owner_orders(
    owner_id: int,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> dict:
    return _get_service(db).page_for_owner(owner_id, principal, pagination).to_dict()


@router.get("/{order_id}", response_model=OrderOutput)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> OrderOutput:
    return _get_service(db).get_by_id(order_id, principal)


@router.patch("/{order_id}", response_model=OrderOutput)
def update_order(
    order_id: int,
    body: OrderUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> OrderOutput:
    """Change status or comments. Owner only; status follows the allowed transitions."""
    return _get_service(db).update(order_id, body, principal)


@router.post("/{order_id}/cancel", response_model=OrderOutput)
def cancel_order(
    order_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(current_principal),
) -> OrderOutput:
    return _get_service(db).cancel(order_id, principal)
