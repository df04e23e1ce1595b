"""
Order Models: Order, OrderDetail.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, BigIntPK, TimestampMixin

if TYPE_CHECKING:
    from .catalog import Product
    from .restaurant import Restaurant
    from .user import User


class Order(TimestampMixin, Base):
    """
    An order placed by a client at one restaurant.

    total equals the sum of the detail subtotals when the order is created.
    Status flow: PENDING -> PAID -> DELIVERED, PENDING -> DELIVERED and
    PENDING -> CANCELLED.
    """

    __tablename__ = "customer_order"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    client_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("app_user.id"), nullable=False, index=True
    )
    restaurant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurant.id"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="PENDING", index=True)
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    comments: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING', 'PAID', 'DELIVERED', 'CANCELLED')",
            name="ck_customer_order_status",
        ),
        CheckConstraint("total >= 0", name="ck_customer_order_total_non_negative"),
        Index("ix_customer_order_restaurant_created", "restaurant_id", "created_at"),
        Index("ix_customer_order_restaurant_status", "restaurant_id", "status"),
        Index("ix_customer_order_client_created", "client_id", "created_at"),
    )

    # Relationships
    client: Mapped["User"] = relationship(back_populates="orders")
    restaurant: Mapped["Restaurant"] = relationship(back_populates="orders")
    details: Mapped[list["OrderDetail"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderDetail.id",
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status='{self.status}', total={self.total}, restaurant_id={self.restaurant_id})>"


class OrderDetail(Base):
    """One line item: a product, how many, and the line subtotal."""

    __tablename__ = "order_detail"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("customer_order.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("product.id"), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_detail_quantity_positive"),
        CheckConstraint("subtotal >= 0", name="ck_order_detail_subtotal_non_negative"),
    )

    order: Mapped["Order"] = relationship(back_populates="details")
    product: Mapped["Product"] = relationship()

    def __repr__(self) -> str:
        return f"<OrderDetail(id={self.id}, product_id={self.product_id}, qty={self.quantity})>"
