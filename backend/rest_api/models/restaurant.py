"""
Restaurant Models: RestaurantCuisine, Restaurant and the restaurant/category link table.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, Column, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, BigIntPK, TimestampMixin

if TYPE_CHECKING:
    from .catalog import Category, Product
    from .order import Order
    from .review import Review
    from .user import User


# Categories a restaurant offers (many-to-many)
restaurant_category = Table(
    "restaurant_category",
    Base.metadata,
    Column(
        "restaurant_id",
        BigInteger,
        ForeignKey("restaurant.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "category_id",
        BigInteger,
        ForeignKey("category.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class RestaurantCuisine(Base):
    """Cuisine type catalog (Italian, Mexican, ...)."""

    __tablename__ = "restaurant_cuisine"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    restaurants: Mapped[list["Restaurant"]] = relationship(back_populates="cuisine")

    def __repr__(self) -> str:
        return f"<RestaurantCuisine(id={self.id}, name='{self.name}')>"


class Restaurant(TimestampMixin, Base):
    """
    A restaurant listed on the marketplace.
    Owned by a User with role RESTAURANT; the owner's email authorizes every
    mutation on the restaurant, its menu and its orders.
    """

    __tablename__ = "restaurant"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    owner_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("app_user.id"), nullable=False, index=True
    )
    cuisine_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurant_cuisine.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    opening_hours: Mapped[Optional[str]] = mapped_column(Text)
    logo: Mapped[Optional[str]] = mapped_column(Text)
    cover_image: Mapped[Optional[str]] = mapped_column(Text)

    # Relationships
    owner: Mapped["User"] = relationship(back_populates="restaurants")
    cuisine: Mapped["RestaurantCuisine"] = relationship(back_populates="restaurants")
    # Read-only: the link table is written by CategoryRepository
    categories: Mapped[list["Category"]] = relationship(
        secondary=restaurant_category,
        order_by="Category.name",
        viewonly=True,
    )
    products: Mapped[list["Product"]] = relationship(
        back_populates="restaurant", cascade="all, delete-orphan"
    )
    reviews: Mapped[list["Review"]] = relationship(
        back_populates="restaurant", cascade="all, delete-orphan"
    )
    orders: Mapped[list["Order"]] = relationship(back_populates="restaurant")

    def __repr__(self) -> str:
        return f"<Restaurant(id={self.id}, name='{self.name}', owner_id={self.owner_id})>"
