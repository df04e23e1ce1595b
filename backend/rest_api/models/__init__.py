"""
SQLAlchemy ORM Models Package.

Models are organized into domain-specific modules:
- base: Base class, TimestampMixin, SoftDeleteMixin
- user: User
- restaurant: RestaurantCuisine, Restaurant, restaurant_category
- catalog: Category, Product
- order: Order, OrderDetail
- review: Review
"""

from .base import Base, TimestampMixin, SoftDeleteMixin

from .user import User

from .restaurant import Restaurant, RestaurantCuisine, restaurant_category

from .catalog import Category, Product

from .order import Order, OrderDetail

from .review import Review

__all__ = [
    "Base",
    "TimestampMixin",
    "SoftDeleteMixin",
    "User",
    "Restaurant",
    "RestaurantCuisine",
    "restaurant_category",
    "Category",
    "Product",
    "Order",
    "OrderDetail",
    "Review",
]
