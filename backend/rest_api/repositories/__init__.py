"""
Repository Pattern implementation.
Centralizes data access with guaranteed eager loading.

Usage:
    from rest_api.repositories import get_order_repository, OrderFilters

    repo = get_order_repository(db)
    orders = repo.find_all(OrderFilters(restaurant_id=3, status="PENDING"))
    order = repo.find_by_id(123)
"""

from .base import BaseRepository, RepositoryFilters
from .user import UserRepository, get_user_repository
from .restaurant import (
    CuisineRepository,
    RestaurantRepository,
    get_cuisine_repository,
    get_restaurant_repository,
)
from .category import CategoryRepository, get_category_repository
from .product import ProductRepository, ProductFilters, get_product_repository
from .order import OrderRepository, OrderFilters, get_order_repository
from .review import ReviewRepository, get_review_repository

__all__ = [
    # Base
    "BaseRepository",
    "RepositoryFilters",
    # User
    "UserRepository",
    "get_user_repository",
    # Restaurant
    "RestaurantRepository",
    "CuisineRepository",
    "get_restaurant_repository",
    "get_cuisine_repository",
    # Category
    "CategoryRepository",
    "get_category_repository",
    # Product
    "ProductRepository",
    "ProductFilters",
    "get_product_repository",
    # Order
    "OrderRepository",
    "OrderFilters",
    "get_order_repository",
    # Review
    "ReviewRepository",
    "get_review_repository",
]
