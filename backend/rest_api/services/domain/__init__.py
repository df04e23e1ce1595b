"""
Domain Services - application layer.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import RestaurantService

    # In router
    service = RestaurantService(db)
    restaurants = service.list_all()
"""

from .user_service import UserService
from .auth_service import AuthService
from .cuisine_service import CuisineService
from .category_service import CategoryDeletionResult, CategoryService
from .restaurant_service import RestaurantService
from .product_service import ProductService
from .order_service import OrderService
from .review_service import ReviewService

__all__ = [
    "UserService",
    "AuthService",
    "CuisineService",
    "CategoryService",
    "CategoryDeletionResult",
    "RestaurantService",
    "ProductService",
    "OrderService",
    "ReviewService",
]
