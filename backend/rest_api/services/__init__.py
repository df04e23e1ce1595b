"""
Services module for business logic.

- domain/: application services (business logic), one per aggregate
- permissions/: Principal and the ownership / role checks

Usage:
    from rest_api.services.domain import OrderService
    service = OrderService(db)
    order = service.create(data, principal)
"""

from .base_service import BaseService
from .permissions import Principal, ensure_owner, ensure_role, ensure_self

__all__ = [
    "BaseService",
    "Principal",
    "ensure_owner",
    "ensure_role",
    "ensure_self",
]
