"""
Common utilities shared across routers.
"""

from .base import current_principal, require_role
from .pagination import Pagination, Page, get_pagination

__all__ = [
    # Principal dependencies
    "current_principal",
    "require_role",
    # Pagination
    "Pagination",
    "Page",
    "get_pagination",
]
