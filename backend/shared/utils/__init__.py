"""
Utilities module: Exceptions, validators, schemas, pagination.
"""

from shared.utils.exceptions import (
    AppException,
    NotFoundError,
    ForbiddenError,
    ValidationError,
    ConflictError,
)
from shared.utils.validators import (
    validate_order_lines,
    validate_image_url,
    escape_like_pattern,
    sanitize_search_term,
)
from shared.utils.schemas import ErrorResponse
from shared.utils.pagination import Page, Pagination

__all__ = [
    # exceptions
    "AppException",
    "NotFoundError",
    "ForbiddenError",
    "ValidationError",
    "ConflictError",
    # validators
    "validate_order_lines",
    "validate_image_url",
    "escape_like_pattern",
    "sanitize_search_term",
    # schemas
    "ErrorResponse",
    # pagination
    "Page",
    "Pagination",
]
