"""
Centralized HTTP exceptions for consistent error handling.

Every error is an HTTPException subclass, so FastAPI renders it as
``{"detail": ...}`` with the right status code without extra handlers.
Each instance logs itself with the keyword context it was raised with.

Usage:
    from shared.utils.exceptions import RestaurantNotFoundError, UnauthorizedAccessError

    raise RestaurantNotFoundError(restaurant_id)
    raise UnauthorizedAccessError("update this restaurant", restaurant_id=restaurant_id)
    raise InvalidOrderError("Order total does not match the sum of line subtotals")
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions inherit from this class so responses and logs
    stay consistent.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 401 Unauthorized Errors
# =============================================================================


class AuthenticationError(AppException):
    """Missing, malformed, expired or otherwise invalid credentials (401)."""

    def __init__(self, detail: str = "Not authenticated", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="warning",
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Product", 123)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with ID {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


class UserNotFoundError(NotFoundError):
    """User not found (by id or email)."""

    def __init__(self, user_id: int | str | None = None, **log_context: Any):
        super().__init__("User", user_id, **log_context)


class RestaurantNotFoundError(NotFoundError):
    def __init__(self, restaurant_id: int | None = None, **log_context: Any):
        super().__init__("Restaurant", restaurant_id, **log_context)


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: int | None = None, **log_context: Any):
        super().__init__("Category", category_id, **log_context)


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: int | None = None, **log_context: Any):
        super().__init__("Product", product_id, **log_context)


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: int | None = None, **log_context: Any):
        super().__init__("Order", order_id, **log_context)


class ReviewNotFoundError(NotFoundError):
    def __init__(self, review_id: int | None = None, **log_context: Any):
        super().__init__("Review", review_id, **log_context)


class CuisineNotFoundError(NotFoundError):
    def __init__(self, cuisine_id: int | None = None, **log_context: Any):
        super().__init__("Cuisine", cuisine_id, **log_context)


# =============================================================================
# 403 Forbidden Errors
# =============================================================================


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError("delete products")
    """

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Not authorized to {action}"
        else:
            detail = "Access denied"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            log_level="warning",
            action=action,
            **log_context,
        )


class UnauthorizedAccessError(ForbiddenError):
    """The principal does not own the resource it is acting on."""


class InsufficientRoleError(ForbiddenError):
    """User doesn't have the required role."""

    def __init__(self, required_role: str, **log_context: Any):
        super().__init__(
            f"perform this action (requires role: {required_role})",
            required_role=required_role,
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Price must be positive", field="price")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class InvalidOrderError(ValidationError):
    """Order request rejected (empty lines, bad quantities, total mismatch)."""


class InvalidRoleError(ValidationError):
    def __init__(self, role: str, **log_context: Any):
        super().__init__(f"Invalid role '{role}'", field="role", role=role, **log_context)


class InvalidCuisineError(ValidationError):
    """Restaurant references a cuisine that does not exist."""

    def __init__(self, cuisine_id: int, **log_context: Any):
        super().__init__(
            f"Invalid cuisine type: {cuisine_id}",
            field="cuisine_id",
            cuisine_id=cuisine_id,
            **log_context,
        )


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).

    Usage:
        raise ConflictError("Restaurant has orders and cannot be deleted")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class DuplicateEntityError(ConflictError):
    """Entity already exists."""

    def __init__(self, entity: str, identifier: str | None = None, **log_context: Any):
        if identifier:
            detail = f"{entity} with identifier '{identifier}' already exists"
        else:
            detail = f"{entity} already exists"

        super().__init__(detail, entity=entity, identifier=identifier, **log_context)


class OrderStateError(ConflictError):
    """Order status does not allow the requested change."""

    def __init__(self, order_id: int, current_status: str, requested_status: str, **log_context: Any):
        detail = (
            f"Order {order_id} cannot move from '{current_status}' to '{requested_status}'"
        )
        super().__init__(
            detail,
            order_id=order_id,
            current_status=current_status,
            requested_status=requested_status,
            **log_context,
        )
