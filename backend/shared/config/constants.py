"""
Centralized constants for the marketplace backend.

Usage:
    from shared.config.constants import Roles, OrderStatus, Limits

    if principal.role == Roles.OWNER:
        ...

    if order.status == OrderStatus.PENDING:
        ...
"""

from decimal import Decimal
from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """User role constants."""

    CLIENT: Final[str] = "CLIENT"
    # Restaurant owner account
    OWNER: Final[str] = "RESTAURANT"

    ALL: Final[list[str]] = [CLIENT, OWNER]
    DEFAULT: Final[str] = CLIENT


# =============================================================================
# Entity Status Constants
# =============================================================================


class OrderStatus:
    """Order status constants."""

    PENDING: Final[str] = "PENDING"
    PAID: Final[str] = "PAID"
    DELIVERED: Final[str] = "DELIVERED"
    CANCELLED: Final[str] = "CANCELLED"

    ALL: Final[list[str]] = [PENDING, PAID, DELIVERED, CANCELLED]
    TERMINAL: Final[list[str]] = [DELIVERED, CANCELLED]


# Allowed order status transitions (current -> allowed next states)
ORDER_TRANSITIONS: Final[dict[str, frozenset[str]]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.PAID, OrderStatus.DELIVERED, OrderStatus.CANCELLED}
    ),
    OrderStatus.PAID: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

# Only pending orders may be cancelled
CANCELLABLE_STATUSES: Final[frozenset[str]] = frozenset({OrderStatus.PENDING})


# =============================================================================
# Limits
# =============================================================================


class Limits:
    """Validation and pagination limits."""

    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 200

    MIN_REVIEW_SCORE: Final[int] = 0
    MAX_REVIEW_SCORE: Final[int] = 10

    MIN_PASSWORD_LENGTH: Final[int] = 8
    # bcrypt only hashes the first 72 bytes
    MAX_PASSWORD_LENGTH: Final[int] = 72

    MAX_SEARCH_TERM_LENGTH: Final[int] = 100
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_COMMENTS_LENGTH: Final[int] = 1000

    MAX_ORDER_LINES: Final[int] = 100
    MAX_LINE_QUANTITY: Final[int] = 999

    # Price/money columns are Numeric(10, 2)
    MONEY_QUANTUM: Final[Decimal] = Decimal("0.01")
    MAX_AMOUNT: Final[Decimal] = Decimal("100000000")


# Cuisines seeded on startup (idempotent)
DEFAULT_CUISINES: Final[tuple[str, ...]] = (
    "Argentinian",
    "Chinese",
    "Fast Food",
    "Italian",
    "Japanese",
    "Mexican",
    "Vegetarian",
    "Other",
)
