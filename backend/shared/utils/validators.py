"""
Explicit validation functions called by the domain services.

Schemas only shape request bodies; business validation lives here so the
same rules apply whether a service is called from a router, the CLI or a
test. Every validator raises a 400-family exception from
shared.utils.exceptions and returns the normalized value.
"""

import re
from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional, Protocol
from urllib.parse import urlparse

from shared.config.constants import Limits, Roles
from shared.utils.exceptions import InvalidOrderError, InvalidRoleError, ValidationError

# Internal hosts never accepted in image URLs (SSRF prevention)
BLOCKED_HOSTS = (
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "10.",
    "192.168.",
    "169.254.",
    "[::1]",
    "metadata.google",
)

ALLOWED_URL_SCHEMES = {"http", "https"}
MAX_URL_LENGTH = 2048

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")


class OrderLine(Protocol):
    product_id: int
    quantity: int
    subtotal: Decimal


def validate_positive_id(value: Optional[int], field: str) -> int:
    if value is None or value <= 0:
        raise ValidationError(f"{field} must be a positive integer", field=field, value=value)
    return value


def validate_role(role: Optional[str]) -> str:
    """
    Normalize a registration role. Empty means the default (CLIENT);
    anything other than CLIENT or RESTAURANT is rejected.
    """
    if role is None or not role.strip():
        return Roles.DEFAULT

    normalized = role.strip().upper()
    if normalized not in Roles.ALL:
        raise InvalidRoleError(role)
    return normalized


def validate_password(password: str) -> str:
    if len(password) < Limits.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {Limits.MIN_PASSWORD_LENGTH} characters",
            field="password",
        )
    if len(password.encode("utf-8")) > Limits.MAX_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at most {Limits.MAX_PASSWORD_LENGTH} bytes",
            field="password",
        )
    return password


def validate_score(score: int) -> int:
    if not Limits.MIN_REVIEW_SCORE <= score <= Limits.MAX_REVIEW_SCORE:
        raise ValidationError(
            f"Score must be between {Limits.MIN_REVIEW_SCORE} and {Limits.MAX_REVIEW_SCORE}",
            field="score",
            value=score,
        )
    return score


def validate_price(price: Decimal, field: str = "price") -> Decimal:
    try:
        amount = Decimal(price)
        if not amount.is_finite() or amount < 0:
            raise ValidationError(f"{field} must be zero or positive", field=field, value=str(price))
        if amount >= Limits.MAX_AMOUNT:
            raise ValidationError(
                f"{field} must be less than {Limits.MAX_AMOUNT:f}", field=field, value=str(price)
            )
        quantized = amount.quantize(Limits.MONEY_QUANTUM)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field} is not a valid amount", field=field) from None
    if amount != quantized:
        raise ValidationError(f"{field} allows at most two decimals", field=field, value=str(price))
    return amount


def validate_order_lines(lines: Iterable[OrderLine], total: Decimal) -> Decimal:
    """
    Validate the line items of a new order against its declared total.

    Rules:
    - at least one line, at most Limits.MAX_ORDER_LINES
    - every product id positive, every quantity >= 1
    - every subtotal a non-negative amount with two decimals
    - ``total`` equals the exact decimal sum of the subtotals

    Returns the computed total.
    """
    lines = list(lines)
    if not lines:
        raise InvalidOrderError("Order must contain at least one line item", field="details")
    if len(lines) > Limits.MAX_ORDER_LINES:
        raise InvalidOrderError(
            f"Order cannot contain more than {Limits.MAX_ORDER_LINES} line items",
            field="details",
        )

    computed = Decimal("0")
    for position, line in enumerate(lines):
        if line.product_id is None or line.product_id <= 0:
            raise InvalidOrderError(
                f"Line {position + 1}: product id must be positive", field="details"
            )
        if line.quantity is None or line.quantity < 1:
            raise InvalidOrderError(
                f"Line {position + 1}: quantity must be at least 1", field="details"
            )
        if line.quantity > Limits.MAX_LINE_QUANTITY:
            raise InvalidOrderError(
                f"Line {position + 1}: quantity cannot exceed {Limits.MAX_LINE_QUANTITY}",
                field="details",
            )
        subtotal = validate_price(line.subtotal, field="subtotal")
        computed += subtotal

    declared = validate_price(total, field="total")
    if declared != computed:
        raise InvalidOrderError(
            f"Order total {declared} does not match the sum of line subtotals {computed}",
            field="total",
            declared=str(declared),
            computed=str(computed),
        )
    return computed


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken as UTC; aware ones are converted to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def validate_date_range(
    start: Optional[datetime], end: Optional[datetime]
) -> tuple[Optional[datetime], Optional[datetime]]:
    start, end = _as_utc(start), _as_utc(end)
    if start is not None and end is not None and start > end:
        raise ValidationError("start must not be after end", field="start")
    return start, end


def validate_image_url(url: Optional[str], field: str = "image") -> Optional[str]:
    """
    Validate an image/logo URL. Empty values become None.

    Only http(s) URLs pointing at public hosts are accepted.
    """
    if url is None:
        return None
    url = url.strip()
    if not url:
        return None

    if len(url) > MAX_URL_LENGTH:
        raise ValidationError(f"{field} URL is too long", field=field)

    parsed = urlparse(url)
    if parsed.scheme.lower() not in ALLOWED_URL_SCHEMES:
        raise ValidationError(f"{field} must be an http(s) URL", field=field)

    host = parsed.netloc.lower()
    if not host:
        raise ValidationError(f"{field} URL has no host", field=field)
    if any(blocked in host for blocked in BLOCKED_HOSTS):
        raise ValidationError(f"{field} URL points to an internal host", field=field)

    return url


def require_text(value: Optional[str], field: str, max_length: int = Limits.MAX_NAME_LENGTH) -> str:
    """Trimmed, non-empty, bounded text."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field} is required", field=field)
    if len(text) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters", field=field)
    return text


def escape_like_pattern(value: str) -> str:
    """
    Escape % and _ so user input is matched literally in LIKE patterns.
    Use together with ``escape="\\\\"`` on the SQLAlchemy operator.
    """
    if not value:
        return value

    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


def sanitize_search_term(term: Optional[str], max_length: int = Limits.MAX_SEARCH_TERM_LENGTH) -> str:
    """Trim, cap and strip control characters from a search term."""
    if not term:
        return ""

    term = term.strip()[:max_length]
    return _CONTROL_CHARS.sub("", term)
