"""
Offset pagination shared by repositories, services and routers.

Usage:
    pagination = Pagination(limit=20, offset=40)
    items = repo.find_page(..., limit=pagination.limit, offset=pagination.offset)
    return {"items": items, "pagination": pagination.to_dict(total=count)}
"""

from dataclasses import dataclass
from typing import Any

from shared.config.constants import Limits


@dataclass
class Pagination:
    """
    Pagination parameters, clamped on construction.

    Attributes:
        limit: Items per page (1 to max_limit)
        offset: Items to skip
        max_limit: Upper bound for limit
    """

    limit: int = Limits.DEFAULT_PAGE_SIZE
    offset: int = 0
    max_limit: int = Limits.MAX_PAGE_SIZE

    def __post_init__(self):
        self.limit = min(max(1, self.limit), self.max_limit)
        self.offset = max(0, self.offset)

    @property
    def page(self) -> int:
        """Current page number (1-indexed)."""
        return (self.offset // self.limit) + 1

    def to_dict(self, total: int) -> dict[str, Any]:
        return {
            "limit": self.limit,
            "offset": self.offset,
            "page": self.page,
            "total": total,
            "pages": (total + self.limit - 1) // self.limit,
            "has_next": self.offset + self.limit < total,
            "has_prev": self.offset > 0,
        }


@dataclass
class Page:
    """A slice of results plus the total count of the unpaginated query."""

    items: list[Any]
    pagination: Pagination
    total: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": self.items,
            "pagination": self.pagination.to_dict(self.total),
        }

    @property
    def has_more(self) -> bool:
        return self.pagination.offset + len(self.items) < self.total
