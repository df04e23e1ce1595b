"""
Pagination query parameters for list endpoints.

Usage:
    from rest_api.routers._common.pagination import Pagination, get_pagination

    @router.get("/orders/owner/{owner_id}/paged")
    def page_orders(
        owner_id: int,
        pagination: Pagination = Depends(get_pagination),
        ...
    ):
        return service.page_for_owner(owner_id, principal, pagination).to_dict()
"""

from fastapi import Query

from shared.config.constants import Limits
from shared.utils.pagination import Page, Pagination


def get_pagination(
    limit: int = Query(
        default=Limits.DEFAULT_PAGE_SIZE,
        ge=1,
        le=Limits.MAX_PAGE_SIZE,
        description="Maximum number of items to return",
    ),
    offset: int = Query(
        default=0,
        ge=0,
        description="Number of items to skip",
    ),
) -> Pagination:
    """FastAPI dependency for limit/offset pagination."""
    return Pagination(limit=limit, offset=offset)


__all__ = ["Page", "Pagination", "get_pagination"]
