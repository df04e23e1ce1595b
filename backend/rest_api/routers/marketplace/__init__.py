"""
Marketplace API router - combines the resource sub-routers.

- users: profile, update, deletion
- cuisines: cuisine catalog
- restaurants: restaurants plus their categories, menu, reviews and rating
- categories: category catalog
- products: menu items and search
- orders: placement, status flow, owner/client queries
- reviews: client reviews

All routes are prefixed with /api
"""

from fastapi import APIRouter

from shared.utils.schemas import ErrorResponse

from .users import router as users_router
from .cuisines import router as cuisines_router
from .restaurants import router as restaurants_router
from .categories import router as categories_router
from .products import router as products_router
from .orders import router as orders_router
from .reviews import router as reviews_router


# Error bodies are {"detail": "..."} for every AppException
router = APIRouter(
    prefix="/api",
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)

router.include_router(users_router)
router.include_router(cuisines_router)
router.include_router(restaurants_router)
router.include_router(categories_router)
router.include_router(products_router)
router.include_router(orders_router)
router.include_router(reviews_router)

__all__ = ["router"]
