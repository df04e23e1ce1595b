"""
Rate limiting for public endpoints using slowapi.

The login endpoint is limited per client IP:

    @router.post("/login")
    @limiter.limit(settings.login_rate_limit_rule)
    def login(request: Request, ...):
        ...
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)

RETRY_AFTER_SECONDS = 60

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 with a Retry-After hint."""
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        client=get_remote_address(request),
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Please try again later.",
            "limit": str(exc.detail),
        },
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )
