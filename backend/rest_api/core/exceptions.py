"""
Global exception handlers.

AppException subclasses are HTTPExceptions and FastAPI renders them
directly; the handlers here cover what escapes the services.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shared.config.logging import get_logger
from shared.security.rate_limit import rate_limit_exceeded_handler

logger = get_logger(__name__)


def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Constraint violations that slipped past service checks become 409."""
    logger.warning(
        "Integrity constraint violated",
        path=request.url.path,
        method=request.method,
        error=str(exc.orig),
    )
    return JSONResponse(
        status_code=409,
        content={"detail": "Request conflicts with existing data"},
    )


def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Database error",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Database error"})


def register_exception_handlers(app: FastAPI) -> None:
    # Most specific first; Starlette resolves handlers by MRO anyway
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
