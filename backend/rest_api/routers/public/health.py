"""
Health check endpoints for the REST API.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.utils.schemas import HealthOutput

logger = get_logger(__name__)

SERVICE_NAME = "rest-api"

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthOutput)
def health_check() -> HealthOutput:
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return HealthOutput(status="healthy", service=SERVICE_NAME, environment=settings.environment)


@router.get("/health/detailed", response_model=HealthOutput)
def detailed_health_check(db: Session = Depends(get_db)):
    """Health including database connectivity. 503 when the database is unreachable."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Database health check failed", error=str(exc))
        body = HealthOutput(
            status="degraded",
            service=SERVICE_NAME,
            environment=settings.environment,
            database="unreachable",
        )
        return JSONResponse(status_code=503, content=body.model_dump())

    return HealthOutput(
        status="healthy",
        service=SERVICE_NAME,
        environment=settings.environment,
        database="ok",
    )
