"""
Seed data for development and testing.
Creates the schema and the reference data every deployment needs: the
cuisine catalog.
"""

from collections.abc import Iterable

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from rest_api.models import Base
from rest_api.services.domain import CuisineService
from shared.config.constants import DEFAULT_CUISINES
from shared.config.logging import get_logger

logger = get_logger(__name__)


def create_tables(engine: Engine) -> None:
    """Create missing tables. Existing tables are left untouched."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified", url=engine.url.render_as_string(hide_password=True))


def seed(db: Session, cuisines: Iterable[str] = DEFAULT_CUISINES) -> int:
    """
    Seed reference data.
    Idempotent: only inserts rows that don't exist. Returns how many
    were inserted.
    """
    created = CuisineService(db).seed_defaults(cuisines)
    if not created:
        logger.info("Cuisines already seeded, skipping")
    return created
