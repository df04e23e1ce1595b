"""
Cuisine Service - read access to the cuisine catalog.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from rest_api.models import RestaurantCuisine
from rest_api.repositories import get_cuisine_repository
from rest_api.services.base_service import BaseService
from shared.config.constants import DEFAULT_CUISINES
from shared.config.logging import get_logger
from shared.utils.exceptions import CuisineNotFoundError
from shared.utils.schemas import CuisineOutput

logger = get_logger(__name__)


class CuisineService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self._cuisines = get_cuisine_repository(db)

    def list_all(self) -> list[CuisineOutput]:
        return [CuisineOutput.model_validate(c) for c in self._cuisines.find_all()]

    def find_entity(self, cuisine_id: int) -> RestaurantCuisine | None:
        return self._cuisines.find_by_id(cuisine_id)

    def get_by_id(self, cuisine_id: int) -> CuisineOutput:
        cuisine = self.find_entity(cuisine_id)
        if cuisine is None:
            raise CuisineNotFoundError(cuisine_id)
        return CuisineOutput.model_validate(cuisine)

    def seed_defaults(self, names: Iterable[str] = DEFAULT_CUISINES) -> int:
        """Insert missing cuisines. Idempotent; returns how many were created."""
        created = 0
        for name in names:
            if self._cuisines.find_by_name(name) is None:
                self._cuisines.save(RestaurantCuisine(name=name))
                created += 1
        if created:
            self._commit()
            logger.info("Cuisines seeded", created=created)
        return created
