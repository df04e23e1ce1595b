"""
Review Repository - Data access for restaurant reviews.
"""

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session, selectinload

from rest_api.models import Review
from .base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    """Repository for Review entities (author eager loaded), newest first."""

    @property
    def model(self) -> type[Review]:
        return Review

    def _base_query(self) -> Select:
        return (
            select(Review)
            .options(selectinload(Review.user))
            .order_by(Review.created_at.desc(), Review.id.desc())
        )

    def find_by_restaurant(self, restaurant_id: int) -> list[Review]:
        return self._fetch(self._base_query().where(Review.restaurant_id == restaurant_id))

    def rating(self, restaurant_id: int) -> tuple[int, float | None]:
        """(review count, average score) for a restaurant."""
        query = select(func.count(Review.id), func.avg(Review.score)).where(
            Review.restaurant_id == restaurant_id
        )
        count, average = self._db.execute(query).one()
        return count or 0, float(average) if average is not None else None


def get_review_repository(db: Session) -> ReviewRepository:
    """Factory function for dependency injection."""
    return ReviewRepository(db)
