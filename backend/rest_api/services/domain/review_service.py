"""
Review Service - client reviews of restaurants.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from rest_api.models import Review
from rest_api.repositories import get_restaurant_repository, get_review_repository
from rest_api.services.base_service import BaseService
from rest_api.services.permissions import Principal, ensure_role, ensure_self
from shared.config.constants import Roles
from shared.config.logging import get_logger
from shared.utils.exceptions import RestaurantNotFoundError, ReviewNotFoundError
from shared.utils.schemas import RatingOutput, ReviewCreate, ReviewOutput, ReviewUpdate
from shared.utils.validators import validate_score

logger = get_logger(__name__)


def to_output(review: Review) -> ReviewOutput:
    return ReviewOutput(
        id=review.id,
        restaurant_id=review.restaurant_id,
        user_id=review.user_id,
        user_name=review.user.name,
        score=review.score,
        comments=review.comments,
        created_at=review.created_at,
    )


class ReviewService(BaseService):
    """Only clients write reviews; only the author edits or deletes one."""

    def __init__(self, db: Session):
        super().__init__(db)
        self._reviews = get_review_repository(db)
        self._restaurants = get_restaurant_repository(db)

    def get_entity(self, review_id: int) -> Review:
        review = self._reviews.find_by_id(review_id)
        if review is None:
            raise ReviewNotFoundError(review_id)
        return review

    def get_by_id(self, review_id: int) -> ReviewOutput:
        return to_output(self.get_entity(review_id))

    def list_for_restaurant(self, restaurant_id: int) -> list[ReviewOutput]:
        self._require_restaurant(restaurant_id)
        return [to_output(r) for r in self._reviews.find_by_restaurant(restaurant_id)]

    def restaurant_rating(self, restaurant_id: int) -> RatingOutput:
        self._require_restaurant(restaurant_id)
        count, average = self._reviews.rating(restaurant_id)
        return RatingOutput(
            restaurant_id=restaurant_id,
            review_count=count,
            average_score=round(average, 2) if average is not None else None,
        )

    def create(self, data: ReviewCreate, principal: Principal) -> ReviewOutput:
        ensure_role(principal, Roles.CLIENT, "write reviews")
        self._require_restaurant(data.restaurant_id)

        review = Review(
            restaurant_id=data.restaurant_id,
            user_id=principal.user_id,
            score=validate_score(data.score),
            comments=data.comments,
        )
        self._reviews.save(review)
        self._commit()

        logger.info("Review created", review_id=review.id, restaurant_id=data.restaurant_id, score=review.score)
        return to_output(review)

    def update(self, review_id: int, data: ReviewUpdate, principal: Principal) -> ReviewOutput:
        review = self.get_entity(review_id)
        ensure_self(principal, review.user_id, "update this review")

        if data.score is not None:
            review.score = validate_score(data.score)
        if data.comments is not None:
            review.comments = data.comments

        self._reviews.save(review)
        self._commit()

        logger.info("Review updated", review_id=review_id)
        return to_output(review)

    def delete(self, review_id: int, principal: Principal) -> None:
        review = self.get_entity(review_id)
        ensure_self(principal, review.user_id, "delete this review")

        self._reviews.delete(review)
        self._commit()
        logger.info("Review deleted", review_id=review_id, restaurant_id=review.restaurant_id)

    def _require_restaurant(self, restaurant_id: int) -> None:
        if not self._restaurants.exists(restaurant_id):
            raise RestaurantNotFoundError(restaurant_id)
