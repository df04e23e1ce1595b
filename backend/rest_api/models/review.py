"""
Review Model.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, BigIntPK, utcnow

if TYPE_CHECKING:
    from .restaurant import Restaurant
    from .user import User


class Review(Base):
    """A client's score (0-10) and comments for a restaurant."""

    __tablename__ = "review"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurant.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("app_user.id"), nullable=False, index=True
    )
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    comments: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint("score >= 0 AND score <= 10", name="ck_review_score_range"),
    )

    restaurant: Mapped["Restaurant"] = relationship(back_populates="reviews")
    user: Mapped["User"] = relationship(back_populates="reviews")

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, restaurant_id={self.restaurant_id}, score={self.score})>"
