"""
User Repository - Data access for accounts.
"""

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from rest_api.models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """
    Repository for User entities.

    Soft-deleted accounts are invisible unless include_inactive is set.
    """

    @property
    def model(self) -> type[User]:
        return User

    def _base_query(self) -> Select:
        return select(User).where(User.is_active.is_(True)).order_by(User.id)

    def find_by_email(self, email: str, include_inactive: bool = False) -> User | None:
        query = select(User).where(User.email == email.lower())
        if not include_inactive:
            query = query.where(User.is_active.is_(True))
        return self._db.scalar(query)

    def email_taken(self, email: str) -> bool:
        """True if any account, active or deleted, uses the email."""
        return self.find_by_email(email, include_inactive=True) is not None


def get_user_repository(db: Session) -> UserRepository:
    """Factory function for dependency injection."""
    return UserRepository(db)
