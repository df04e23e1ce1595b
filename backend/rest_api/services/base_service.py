"""
Base Service Class.

Architecture:
    Router (thin) → Service (business logic) → Repository (data access) → Model

Services receive the request Session and, where authorization matters,
the caller's Principal as an explicit argument. Command methods commit
through safe_commit before returning.

Usage:
    from rest_api.services.base_service import BaseService

    class ReviewService(BaseService):
        def __init__(self, db: Session):
            super().__init__(db)
            self._reviews = get_review_repository(db)
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from shared.infrastructure.db import safe_commit


class BaseService:
    """Common infrastructure for domain services (session, commit)."""

    def __init__(self, db: Session):
        self._db = db

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    def _commit(self) -> None:
        safe_commit(self._db)
