"""
Base Repository implementation.
Common data access operations; subclasses define eager loading and order.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from shared.config.constants import Limits
from shared.utils.pagination import Pagination


ModelT = TypeVar("ModelT")


@dataclass
class RepositoryFilters:
    """Base filters for repository queries."""

    # Pagination (None = no limit)
    limit: int | None = None
    offset: int = 0

    # Search
    search: str | None = None

    def __post_init__(self):
        """Validate and normalize filters."""
        if self.limit is not None:
            self.limit = min(max(1, self.limit), Limits.MAX_PAGE_SIZE)
        self.offset = max(0, self.offset)
        if self.search:
            self.search = self.search.strip()[:Limits.MAX_SEARCH_TERM_LENGTH]

    def paginate(self, pagination: Pagination) -> None:
        self.limit = pagination.limit
        self.offset = pagination.offset


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: the SQLAlchemy model class
    - _base_query(): select() with eager loading and default ordering
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    @abstractmethod
    def _base_query(self) -> Select:
        """Base query with eager loading (selectinload) and ordering."""
        ...

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Entity-specific filters. No-op by default."""
        return query

    def _fetch(self, query: Select) -> list[ModelT]:
        return list(self._db.execute(query).scalars().unique().all())

    def find_by_id(self, entity_id: int) -> ModelT | None:
        query = self._base_query().where(self.model.id == entity_id)
        return self._db.scalar(query)

    def find_by_ids(self, entity_ids: Sequence[int]) -> list[ModelT]:
        """Entities for the given IDs (order not guaranteed)."""
        if not entity_ids:
            return []
        query = self._base_query().where(self.model.id.in_(set(entity_ids)))
        return self._fetch(query)

    def find_all(self, filters: RepositoryFilters | None = None) -> list[ModelT]:
        filters = filters or RepositoryFilters()
        query = self._apply_filters(self._base_query(), filters)

        if filters.offset:
            query = query.offset(filters.offset)
        if filters.limit is not None:
            query = query.limit(filters.limit)

        return self._fetch(query)

    def count(self, filters: RepositoryFilters | None = None) -> int:
        """Count rows matching filters (ordering and eager loads dropped)."""
        filters = filters or RepositoryFilters()
        inner = self._apply_filters(select(self.model.id), filters).subquery()
        return self._db.scalar(select(func.count()).select_from(inner)) or 0

    def exists(self, entity_id: int) -> bool:
        query = select(self.model.id).where(self.model.id == entity_id).limit(1)
        return self._db.scalar(query) is not None

    def save(self, entity: ModelT) -> ModelT:
        """Insert or update, flushing so generated values are available."""
        self._db.add(entity)
        self._db.flush()
        self._db.refresh(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        """Hard delete entity."""
        self._db.delete(entity)
        self._db.flush()
