"""
Database configuration and session management.
SQLAlchemy 2.0 engine, session factory and FastAPI session dependency.
"""

import os
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from shared.config.logging import get_logger
from shared.config.settings import DATABASE_URL

logger = get_logger(__name__)


def _calculate_pool_size() -> int:
    """(2 * CPU cores) + 1, capped at 20."""
    cores = os.cpu_count() or 4
    return min(cores * 2 + 1, 20)


def engine_options(database_url: str) -> dict[str, Any]:
    """
    Keyword arguments for create_engine().

    SQLite (local runs and tests) takes neither pool sizing nor
    connect_timeout, and needs check_same_thread disabled because the
    FastAPI threadpool may hand a session to another thread.
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}

    return {
        "pool_pre_ping": True,
        "pool_size": _calculate_pool_size(),
        "max_overflow": 15,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "connect_args": {"connect_timeout": 10},
    }


engine = create_engine(DATABASE_URL, echo=False, **engine_options(DATABASE_URL))

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/restaurants")
        def list_restaurants(db: Session = Depends(get_db)):
            ...

    The session is closed once the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of FastAPI (CLI, startup).

    Usage:
        with get_db_context() as db:
            seed(db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def safe_commit(db: Session) -> None:
    """
    Commit the current transaction, rolling back on failure.

    The original exception is re-raised so the caller's error mapping
    (IntegrityError -> 409, everything else -> 500) still applies.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Database commit failed, transaction rolled back", exc_info=True)
        raise
