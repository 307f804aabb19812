# File: app/db/session.py
"""
Database Session Management

This module provides database connection and session management functionality.
It configures SQLAlchemy engine and provides dependency injection for database sessions.

"""
import logging
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


def _engine_kwargs(url: str) -> Dict[str, Any]:
    """Extra engine options for the configured backend."""
    if url.startswith("sqlite"):
        # Requests are served from a worker thread pool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before use
        "pool_recycle": 3600,  # Recycle connections every hour
    }


# Create database engine
engine = create_engine(
    settings.DATABASE_URL,
    echo=(settings.ENV == "dev"),  # Log SQL queries in development
    **_engine_kwargs(settings.DATABASE_URL),
)

# Create session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,  # Manual control over flushing
    autocommit=False,  # Manual control over commits
    expire_on_commit=False,  # Keep objects accessible after commit
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a DB session and guarantees cleanup.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error("Database session error: %s", e)
        db.rollback()
        raise
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    # Register mappers on Base.metadata
    from app.models import battle, user  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error("Failed to create database tables: %s", e)
        raise


def commit_or_rollback(db: Session) -> None:
    """
    Commit pending changes as one transaction; on failure roll back and re-raise.
    """
    try:
        db.commit()
    except Exception as e:
        logger.error("Commit failed, rolling back: %s", e)
        db.rollback()
        raise
