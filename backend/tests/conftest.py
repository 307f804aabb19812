import logging
import os
import sys
from pathlib import Path

# Settings are read at import time; point them at throwaway values first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "staging")
os.environ.setdefault("SESSION_SECRET_KEY", "test-secret")

# Ensure `backend` is importable before the project is installed.
BACKEND = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.session import Base, get_db
from app.models import user as _user_model  # noqa: F401  (registers both tables)

# Keep SQL echo and request logs out of test output
logging.basicConfig(level=logging.WARNING)


@pytest.fixture
def session_factory():
    """Fresh in-memory database per test, shared by every session it hands out."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def web_app(session_factory):
    """The FastAPI app with `get_db` bound to the test database."""
    from app.main import app as fastapi_app

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = _get_test_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client_factory(web_app):
    """Factory for independent clients, each with its own session cookie."""

    def _factory() -> TestClient:
        return TestClient(web_app)

    return _factory
