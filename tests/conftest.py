"""Pytest configuration and fixtures for testing.

This module provides shared fixtures for database testing using in-memory SQLite
for fast and isolated test execution.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from task_web_svc.models.base import Base
from task_web_svc.api.app import create_app
from task_web_svc.database import get_db


@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite engine for testing.

    Yields:
        SQLAlchemy Engine instance configured for in-memory SQLite.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    yield engine

    # Clean up
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for testing.

    Args:
        db_engine: SQLAlchemy engine fixture.

    Yields:
        SQLAlchemy Session instance for database operations.
    """
    SessionLocal = sessionmaker(
        bind=db_engine,
        autoflush=False,
        expire_on_commit=False
    )

    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def app():
    """Create a fresh application bound to an in-memory database."""
    return create_app(db_url="sqlite:///:memory:")


@pytest.fixture(scope="function")
def client(app, db_session):
    """Create a FastAPI test client with database dependency override.

    Args:
        app: Application fixture.
        db_session: Database session fixture for dependency injection.

    Yields:
        TestClient instance configured with test database session.
    """
    # Override the get_db dependency to use our test session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
