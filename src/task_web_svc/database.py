"""Core database connection and session management using SQLAlchemy.

This module builds the engine and session factory for the storage backend
named by DATABASE_URL (PostgreSQL or SQLite). The resulting handle is
created once by the application lifespan and stored on ``app.state``;
request handlers receive sessions through the ``get_db`` dependency.
"""

import logging
import os
from typing import Generator, Tuple

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Import config to ensure dotenv is loaded
from . import config
from .models import Base

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Exception raised when the storage backend fails an operation."""
    pass


def get_db_url() -> str:
    """Get database URL from environment variables.

    Returns:
        Database URL string. Defaults to SQLite in-memory if DATABASE_URL is not set.
    """
    return os.getenv("DATABASE_URL", "sqlite:///:memory:")


def create_engine_and_session_factory(db_url: str | None = None) -> Tuple[Engine, sessionmaker]:
    """Create SQLAlchemy engine and session factory.

    Args:
        db_url: Database URL. If None, uses get_db_url().

    Returns:
        Tuple of (engine, sessionmaker)

    Raises:
        Exception: If engine creation fails.
    """
    if db_url is None:
        db_url = get_db_url()

    try:
        if db_url.startswith("postgresql"):
            # PostgreSQL configuration with connection pooling
            engine = create_engine(
                db_url,
                pool_size=10,
                max_overflow=20,
                pool_timeout=30,
                pool_pre_ping=True
            )
        else:
            connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
            if db_url == "sqlite:///:memory:":
                # Use StaticPool for in-memory SQLite to maintain single connection
                engine = create_engine(
                    db_url,
                    connect_args=connect_args,
                    poolclass=StaticPool
                )
            else:
                engine = create_engine(db_url, connect_args=connect_args)

        SessionLocal = sessionmaker(
            bind=engine,
            autoflush=False,
            expire_on_commit=False
        )

        return engine, SessionLocal

    except Exception as e:
        logger.error(f"Failed to create database engine: {e}", exc_info=True)
        raise


def check_db_connection(session_factory: sessionmaker) -> bool:
    """Check database connectivity.

    Args:
        session_factory: Session factory bound to the engine under test.

    Returns:
        True if connection successful, False otherwise.
    """
    try:
        with session_factory() as db:
            db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}", exc_info=True)
        return False


def connect(db_url: str | None = None) -> Tuple[Engine, sessionmaker]:
    """Connect to the storage backend and make sure the schema exists.

    Args:
        db_url: Database URL. If None, uses get_db_url().

    Returns:
        Tuple of (engine, sessionmaker) ready to serve requests.

    Raises:
        StorageError: If the engine cannot be created, the schema cannot be
            created, or the connectivity check fails.
    """
    try:
        engine, session_factory = create_engine_and_session_factory(db_url)
    except Exception as e:
        raise StorageError(f"Unable to create database engine: {e}") from e

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(e, exc_info=True)
        engine.dispose()
        raise StorageError(f"Unable to create database schema: {e}") from e

    if not check_db_connection(session_factory):
        engine.dispose()
        raise StorageError("Unable to connect to the database")

    logger.info(f"Connected to database ({engine.dialect.name})")
    return engine, session_factory


def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session generator.

    The session factory is read from ``request.app.state``, where the
    application lifespan stored it at startup.

    Yields:
        SQLAlchemy Session instance.

    Ensures proper cleanup of the session even if errors occur.
    """
    session_factory: sessionmaker = request.app.state.session_factory

    db = session_factory()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Database session error: {e}", exc_info=True)
        raise
    finally:
        db.close()
