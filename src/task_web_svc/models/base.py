"""Base SQLAlchemy model for the task_web_svc application."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models.

    All database models in the application should inherit from this class.
    """
    pass
