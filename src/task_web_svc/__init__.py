"""Task CRUD web service built on FastAPI and SQLAlchemy."""

__version__ = "1.0.0"
