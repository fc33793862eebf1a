"""Task SQLAlchemy ORM model for the task_web_svc application."""

import uuid
from typing import Dict, Any

from sqlalchemy import Column, Text
from sqlalchemy.types import Uuid

from .base import Base


class Task(Base):
    """Task ORM model.

    The identifier is generated by the storage layer on insert and never
    supplied by clients. ``text`` is the only required field.
    """
    __tablename__ = 'tasks'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, unique=True, nullable=False)
    text = Column(Text, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Task model instance to its wire representation.

        Returns:
            Dict with the UUID as a string under ``id`` and the task text
            under ``task``.
        """
        return {
            'id': str(self.id),
            'task': self.text,
        }

    def __repr__(self):
        """String representation of the Task object."""
        return f"<Task(id={self.id}, text='{self.text}')>"
