"""Task service layer for business logic and data persistence.

This module implements task creation, listing, update and deletion on top
of a SQLAlchemy session. Input is validated before any storage call, and
every storage failure is rolled back, logged and re-raised as StorageError.
"""

import logging
from typing import Dict, Any, Optional, List, Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import StorageError
from ..models.task import Task
from ..schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

SAMPLE_TASKS = ("Sample Task 1", "Sample Task 2", "Sample Task 3")


class TaskValidationError(ValueError):
    """Exception raised when a required task field is missing or not encodable."""
    pass


class TaskNotFoundError(ValueError):
    """Exception raised when a task with the specified ID is not found."""
    pass


def validate_task_text(payload: Optional[Union[TaskCreate, TaskUpdate]]) -> str:
    """Return the task text of a request payload.

    The text is returned exactly as submitted. Whitespace-only text is a
    valid task; only a missing or empty value is rejected.

    Raises:
        TaskValidationError: When the payload or its text is missing or empty,
            or when the text cannot be encoded as UTF-8 (lone surrogates)
    """
    text = payload.task if payload is not None else None
    if not text:
        raise TaskValidationError("Task is required")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        raise TaskValidationError("Task must be valid UTF-8 text")
    return text


def _parse_task_id(task_id: Union[str, UUID]) -> UUID:
    """Convert a path identifier to a UUID.

    Only the canonical form produced by serialization (lowercase, hyphenated)
    names a task. Any other string, including alternate UUID spellings, is
    reported as not found rather than as a client error.
    """
    if isinstance(task_id, UUID):
        return task_id
    try:
        task_uuid = UUID(task_id)
    except (ValueError, TypeError, AttributeError):
        raise TaskNotFoundError(f"Task with ID {task_id} not found")
    if str(task_uuid) != task_id:
        raise TaskNotFoundError(f"Task with ID {task_id} not found")
    return task_uuid


def create_task(payload: Optional[TaskCreate], db: Session) -> Dict[str, Any]:
    """Create a new task with validation and database persistence.

    Args:
        payload: TaskCreate request body, or None when no body was sent
        db: SQLAlchemy database session

    Returns:
        Dictionary representation of the created task

    Raises:
        TaskValidationError: When the task text is missing, empty or not valid UTF-8
        StorageError: When the database rejects the insert
    """
    text = validate_task_text(payload)
    logger.info("Creating task")

    task = Task(text=text)

    try:
        db.add(task)
        db.commit()
        db.refresh(task)
    except SQLAlchemyError as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise StorageError("Failed to create task") from e
    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise

    logger.info(f"Successfully created task with ID: {task.id}")
    return task.to_dict()


def list_tasks(db: Session) -> List[Dict[str, Any]]:
    """Return every stored task in storage default order.

    Raises:
        StorageError: When the query fails
    """
    try:
        tasks = db.execute(select(Task)).scalars().all()
    except SQLAlchemyError as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise StorageError("Failed to fetch tasks") from e

    logger.info(f"Successfully retrieved {len(tasks)} tasks")
    return [task.to_dict() for task in tasks]


def update_task(task_id: Union[str, UUID], payload: Optional[TaskUpdate], db: Session) -> Dict[str, Any]:
    """Replace the text of an existing task.

    Validation runs before the lookup, so an invalid body never touches
    storage even when the identifier does not exist.

    Args:
        task_id: Identifier of the task to update
        payload: TaskUpdate request body, or None when no body was sent
        db: SQLAlchemy database session

    Returns:
        Dictionary representation of the updated task

    Raises:
        TaskValidationError: When the task text is missing, empty or not valid UTF-8
        TaskNotFoundError: When no task with the specified task_id exists
        StorageError: When the database fails the lookup or the update
    """
    text = validate_task_text(payload)
    task_uuid = _parse_task_id(task_id)
    logger.info(f"Updating task with ID: {task_uuid}")

    try:
        task = db.get(Task, task_uuid)
        if task is None:
            raise TaskNotFoundError(f"Task with ID {task_uuid} not found")

        task.text = text
        db.commit()
        db.refresh(task)
    except SQLAlchemyError as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise StorageError(f"Failed to update task {task_uuid}") from e
    except TaskNotFoundError:
        raise
    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise

    logger.info(f"Successfully updated task with ID: {task.id}")
    return task.to_dict()


def delete_task(task_id: Union[str, UUID], db: Session) -> Dict[str, Any]:
    """Permanently delete a task.

    Args:
        task_id: Identifier of the task to delete
        db: SQLAlchemy database session

    Returns:
        Dictionary representation of the task as it was before removal

    Raises:
        TaskNotFoundError: When no task with the specified task_id exists
        StorageError: When the database fails the lookup or the delete
    """
    task_uuid = _parse_task_id(task_id)
    logger.info(f"Deleting task with ID: {task_uuid}")

    try:
        task = db.get(Task, task_uuid)
        if task is None:
            raise TaskNotFoundError(f"Task with ID {task_uuid} not found")

        deleted = task.to_dict()
        db.delete(task)
        db.commit()
    except SQLAlchemyError as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise StorageError(f"Failed to delete task {task_uuid}") from e

    logger.info(f"Successfully deleted task with ID: {task_uuid}")
    return deleted


def insert_sample_tasks(db: Session) -> List[Dict[str, Any]]:
    """Insert the fixed set of sample tasks in a single commit.

    Returns:
        Dictionary representations of the inserted tasks

    Raises:
        StorageError: When the insert fails; no sample task is kept
    """
    tasks = [Task(text=text) for text in SAMPLE_TASKS]

    try:
        db.add_all(tasks)
        db.commit()
    except SQLAlchemyError as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise StorageError("Failed to insert sample tasks") from e

    logger.info(f"Inserted {len(tasks)} sample tasks")
    return [task.to_dict() for task in tasks]
