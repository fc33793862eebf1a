"""FastAPI routes for task-related operations.

This module implements REST API endpoints for task management including
creation, listing, updating, and deletion. Handlers are plain functions so
FastAPI runs them in its thread pool while the blocking database call is in
flight.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from ..database import get_db, StorageError
from ..schemas.task import TaskCreate, TaskUpdate, TaskResponse, TaskEnvelope, ErrorResponse
from ..services.task_service import (
    create_task,
    list_tasks,
    update_task,
    delete_task,
    insert_sample_tasks,
    TaskValidationError,
    TaskNotFoundError,
)

logger = logging.getLogger(__name__)

# Create API router
task_router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@task_router.post(
    "/tasks",
    response_model=TaskEnvelope,
    status_code=201,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
)
def create_task_endpoint(
    payload: Optional[TaskCreate] = Body(None),
    db: Session = Depends(get_db)
) -> TaskEnvelope:
    """Create a task from a ``{"task": "..."}`` body.

    Raises:
        HTTPException: 400 if the task text is missing, 500 for server errors
    """
    logger.info("POST /tasks request")

    try:
        task = create_task(payload, db)
        return TaskEnvelope(message="Task added successfully", task=task)

    except TaskValidationError as e:
        logger.warning(f"Rejected task creation: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        logger.error(f"Error adding task: {e}")
        raise HTTPException(status_code=500, detail="Error adding task")
    except Exception as e:
        logger.error(e, exc_info=True)
        raise HTTPException(status_code=500, detail="Error adding task")


@task_router.get(
    "/tasks",
    response_model=List[TaskResponse],
    responses={500: ERROR_RESPONSES[500]},
)
def list_tasks_endpoint(db: Session = Depends(get_db)) -> List[TaskResponse]:
    """Return every stored task."""
    logger.info("GET /tasks request")

    try:
        return list_tasks(db)

    except StorageError as e:
        logger.error(f"Error fetching tasks: {e}")
        raise HTTPException(status_code=500, detail="Error fetching tasks")
    except Exception as e:
        logger.error(e, exc_info=True)
        raise HTTPException(status_code=500, detail="Error fetching tasks")


@task_router.put("/tasks/{task_id}", response_model=TaskEnvelope, responses=ERROR_RESPONSES)
def update_task_endpoint(
    task_id: str,
    payload: Optional[TaskUpdate] = Body(None),
    db: Session = Depends(get_db)
) -> TaskEnvelope:
    """Replace the text of a task.

    Args:
        task_id: Identifier of the task to update
        payload: Body carrying the new task text
        db: Database session dependency

    Returns:
        TaskEnvelope with success message and the updated task

    Raises:
        HTTPException: 400 if the task text is missing, 404 if task not
            found, 500 for server errors
    """
    logger.info(f"PUT /tasks/{task_id} request")

    try:
        task = update_task(task_id=task_id, payload=payload, db=db)
        return TaskEnvelope(message="Task updated successfully", task=task)

    except TaskValidationError as e:
        logger.warning(f"Rejected task update: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except TaskNotFoundError as e:
        logger.warning(f"Task not found: {e}")
        raise HTTPException(status_code=404, detail="Task not found")
    except StorageError as e:
        logger.error(f"Error updating task: {e}")
        raise HTTPException(status_code=500, detail="Error updating task")
    except Exception as e:
        logger.error(e, exc_info=True)
        raise HTTPException(status_code=500, detail="Error updating task")


@task_router.delete(
    "/tasks/{task_id}",
    response_model=TaskEnvelope,
    responses={404: ERROR_RESPONSES[404], 500: ERROR_RESPONSES[500]},
)
def delete_task_endpoint(task_id: str, db: Session = Depends(get_db)) -> TaskEnvelope:
    """Permanently delete a task by ID.

    Args:
        task_id: Identifier of the task to delete
        db: Database session dependency

    Returns:
        TaskEnvelope with success message and the removed task

    Raises:
        HTTPException: 404 if task not found, 500 for server errors
    """
    logger.info(f"DELETE /tasks/{task_id} request")

    try:
        task = delete_task(task_id=task_id, db=db)
        return TaskEnvelope(message="Task deleted successfully", task=task)

    except TaskNotFoundError as e:
        logger.warning(f"Task not found: {e}")
        raise HTTPException(status_code=404, detail="Task not found")
    except StorageError as e:
        logger.error(f"Error deleting task: {e}")
        raise HTTPException(status_code=500, detail="Error deleting task")
    except Exception as e:
        logger.error(e, exc_info=True)
        raise HTTPException(status_code=500, detail="Error deleting task")


@task_router.post(
    "/insert-sample",
    response_class=PlainTextResponse,
    status_code=201,
    responses={500: ERROR_RESPONSES[500]},
)
def insert_sample_endpoint(db: Session = Depends(get_db)) -> str:
    """Seed the database with the fixed sample tasks."""
    logger.info("POST /insert-sample request")

    try:
        insert_sample_tasks(db)
        return "Sample tasks inserted successfully!"

    except StorageError as e:
        logger.error(f"Error inserting sample tasks: {e}")
        raise HTTPException(status_code=500, detail="Error inserting sample tasks")
    except Exception as e:
        logger.error(e, exc_info=True)
        raise HTTPException(status_code=500, detail="Error inserting sample tasks")
