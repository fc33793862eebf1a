"""Service layer for the task_web_svc application.

This package contains the business logic for task management operations.
"""

from .task_service import (
    create_task,
    list_tasks,
    update_task,
    delete_task,
    insert_sample_tasks,
    validate_task_text,
    TaskValidationError,
    TaskNotFoundError,
)

__all__ = [
    "create_task",
    "list_tasks",
    "update_task",
    "delete_task",
    "insert_sample_tasks",
    "validate_task_text",
    "TaskValidationError",
    "TaskNotFoundError",
]
