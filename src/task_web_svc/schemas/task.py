"""Pydantic schemas for task-related operations.

This module defines the request bodies and response envelopes of the task
API. Request bodies only accept the ``task`` field; anything else is
rejected so a client can never supply its own identifier.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """Input schema for creating a new task.

    ``task`` is optional at the schema level so that a missing value can be
    reported with the same message as an empty one by the service layer.
    """
    model_config = ConfigDict(extra="forbid")

    task: Optional[str] = Field(None, description="Task text (required)")


class TaskUpdate(BaseModel):
    """Input schema for replacing the text of an existing task."""
    model_config = ConfigDict(extra="forbid")

    task: Optional[str] = Field(None, description="New task text (required)")


class TaskResponse(BaseModel):
    """Output schema for a single task."""
    id: str = Field(..., description="Unique task identifier (UUID as string)")
    task: str = Field(..., description="Task text")

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "task": "Buy milk"
            }
        }
    }


class TaskEnvelope(BaseModel):
    """Response envelope returned by create, update and delete."""
    message: str = Field(..., description="Outcome message")
    task: TaskResponse = Field(..., description="The affected task")


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str = Field(..., description="Error message")
