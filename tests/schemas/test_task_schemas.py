"""Tests for the task request and response schemas."""

import pytest
from pydantic import ValidationError

from task_web_svc.schemas.task import TaskCreate, TaskUpdate, TaskResponse, TaskEnvelope, ErrorResponse


class TestRequestSchemas:
    """Test cases for TaskCreate and TaskUpdate."""

    @pytest.mark.parametrize("schema", [TaskCreate, TaskUpdate])
    def test_task_defaults_to_none(self, schema):
        """Test that a missing task is left for the service layer to report."""
        assert schema().task is None

    @pytest.mark.parametrize("schema", [TaskCreate, TaskUpdate])
    def test_text_is_not_trimmed(self, schema):
        assert schema(task="  padded  ").task == "  padded  "

    @pytest.mark.parametrize("schema", [TaskCreate, TaskUpdate])
    def test_extra_fields_forbidden(self, schema):
        """Test that client-supplied ids and other fields are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            schema.model_validate({"task": "Buy milk", "id": "abc"})

        assert exc_info.value.errors()[0]["type"] == "extra_forbidden"

    @pytest.mark.parametrize("value", [42, ["Buy milk"], {"text": "Buy milk"}])
    def test_non_string_task_rejected(self, value):
        with pytest.raises(ValidationError):
            TaskCreate.model_validate({"task": value})


class TestResponseSchemas:
    """Test cases for the response envelopes."""

    def test_envelope_accepts_task_dict(self):
        """Test that the envelope validates a serialized task dictionary."""
        envelope = TaskEnvelope(
            message="Task added successfully",
            task={"id": "123e4567-e89b-12d3-a456-426614174000", "task": "Buy milk"}
        )

        assert isinstance(envelope.task, TaskResponse)
        assert envelope.model_dump() == {
            "message": "Task added successfully",
            "task": {"id": "123e4567-e89b-12d3-a456-426614174000", "task": "Buy milk"},
        }

    def test_task_response_requires_id(self):
        with pytest.raises(ValidationError):
            TaskResponse(task="Buy milk")

    def test_error_response(self):
        assert ErrorResponse(error="Task not found").model_dump() == {"error": "Task not found"}
