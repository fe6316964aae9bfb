"""Task domain models and enums."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(StrEnum):
    """Task progress label. Any transition between values is allowed."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class Task(BaseModel):
    """Task data transfer object."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique task ID assigned by the repository")
    user_id: str = Field(..., alias="userId", description="Owner user ID")
    title: str = Field(..., description="Task title")
    description: str = Field(default="", description="Detailed task description")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Current progress label")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last update timestamp")


class CreateTaskInput(BaseModel):
    """Payload for creating a task."""

    title: str = ""
    description: str = ""
    status: TaskStatus | None = None


class UpdateTaskInput(BaseModel):
    """Partial update payload. Fields left unset keep their stored values."""

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
