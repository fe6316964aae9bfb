"""Domain models and repository contracts."""

from taskflow.domain.repositories import AuthRepository, TaskRepository
from taskflow.domain.task import CreateTaskInput, Task, TaskStatus, UpdateTaskInput
from taskflow.domain.user import AuthCredentials, User


__all__ = [
    "AuthCredentials",
    "AuthRepository",
    "CreateTaskInput",
    "Task",
    "TaskRepository",
    "TaskStatus",
    "UpdateTaskInput",
    "User",
]
