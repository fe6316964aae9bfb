"""Task service for validated CRUD on top of a task repository."""

import logging

from taskflow.core.config import constants
from taskflow.core.errors import ValidationError
from taskflow.core.logging import log_with_user_context, span
from taskflow.domain.repositories import TaskRepository
from taskflow.domain.task import CreateTaskInput, Task, TaskStatus, UpdateTaskInput


logger = logging.getLogger(__name__)

DESCRIPTION_TOO_LONG = f"Description must not exceed {constants.MAX_DESCRIPTION_LENGTH} characters"


def _coerce_status(status: TaskStatus | str) -> TaskStatus:
    """Turn a raw status string into a TaskStatus."""
    try:
        return TaskStatus(status)
    except ValueError as e:
        raise ValidationError(f"Invalid task status: {status}") from e


def _require_user_id(user_id: str) -> None:
    if not user_id:
        raise ValidationError("User ID is required")


def _require_task_id(task_id: str) -> None:
    if not task_id:
        raise ValidationError("Task ID is required")


class TaskService:
    """Validates task input and ownership id, then delegates to the repository.

    Every read and write goes through the single injected repository.
    """

    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    async def create_task(self, user_id: str, data: CreateTaskInput) -> Task:
        """Create a task owned by ``user_id``.

        Args:
            user_id: Owner of the new task
            data: Title, description and optional status (defaults to todo)

        Returns:
            The stored task with id and timestamps assigned

        Raises:
            ValidationError: If the user id or title is missing, or the description is too long
            RepositoryError: If the storage backend fails
        """
        with span("task_service.create_task"):
            _require_user_id(user_id)
            if not data.title or not data.title.strip():
                raise ValidationError("Task title is required")
            if data.description and len(data.description) > constants.MAX_DESCRIPTION_LENGTH:
                raise ValidationError(DESCRIPTION_TOO_LONG)

            task = await self._repository.create_task(user_id, data)
            log_with_user_context(logger, "info", "Task created", user_id=user_id, task_id=task.id)
            return task

    async def get_task_by_id(self, task_id: str, *, user_id: str | None = None) -> Task | None:
        with span("task_service.get_task_by_id"):
            return await self._repository.get_task_by_id(task_id, user_id=user_id)

    async def get_tasks_by_user_id(self, user_id: str) -> list[Task]:
        """Return every task owned by ``user_id``, in insertion order."""
        with span("task_service.get_tasks_by_user_id"):
            _require_user_id(user_id)
            return await self._repository.get_tasks_by_user_id(user_id)

    async def get_tasks_by_status(self, user_id: str, status: TaskStatus | str) -> list[Task]:
        """Return the user's tasks whose status equals ``status``."""
        with span("task_service.get_tasks_by_status"):
            _require_user_id(user_id)
            return await self._repository.get_tasks_by_user_id_and_status(user_id, _coerce_status(status))

    async def get_tasks_by_user_id_and_status(self, user_id: str, status: TaskStatus | str) -> list[Task]:
        """Same as get_tasks_by_status, under the repository's method name."""
        return await self.get_tasks_by_status(user_id, status)

    async def update_task(self, task_id: str, data: UpdateTaskInput, *, user_id: str | None = None) -> Task:
        """Apply a partial update to a task.

        Only fields present in ``data`` change; the repository advances ``updated_at``.
        ``user_id`` names the acting user for backends that authenticate per user.

        Raises:
            ValidationError: If the task id is missing, a supplied title is blank,
                or a supplied description is too long
            NotFoundError: If no task has this id
            RepositoryError: If the storage backend fails
        """
        with span("task_service.update_task"):
            _require_task_id(task_id)
            if data.title is not None and not data.title.strip():
                raise ValidationError("Task title cannot be empty")
            if data.description and len(data.description) > constants.MAX_DESCRIPTION_LENGTH:
                raise ValidationError(DESCRIPTION_TOO_LONG)

            task = await self._repository.update_task(task_id, data, user_id=user_id)
            logger.info("Task updated", extra={"task_id": task_id, "fields": sorted(data.changes())})
            return task

    async def delete_task(self, task_id: str, *, user_id: str | None = None) -> None:
        """Delete a task.

        Raises:
            ValidationError: If the task id is missing
            NotFoundError: If no task has this id
        """
        with span("task_service.delete_task"):
            _require_task_id(task_id)
            await self._repository.delete_task(task_id, user_id=user_id)
            logger.info("Task deleted", extra={"task_id": task_id})
