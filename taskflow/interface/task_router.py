"""Task endpoints scoped to the logged-in user."""

from fastapi import APIRouter, Depends, Query, Response, status

from taskflow.core.errors import NotFoundError
from taskflow.domain.task import CreateTaskInput, Task, UpdateTaskInput
from taskflow.interface.session import get_task_service, require_user_id
from taskflow.services.task_service import TaskService


router = APIRouter(prefix="/tasks", tags=["tasks"])

ALL_STATUSES = "all"


async def _get_owned_task(task_service: TaskService, task_id: str, user_id: str) -> Task:
    """Fetch a task, hiding tasks that belong to someone else."""
    task = await task_service.get_task_by_id(task_id, user_id=user_id)
    if task is None or task.user_id != user_id:
        raise NotFoundError("Task not found")
    return task


@router.get("", response_model=list[Task])
async def list_tasks(
    status_filter: str | None = Query(default=None, alias="status"),
    user_id: str = Depends(require_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> list[Task]:
    """List the user's tasks, optionally narrowed to one status (``?status=done``)."""
    if not status_filter or status_filter == ALL_STATUSES:
        return await task_service.get_tasks_by_user_id(user_id)
    return await task_service.get_tasks_by_status(user_id, status_filter)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Task)
async def create_task(
    body: CreateTaskInput,
    user_id: str = Depends(require_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    return await task_service.create_task(user_id, body)


@router.get("/{task_id}", response_model=Task)
async def get_task(
    task_id: str,
    user_id: str = Depends(require_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    return await _get_owned_task(task_service, task_id, user_id)


@router.patch("/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    body: UpdateTaskInput,
    user_id: str = Depends(require_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    """Apply a partial update; omitted fields keep their values."""
    await _get_owned_task(task_service, task_id, user_id)
    return await task_service.update_task(task_id, body, user_id=user_id)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str,
    user_id: str = Depends(require_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> Response:
    await _get_owned_task(task_service, task_id, user_id)
    await task_service.delete_task(task_id, user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
