"""Repository contracts consumed by the use-case services.

The services depend on these Protocols rather than on concrete storage, so
the in-memory and Backendless implementations are interchangeable.

Guarantees every implementation must provide:
- ``create_task`` assigns ``id``, ``created_at``, ``updated_at`` and
  defaults ``status`` to ``todo``.
- ``update_task`` applies only the supplied fields, advances ``updated_at``
  and raises ``NotFoundError`` for an unknown id. Concurrent updates to the
  same task are last-write-wins.
- ``delete_task`` raises ``NotFoundError`` for an unknown id.
- ``signup`` raises ``ConflictError`` for an email that is already taken.
- ``login`` raises ``AuthenticationError`` on a credential mismatch.
- Storage or transport failures raise ``RepositoryError``.
- The keyword ``user_id`` on single-task operations names the acting user;
  backends that authenticate per user use it, others may ignore it.
"""

from typing import Protocol

from taskflow.domain.task import CreateTaskInput, Task, TaskStatus, UpdateTaskInput
from taskflow.domain.user import AuthCredentials, User


class AuthRepository(Protocol):
    """Persistence port for user accounts and sessions."""

    async def signup(self, credentials: AuthCredentials, name: str) -> User: ...

    async def login(self, credentials: AuthCredentials) -> User: ...

    async def get_current_user(self, user_id: str) -> User | None: ...

    async def logout(self, user_id: str) -> None: ...


class TaskRepository(Protocol):
    """Persistence port for tasks."""

    async def create_task(self, user_id: str, data: CreateTaskInput) -> Task: ...

    async def get_task_by_id(self, task_id: str, *, user_id: str | None = None) -> Task | None: ...

    async def get_tasks_by_user_id(self, user_id: str) -> list[Task]: ...

    async def get_tasks_by_user_id_and_status(self, user_id: str, status: TaskStatus) -> list[Task]: ...

    async def update_task(self, task_id: str, data: UpdateTaskInput, *, user_id: str | None = None) -> Task: ...

    async def delete_task(self, task_id: str, *, user_id: str | None = None) -> None: ...
