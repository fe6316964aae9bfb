"""Pure Python in-memory repositories.

Used for local development and tests. State lives on the instance, so each
composition root gets its own isolated store.
"""

import asyncio
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from taskflow.core.errors import AuthenticationError, ConflictError, NotFoundError
from taskflow.core.security import hash_password, verify_password
from taskflow.domain.task import CreateTaskInput, Task, TaskStatus, UpdateTaskInput
from taskflow.domain.user import AuthCredentials, User


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class _StoredUser:
    """User record plus its argon2 password hash. Never leaves this module."""

    user: User
    password_hash: str


class InMemoryAuthRepository:
    """Auth repository backed by a dict. Emails are unique (case-insensitive)."""

    def __init__(self) -> None:
        self._users: dict[str, _StoredUser] = {}

    def _find_by_email(self, email: str) -> _StoredUser | None:
        wanted = email.strip().lower()
        return next((u for u in self._users.values() if u.user.email.lower() == wanted), None)

    async def signup(self, credentials: AuthCredentials, name: str) -> User:
        if self._find_by_email(credentials.email):
            raise ConflictError("User already exists")

        # Hashing is CPU-bound; keep it off the event loop
        password_hash = await asyncio.to_thread(hash_password, credentials.password)
        # A concurrent signup may have taken the email while we were hashing
        if self._find_by_email(credentials.email):
            raise ConflictError("User already exists")

        user = User(id=_new_id(), email=credentials.email.strip(), name=name, created_at=datetime.now(UTC))
        self._users[user.id] = _StoredUser(user=user, password_hash=password_hash)
        return user

    async def login(self, credentials: AuthCredentials) -> User:
        stored = self._find_by_email(credentials.email)
        if stored is None or not await asyncio.to_thread(verify_password, credentials.password, stored.password_hash):
            raise AuthenticationError("Invalid email or password")
        return stored.user

    async def get_current_user(self, user_id: str) -> User | None:
        stored = self._users.get(user_id)
        return stored.user if stored else None

    async def logout(self, user_id: str) -> None:
        # Sessions live in the signed cookie; nothing is held server-side.
        return None


class InMemoryTaskRepository:
    """Task repository backed by an insertion-ordered dict."""

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}

    async def create_task(self, user_id: str, data: CreateTaskInput) -> Task:
        now = datetime.now(UTC)
        task = Task(
            id=_new_id(),
            user_id=user_id,
            title=data.title,
            description=data.description,
            status=data.status or TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )
        self._tasks[task.id] = task
        return task.model_copy()

    async def get_task_by_id(self, task_id: str, *, user_id: str | None = None) -> Task | None:
        task = self._tasks.get(task_id)
        return task.model_copy() if task else None

    async def get_tasks_by_user_id(self, user_id: str) -> list[Task]:
        return [t.model_copy() for t in self._tasks.values() if t.user_id == user_id]

    async def get_tasks_by_user_id_and_status(self, user_id: str, status: TaskStatus) -> list[Task]:
        return [t.model_copy() for t in self._tasks.values() if t.user_id == user_id and t.status == status]

    async def update_task(self, task_id: str, data: UpdateTaskInput, *, user_id: str | None = None) -> Task:
        current = self._tasks.get(task_id)
        if current is None:
            raise NotFoundError("Task not found")

        # Clock ties on fast machines must still move updated_at forward
        updated_at = max(datetime.now(UTC), current.updated_at + timedelta(microseconds=1))
        updated = current.model_copy(update={**data.changes(), "updated_at": updated_at})
        self._tasks[task_id] = updated
        return updated.model_copy()

    async def delete_task(self, task_id: str, *, user_id: str | None = None) -> None:
        if self._tasks.pop(task_id, None) is None:
            raise NotFoundError("Task not found")
