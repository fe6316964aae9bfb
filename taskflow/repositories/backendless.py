"""Repositories backed by the Backendless REST API."""

import logging
from datetime import UTC, datetime
from typing import Any

import httpx

from taskflow.core.backendless_client import BackendlessClient, error_payload, escape_where_value, parse_timestamp
from taskflow.core.errors import AuthenticationError, ConflictError, NotFoundError, RepositoryError
from taskflow.domain.task import CreateTaskInput, Task, TaskStatus, UpdateTaskInput
from taskflow.domain.user import AuthCredentials, User


logger = logging.getLogger(__name__)

TASKS_TABLE = "Tasks"
PAGE_SIZE = 100

# Backendless error codes
ERR_INVALID_LOGIN = 3003
ERR_USER_EXISTS = 3033
ERR_OBJECT_NOT_FOUND = 1000


def _fail(response: httpx.Response, action: str) -> RepositoryError:
    code, message = error_payload(response)
    logger.error(
        "backendless_error",
        extra={"action": action, "status": response.status_code, "code": code, "error": message},
    )
    return RepositoryError(f"Backendless {action} failed: {message}")


def _is_missing(response: httpx.Response) -> bool:
    code, _ = error_payload(response)
    return response.status_code == httpx.codes.NOT_FOUND or code == ERR_OBJECT_NOT_FOUND


def _to_user(data: dict[str, Any]) -> User:
    return User(
        id=data["objectId"],
        email=data["email"],
        name=data.get("name") or "",
        created_at=parse_timestamp(data.get("created")) or datetime.now(UTC),
    )


def _to_task(data: dict[str, Any], *, user_id: str | None = None) -> Task:
    created_at = parse_timestamp(data.get("created")) or datetime.now(UTC)
    return Task(
        id=data["objectId"],
        user_id=data.get("userId") or user_id or "",
        title=data["title"],
        description=data.get("description") or "",
        status=data.get("status") or TaskStatus.TODO,
        created_at=created_at,
        # Backendless leaves "updated" null until the first update
        updated_at=parse_timestamp(data.get("updated")) or created_at,
    )


class BackendlessAuthRepository:
    """User accounts stored in the Backendless Users table."""

    def __init__(self, client: BackendlessClient) -> None:
        self._client = client

    async def signup(self, credentials: AuthCredentials, name: str) -> User:
        response = await self._client.request(
            "POST",
            "/api/users/register",
            json={"email": credentials.email, "password": credentials.password, "name": name},
        )
        if not response.is_success:
            code, _ = error_payload(response)
            if code == ERR_USER_EXISTS or response.status_code == httpx.codes.CONFLICT:
                raise ConflictError("User already exists")
            raise _fail(response, "signup")

        user = _to_user(response.json())
        # Registration issues no user-token; log in so the new session is usable
        await self.login(credentials)
        return user

    async def login(self, credentials: AuthCredentials) -> User:
        response = await self._client.request(
            "POST",
            "/api/users/login",
            json={"login": credentials.email, "password": credentials.password},
        )
        if not response.is_success:
            code, _ = error_payload(response)
            if code == ERR_INVALID_LOGIN or response.status_code == httpx.codes.UNAUTHORIZED:
                raise AuthenticationError("Invalid email or password")
            raise _fail(response, "login")

        data = response.json()
        user = _to_user(data)
        if token := data.get("user-token"):
            self._client.set_user_token(user.id, token)
        return user

    async def get_current_user(self, user_id: str) -> User | None:
        if not self._client.get_user_token(user_id):
            return None

        response = await self._client.request("GET", f"/api/users/{user_id}", user_id=user_id)
        if response.status_code == httpx.codes.UNAUTHORIZED:
            # Token expired or revoked
            self._client.drop_user_token(user_id)
            return None
        if _is_missing(response):
            return None
        if not response.is_success:
            raise _fail(response, "get current user")

        return _to_user(response.json())

    async def logout(self, user_id: str) -> None:
        if not self._client.get_user_token(user_id):
            return

        response = await self._client.request("GET", "/api/users/logout", user_id=user_id)
        self._client.drop_user_token(user_id)
        if response.is_server_error:
            raise _fail(response, "logout")
        if not response.is_success:
            logger.info("Backendless session already invalid", extra={"user_id": user_id})


class BackendlessTaskRepository:
    """Tasks stored in the Backendless ``Tasks`` data table."""

    def __init__(self, client: BackendlessClient) -> None:
        self._client = client

    async def create_task(self, user_id: str, data: CreateTaskInput) -> Task:
        payload = {
            "userId": user_id,
            "title": data.title,
            "description": data.description,
            "status": str(data.status or TaskStatus.TODO),
        }
        response = await self._client.request("POST", f"/api/data/{TASKS_TABLE}", json=payload, user_id=user_id)
        if not response.is_success:
            raise _fail(response, "create task")

        return _to_task(response.json(), user_id=user_id)

    async def get_task_by_id(self, task_id: str, *, user_id: str | None = None) -> Task | None:
        # A blank id would address the whole table
        if not task_id.strip():
            return None

        response = await self._client.request("GET", f"/api/data/{TASKS_TABLE}/{task_id}", user_id=user_id)
        if _is_missing(response):
            return None
        if not response.is_success:
            raise _fail(response, "get task")

        data = response.json()
        if not isinstance(data, dict):
            raise RepositoryError("Backendless get task failed: expected a single record")
        return _to_task(data)

    async def _query(self, where: str, *, user_id: str) -> list[Task]:
        """Fetch every row matching ``where``, oldest first."""
        tasks: list[Task] = []
        offset = 0
        while True:
            response = await self._client.request(
                "GET",
                f"/api/data/{TASKS_TABLE}",
                params={"where": where, "pageSize": PAGE_SIZE, "offset": offset, "sortBy": "created asc"},
                user_id=user_id,
            )
            if not response.is_success:
                raise _fail(response, "list tasks")

            rows = response.json() or []
            tasks.extend(_to_task(row, user_id=user_id) for row in rows)
            if len(rows) < PAGE_SIZE:
                return tasks
            offset += PAGE_SIZE

    async def get_tasks_by_user_id(self, user_id: str) -> list[Task]:
        return await self._query(f"userId = '{escape_where_value(user_id)}'", user_id=user_id)

    async def get_tasks_by_user_id_and_status(self, user_id: str, status: TaskStatus) -> list[Task]:
        where = f"userId = '{escape_where_value(user_id)}' AND status = '{escape_where_value(str(status))}'"
        return await self._query(where, user_id=user_id)

    async def update_task(self, task_id: str, data: UpdateTaskInput, *, user_id: str | None = None) -> Task:
        changes = {key: str(value) for key, value in data.changes().items()}
        response = await self._client.request(
            "PUT", f"/api/data/{TASKS_TABLE}/{task_id}", json=changes, user_id=user_id
        )
        if _is_missing(response):
            raise NotFoundError("Task not found")
        if not response.is_success:
            raise _fail(response, "update task")

        return _to_task(response.json())

    async def delete_task(self, task_id: str, *, user_id: str | None = None) -> None:
        response = await self._client.request("DELETE", f"/api/data/{TASKS_TABLE}/{task_id}", user_id=user_id)
        if _is_missing(response):
            raise NotFoundError("Task not found")
        if not response.is_success:
            raise _fail(response, "delete task")
