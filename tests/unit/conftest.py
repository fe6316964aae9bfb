"""Pytest configuration and fixtures for unit tests."""

from collections.abc import Generator
from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskflow.core.errors import AuthenticationError, RepositoryError
from taskflow.domain.user import AuthCredentials, User
from taskflow.interface.auth_router import router as auth_router
from taskflow.interface.error_handlers import register_error_handlers
from taskflow.interface.task_router import router as task_router
from taskflow.repositories.memory import InMemoryAuthRepository, InMemoryTaskRepository
from taskflow.services.auth_service import AuthService
from taskflow.services.container import ServiceContainer, build_container
from taskflow.services.task_service import TaskService


class RecordingAuthRepository:
    """Auth repository fake that records calls and returns canned users.

    Signup never rejects duplicates, so tests can prove the service itself
    does not pre-check emails.
    """

    MISSING_USER_ID = "999"

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self.fail_with: Exception | None = None

    def _record(self, name: str, *args: object) -> None:
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    async def signup(self, credentials: AuthCredentials, name: str) -> User:
        self._record("signup", credentials, name)
        return User(id="1", email=credentials.email, name=name, created_at=datetime.now(UTC))

    async def login(self, credentials: AuthCredentials) -> User:
        self._record("login", credentials)
        if credentials.password == "wrong-password":
            raise AuthenticationError("Invalid email or password")
        return User(id="1", email=credentials.email, name="Test User", created_at=datetime.now(UTC))

    async def get_current_user(self, user_id: str) -> User | None:
        self._record("get_current_user", user_id)
        if user_id == self.MISSING_USER_ID:
            return None
        return User(id=user_id, email="test@example.com", name="Test User", created_at=datetime.now(UTC))

    async def logout(self, user_id: str) -> None:
        self._record("logout", user_id)


class FailingTaskRepository:
    """Task repository whose every call fails like a dropped connection."""

    def __init__(self) -> None:
        self.calls = 0

    def __getattr__(self, name: str):
        async def _fail(*_args: object, **_kwargs: object) -> None:
            self.calls += 1
            try:
                raise ConnectionError("connection reset by peer")
            except ConnectionError as e:
                raise RepositoryError(f"Backendless request failed: {e}") from e

        return _fail


@pytest.fixture
def recording_auth_repository() -> RecordingAuthRepository:
    return RecordingAuthRepository()


@pytest.fixture
def failing_task_repository() -> FailingTaskRepository:
    return FailingTaskRepository()


@pytest.fixture
def auth_repository() -> InMemoryAuthRepository:
    """Provides a fresh in-memory auth repository for each test."""
    return InMemoryAuthRepository()


@pytest.fixture
def task_repository() -> InMemoryTaskRepository:
    """Provides a fresh in-memory task repository for each test."""
    return InMemoryTaskRepository()


@pytest.fixture
def auth_service(auth_repository) -> AuthService:
    return AuthService(auth_repository)


@pytest.fixture
def task_service(task_repository) -> TaskService:
    return TaskService(task_repository)


@pytest.fixture
def container(memory_settings) -> ServiceContainer:
    return build_container(memory_settings)


@pytest.fixture
def client(container) -> Generator[TestClient, None, None]:
    """Test client for the auth and task routers over in-memory storage."""
    test_app = FastAPI()
    test_app.state.container = container
    register_error_handlers(test_app)
    test_app.include_router(auth_router)
    test_app.include_router(task_router)
    with TestClient(test_app) as test_client:
        yield test_client
