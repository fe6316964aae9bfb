"""Composition root: builds repositories and services once per application."""

import logging
from dataclasses import dataclass, field

from taskflow.core.backendless_client import BackendlessClient
from taskflow.core.config import RepositoryBackend, Settings
from taskflow.domain.repositories import AuthRepository, TaskRepository
from taskflow.repositories.backendless import BackendlessAuthRepository, BackendlessTaskRepository
from taskflow.repositories.memory import InMemoryAuthRepository, InMemoryTaskRepository
from taskflow.services.auth_service import AuthService
from taskflow.services.task_service import TaskService


logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Wired application services, passed by reference to request handlers."""

    auth_service: AuthService
    task_service: TaskService
    backendless_client: BackendlessClient | None = field(default=None)

    async def aclose(self) -> None:
        """Release network resources held by the repositories."""
        if self.backendless_client is not None:
            await self.backendless_client.aclose()


def build_container(settings: Settings) -> ServiceContainer:
    """Construct repositories for the configured backend and wrap them in services.

    Raises:
        ValueError: If the Backendless backend is selected without credentials
    """
    client: BackendlessClient | None = None
    auth_repository: AuthRepository
    task_repository: TaskRepository

    if settings.repository_backend == RepositoryBackend.BACKENDLESS:
        client = BackendlessClient.from_settings(settings)
        auth_repository = BackendlessAuthRepository(client)
        task_repository = BackendlessTaskRepository(client)
    else:
        auth_repository = InMemoryAuthRepository()
        task_repository = InMemoryTaskRepository()

    logger.info("Service container built", extra={"backend": str(settings.repository_backend)})
    return ServiceContainer(
        auth_service=AuthService(auth_repository),
        task_service=TaskService(task_repository),
        backendless_client=client,
    )
