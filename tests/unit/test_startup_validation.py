"""Tests for startup validation and service wiring."""

import pytest
from fastapi.testclient import TestClient

from taskflow.core.config import RepositoryBackend, Settings
from taskflow.main import app, validate_startup_configuration
from taskflow.repositories.backendless import BackendlessAuthRepository, BackendlessTaskRepository
from taskflow.repositories.memory import InMemoryAuthRepository, InMemoryTaskRepository
from taskflow.services.container import build_container


def test_memory_backend_needs_no_credentials(memory_settings) -> None:
    validate_startup_configuration(memory_settings)


def test_backendless_backend_passes_with_credentials(backendless_settings) -> None:
    validate_startup_configuration(backendless_settings)


@pytest.mark.parametrize("missing", ["backendless_url", "backendless_app_id", "backendless_api_key"])
def test_backendless_backend_fails_without_credential(backendless_settings, missing) -> None:
    settings = backendless_settings.model_copy(update={missing: None})

    with pytest.raises(ValueError, match=missing.upper()):
        validate_startup_configuration(settings)


def test_production_requires_custom_secret_key() -> None:
    settings = Settings(_env_file=None, is_production=True)  # type: ignore[call-arg]

    with pytest.raises(ValueError, match="SECRET_KEY"):
        validate_startup_configuration(settings)


def test_build_container_memory(memory_settings) -> None:
    container = build_container(memory_settings)

    assert isinstance(container.auth_service._repository, InMemoryAuthRepository)
    assert isinstance(container.task_service._repository, InMemoryTaskRepository)
    assert container.backendless_client is None


async def test_build_container_backendless_shares_one_client(backendless_settings) -> None:
    container = build_container(backendless_settings)

    auth_repository = container.auth_service._repository
    task_repository = container.task_service._repository
    assert isinstance(auth_repository, BackendlessAuthRepository)
    assert isinstance(task_repository, BackendlessTaskRepository)
    assert auth_repository._client is task_repository._client is container.backendless_client

    await container.aclose()


def test_build_container_backendless_without_credentials_fails() -> None:
    settings = Settings(_env_file=None, repository_backend=RepositoryBackend.BACKENDLESS)  # type: ignore[call-arg]

    with pytest.raises(ValueError, match="credential not configured"):
        build_container(settings)


def test_containers_are_independent(memory_settings) -> None:
    first = build_container(memory_settings)
    second = build_container(memory_settings)

    assert first.task_service._repository is not second.task_service._repository


def test_app_lifespan_wires_container_and_health() -> None:
    with TestClient(app) as client:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert app.state.container.task_service is not None
