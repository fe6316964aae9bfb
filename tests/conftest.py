"""Pytest configuration and shared fixtures."""

import logging

import pytest

from taskflow.core.config import RepositoryBackend, Settings


logger = logging.getLogger(__name__)


@pytest.fixture
def memory_settings() -> Settings:
    """Settings wired to the in-memory backend, independent of any local .env file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        repository_backend=RepositoryBackend.MEMORY,
        secret_key="test_secret_key",
        logfire_token=None,
    )


@pytest.fixture
def backendless_settings() -> Settings:
    """Settings wired to a fake Backendless endpoint."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        repository_backend=RepositoryBackend.BACKENDLESS,
        backendless_url="https://backendless.test",
        backendless_app_id="test-app-id",
        backendless_api_key="test-api-key",
        secret_key="test_secret_key",
    )
