"""taskflow - personal task manager API."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from taskflow.core.config import RepositoryBackend, Settings, settings
from taskflow.core.logging import configure_logfire, instrument_fastapi
from taskflow.interface.auth_router import router as auth_router
from taskflow.interface.error_handlers import register_error_handlers
from taskflow.interface.task_router import router as task_router
from taskflow.services.container import build_container


logger = logging.getLogger(__name__)


def validate_startup_configuration(app_settings: Settings) -> None:
    """Check that the selected backend has what it needs.

    Raises:
        ValueError: If required credentials are missing
    """
    logger.info("startup_validation_begin", extra={"backend": str(app_settings.repository_backend)})

    if app_settings.repository_backend == RepositoryBackend.BACKENDLESS:
        app_settings.require_credential("backendless_url", "Backendless URL")
        app_settings.require_credential("backendless_app_id", "Backendless application ID")
        app_settings.require_credential("backendless_api_key", "Backendless REST API key")

    if app_settings.is_production and app_settings.secret_key == Settings.model_fields["secret_key"].default:
        raise ValueError("SECRET_KEY must be changed from its default in production.")

    logger.info("startup_validation_complete", extra={"status": "ok"})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: validate config, wire services, release them on shutdown."""
    configure_logfire()

    try:
        validate_startup_configuration(settings)
    except ValueError as e:
        logger.error("startup_validation_failed", extra={"error": str(e)})
        print(f"\n❌ Startup validation failed: {e}\n", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    container = build_container(settings)
    app.state.container = container
    logger.info("Services initialized")
    yield
    await container.aclose()


app = FastAPI(
    title="taskflow",
    description="Personal task manager",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

register_error_handlers(app)
app.include_router(auth_router)
app.include_router(task_router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)
