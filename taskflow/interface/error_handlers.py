"""Translate application errors into JSON HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from taskflow.core.errors import RepositoryError, TaskflowError, ValidationError, classify_error_with_response


logger = logging.getLogger(__name__)


async def handle_taskflow_error(request: Request, exc: TaskflowError) -> JSONResponse:
    """Render a TaskflowError as ``{"error": ErrorResponse}`` with its status code."""
    context = {"path": request.url.path, "error_type": type(exc).__name__, "error": exc.message}
    if isinstance(exc, RepositoryError):
        logger.error("repository_failure", extra={**context, "cause": repr(exc.__cause__)})
    elif isinstance(exc, ValidationError):
        logger.info("request_rejected", extra=context)
    else:
        logger.warning("request_failed", extra=context)

    error = classify_error_with_response(exc)
    return JSONResponse(status_code=exc.status_code, content={"error": error.model_dump(mode="json")})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskflowError, handle_taskflow_error)  # type: ignore[arg-type]
