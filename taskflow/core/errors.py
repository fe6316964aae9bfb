"""Error taxonomy and classification for taskflow."""

from enum import Enum

from pydantic import BaseModel

from taskflow.core.config import constants


class TaskflowError(Exception):
    """Base class for all application errors."""

    status_code: int = constants.HTTP_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskflowError):
    """Input failed a use-case precondition."""

    status_code = constants.HTTP_BAD_REQUEST


class NotFoundError(TaskflowError):
    """Referenced entity does not exist."""

    status_code = constants.HTTP_NOT_FOUND


class AuthenticationError(TaskflowError):
    """Credentials did not match."""

    status_code = constants.HTTP_UNAUTHORIZED


class ConflictError(TaskflowError):
    """Entity already exists (e.g. duplicate email on signup)."""

    status_code = constants.HTTP_CONFLICT


class RepositoryError(TaskflowError):
    """Underlying storage or transport failure.

    The original exception, when there is one, is chained as ``__cause__``.
    """

    status_code = constants.HTTP_BAD_GATEWAY


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    ERR_VALIDATION = "ERR_VALIDATION"
    ERR_NOT_FOUND = "ERR_NOT_FOUND"
    ERR_AUTHENTICATION_FAILED = "ERR_AUTHENTICATION_FAILED"
    ERR_USER_ALREADY_EXISTS = "ERR_USER_ALREADY_EXISTS"
    ERR_REPOSITORY = "ERR_REPOSITORY"
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an error and return a structured response with recovery suggestions.

    Validation messages are passed through verbatim since they are already
    written for the end user.

    Args:
        exception: The exception raised while handling a request

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if isinstance(exception, ValidationError):
        return ErrorResponse(
            code=ErrorCode.ERR_VALIDATION,
            message=exception.message,
            suggestion="Check the highlighted fields and try again.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, NotFoundError):
        return ErrorResponse(
            code=ErrorCode.ERR_NOT_FOUND,
            message=exception.message,
            suggestion="Refresh your task list; it may have been deleted.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, AuthenticationError):
        return ErrorResponse(
            code=ErrorCode.ERR_AUTHENTICATION_FAILED,
            message=exception.message,
            suggestion="Check your email and password, then log in again.",
            severity=ErrorSeverity.MEDIUM,
        )

    if isinstance(exception, ConflictError):
        return ErrorResponse(
            code=ErrorCode.ERR_USER_ALREADY_EXISTS,
            message=exception.message,
            suggestion="Log in instead, or sign up with a different email.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, RepositoryError):
        return ErrorResponse(
            code=ErrorCode.ERR_REPOSITORY,
            message="The storage service is unavailable.",
            suggestion="Please try again in a moment.",
            severity=ErrorSeverity.HIGH,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )
