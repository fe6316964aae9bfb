"""Signed session cookie and request dependencies."""

import logging

from fastapi import Depends, HTTPException, Request, Response, status
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from taskflow.core.config import constants, settings
from taskflow.services.auth_service import AuthService
from taskflow.services.container import ServiceContainer
from taskflow.services.task_service import TaskService


logger = logging.getLogger(__name__)

serializer = URLSafeTimedSerializer(str(settings.secret_key), salt="taskflow-session")


def set_session_cookie(response: Response, user_id: str) -> None:
    """Attach a signed session cookie identifying ``user_id``."""
    response.set_cookie(
        key=constants.SESSION_COOKIE_NAME,
        value=serializer.dumps({"user_id": user_id}),
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=constants.SESSION_MAX_AGE_SECONDS,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=constants.SESSION_COOKIE_NAME, httponly=True, samesite="lax")


def read_session_user_id(request: Request) -> str | None:
    """Return the user id from a valid session cookie, or None."""
    session_token = request.cookies.get(constants.SESSION_COOKIE_NAME)
    if not session_token:
        return None

    try:
        session_data = serializer.loads(session_token, max_age=constants.SESSION_MAX_AGE_SECONDS)
    except (BadSignature, SignatureExpired):
        logger.warning("session_tampered_or_expired", extra={"path": request.url.path})
        return None

    user_id = session_data.get("user_id") if isinstance(session_data, dict) else None
    return user_id or None


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_auth_service(container: ServiceContainer = Depends(get_container)) -> AuthService:
    return container.auth_service


def get_task_service(container: ServiceContainer = Depends(get_container)) -> TaskService:
    return container.task_service


async def require_user_id(request: Request) -> str:
    """Dependency that rejects requests without a valid session."""
    user_id = read_session_user_id(request)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user_id
