"""Account endpoints: signup, login, logout and current user."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import BaseModel

from taskflow.domain.user import User
from taskflow.interface.session import (
    clear_session_cookie,
    get_auth_service,
    read_session_user_id,
    require_user_id,
    set_session_cookie,
)
from taskflow.services.auth_service import AuthService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class SignupRequest(BaseModel):
    """Signup form. Missing fields arrive empty so the service reports them."""

    email: str = ""
    password: str = ""
    name: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=User)
async def signup(
    body: SignupRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Create an account and start a session for it."""
    user = await auth_service.signup(body.email, body.password, body.name)
    set_session_cookie(response, user.id)
    return user


@router.post("/login", response_model=User)
async def login(
    body: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Check credentials and start a session."""
    user = await auth_service.login(body.email, body.password)
    set_session_cookie(response, user.id)
    return user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request, auth_service: AuthService = Depends(get_auth_service)) -> Response:
    """End the session. Safe to call without one."""
    user_id = read_session_user_id(request)
    if user_id:
        await auth_service.logout(user_id)

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_session_cookie(response)
    return response


@router.get("/me", response_model=User)
async def me(
    user_id: str = Depends(require_user_id),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Return the logged-in user, or 401 when the session no longer maps to one."""
    user = await auth_service.get_current_user(user_id)
    if user is None:
        logger.info("session_user_missing", extra={"user_id": user_id})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user
