"""Auth service: signup/login input rules on top of an auth repository."""

import logging

from taskflow.core.config import constants
from taskflow.core.errors import ValidationError
from taskflow.core.logging import log_with_user_context, span
from taskflow.domain.repositories import AuthRepository
from taskflow.domain.user import AuthCredentials, User


logger = logging.getLogger(__name__)


class AuthService:
    """Validates account input and delegates to the injected repository."""

    def __init__(self, repository: AuthRepository) -> None:
        self._repository = repository

    async def signup(self, email: str, password: str, name: str) -> User:
        """Register a new account.

        Args:
            email: Login email
            password: Plain password, at least 6 characters
            name: Display name

        Returns:
            The created user

        Raises:
            ValidationError: If a field is missing or the password is too short
            ConflictError: If the repository already has this email
            RepositoryError: If the storage backend fails
        """
        with span("auth_service.signup"):
            if not email or not password or not name:
                raise ValidationError("Email, password, and name are required")
            if len(password) < constants.MIN_PASSWORD_LENGTH:
                raise ValidationError(f"Password must be at least {constants.MIN_PASSWORD_LENGTH} characters")

            user = await self._repository.signup(AuthCredentials(email=email, password=password), name)
            log_with_user_context(logger, "info", "User signed up", user_id=user.id)
            return user

    async def login(self, email: str, password: str) -> User:
        """Authenticate an existing account.

        Raises:
            ValidationError: If email or password is missing
            AuthenticationError: If the credentials do not match
        """
        with span("auth_service.login"):
            if not email or not password:
                raise ValidationError("Email and password are required")

            user = await self._repository.login(AuthCredentials(email=email, password=password))
            log_with_user_context(logger, "info", "User logged in", user_id=user.id)
            return user

    async def get_current_user(self, user_id: str) -> User | None:
        """Look up the user behind a session. None means no such user."""
        with span("auth_service.get_current_user"):
            if not user_id:
                raise ValidationError("User ID is required")
            return await self._repository.get_current_user(user_id)

    async def logout(self, user_id: str) -> None:
        """Drop any backend session held for the user."""
        with span("auth_service.logout"):
            if not user_id:
                raise ValidationError("User ID is required")
            await self._repository.logout(user_id)
            log_with_user_context(logger, "info", "User logged out", user_id=user_id)
