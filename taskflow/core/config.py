"""Configuration management for taskflow."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RepositoryBackend(StrEnum):
    """Storage backend the repositories are wired to."""

    MEMORY = "memory"
    BACKENDLESS = "backendless"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage Configuration
    repository_backend: RepositoryBackend = Field(
        default=RepositoryBackend.MEMORY, description="Which repository implementation to use"
    )

    # Backendless Configuration
    backendless_url: str | None = Field(
        default=None, description="Backendless API base URL (e.g., https://api.backendless.com/APP_ID/API_KEY)"
    )
    backendless_app_id: str | None = Field(default=None, description="Backendless application ID")
    backendless_api_key: str | None = Field(default=None, description="Backendless REST API key")

    # Web Session Configuration
    secret_key: str = Field(default="dev-secret-change-me", description="Secret used to sign session cookies")
    is_production: bool = Field(default=False, description="Enable secure cookies and production logging")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


# Application Constants
class Constants:
    """Application-wide constants."""

    # Task Validation
    MAX_DESCRIPTION_LENGTH: int = 500

    # Auth Validation
    MIN_PASSWORD_LENGTH: int = 6

    # API Configuration
    API_TIMEOUT_SECONDS: int = 30

    # HTTP Status Codes
    HTTP_BAD_REQUEST: int = 400
    HTTP_UNAUTHORIZED: int = 401
    HTTP_NOT_FOUND: int = 404
    HTTP_CONFLICT: int = 409
    HTTP_SERVER_ERROR: int = 500
    HTTP_BAD_GATEWAY: int = 502

    # Session Cookie
    SESSION_COOKIE_NAME: str = "taskflow_session"
    SESSION_MAX_AGE_SECONDS: int = 7 * 24 * 3600


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
