"""Async HTTP client for the Backendless REST API."""

import logging
from datetime import UTC, datetime
from typing import Any

import httpx

from taskflow.core.config import Settings, constants
from taskflow.core.errors import RepositoryError


logger = logging.getLogger(__name__)


def escape_where_value(value: str) -> str:
    """Escape a value for embedding in a Backendless ``where`` clause."""
    return value.replace("'", "''")


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a Backendless timestamp (epoch milliseconds or ISO string)."""
    if value is None:
        return None
    if isinstance(value, int | float):
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def error_payload(response: httpx.Response) -> tuple[int | None, str]:
    """Extract Backendless ``(code, message)`` from an error response."""
    try:
        data = response.json()
    except ValueError:
        return None, response.text or f"HTTP {response.status_code}"
    if not isinstance(data, dict):
        return None, str(data)
    return data.get("code"), data.get("message") or f"HTTP {response.status_code}"


class BackendlessClient:
    """Thin wrapper over one shared ``httpx.AsyncClient``.

    Also keeps the per-user session tokens returned by login, keyed by user id.
    """

    def __init__(
        self,
        *,
        base_url: str,
        app_id: str,
        api_key: str,
        timeout: float = constants.API_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "X-Backendless-Application-Id": app_id,
                "X-Backendless-REST-API-Key": api_key,
            },
        )
        self._user_tokens: dict[str, str] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackendlessClient":
        """Build a client from settings, failing fast on missing credentials."""
        return cls(
            base_url=settings.require_credential("backendless_url", "Backendless URL"),
            app_id=settings.require_credential("backendless_app_id", "Backendless application ID"),
            api_key=settings.require_credential("backendless_api_key", "Backendless REST API key"),
        )

    def set_user_token(self, user_id: str, token: str) -> None:
        self._user_tokens[user_id] = token

    def get_user_token(self, user_id: str) -> str | None:
        return self._user_tokens.get(user_id)

    def drop_user_token(self, user_id: str) -> None:
        self._user_tokens.pop(user_id, None)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        user_id: str | None = None,
    ) -> httpx.Response:
        """Send a request, attaching the user's session token when one is known.

        Non-2xx responses are returned as-is for the caller to interpret.

        Raises:
            RepositoryError: On transport failures (connection, timeout, protocol)
        """
        headers = {}
        token = self._user_tokens.get(user_id) if user_id else None
        if token:
            headers["user-token"] = token

        try:
            response = await self._http.request(method, path, json=json, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error("backendless_request_failed", extra={"method": method, "path": path, "error": str(e)})
            raise RepositoryError(f"Backendless request failed: {e}") from e

        logger.debug(
            "backendless_request",
            extra={"method": method, "path": path, "status": response.status_code},
        )
        return response

    async def aclose(self) -> None:
        await self._http.aclose()
