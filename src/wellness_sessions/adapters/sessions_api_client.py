"""HTTP client for the wellness sessions API."""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

_logger = logging.getLogger(__name__)


class SessionsApi(Protocol):
    """Interface for the sessions API as seen by a client."""

    async def save_draft(self, payload: dict[str, object]) -> dict[str, object]:
        """Save a draft and return the API response body."""


@dataclass
class HttpxSessionsApiClient(SessionsApi):
    """HTTPX-backed client that attaches the stored bearer token."""

    base_url: str
    http_client: httpx.AsyncClient
    token: str | None = None

    @classmethod
    def create(
        cls, base_url: str, token: str | None = None
    ) -> "HttpxSessionsApiClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(
                headers={"Content-Type": "application/json"}, timeout=10
            ),
            token=token,
        )

    async def get_public_sessions(self) -> list[dict[str, object]]:
        """Return all published sessions."""
        return await self._request("GET", "/sessions")

    async def get_public_session(self, session_id: str) -> dict[str, object]:
        """Return a single published session."""
        return await self._request("GET", f"/sessions/{session_id}")

    async def get_user_sessions(self) -> list[dict[str, object]]:
        """Return the signed-in user's sessions."""
        return await self._request("GET", "/my-sessions")

    async def get_user_session(self, session_id: str) -> dict[str, object]:
        """Return one of the signed-in user's sessions."""
        return await self._request("GET", f"/my-sessions/{session_id}")

    async def save_draft(self, payload: dict[str, object]) -> dict[str, object]:
        """Save a draft; returns ``{"message", "session"}``."""
        return await self._request("POST", "/my-sessions/save-draft", json=payload)

    async def publish_session(self, payload: dict[str, object]) -> dict[str, object]:
        """Publish a session; returns ``{"message", "session"}``."""
        return await self._request("POST", "/my-sessions/publish", json=payload)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self, method: str, path: str, json: dict[str, object] | None = None
    ) -> Any:
        headers: dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = await self.http_client.request(
            method, f"{self.base_url}{path}", json=json, headers=headers
        )
        if response.status_code == httpx.codes.UNAUTHORIZED:
            _logger.warning("API rejected credentials, clearing token: %s", path)
            self.token = None
        response.raise_for_status()
        return response.json()
