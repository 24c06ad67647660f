"""
identity_orchestrator.clients.backend_api

HTTP client boundary for the application backend's user API.

Responsibilities:
- Attach the Provider B access token as a bearer credential.
- Fetch the current user, translating "not found" into an absence marker.
- Create a user record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from identity_orchestrator.settings import Settings


@dataclass(frozen=True, slots=True)
class UserLookup:
    """
    Result of `GET /users/me`. `error` set means the backend has no record yet.
    """

    record: dict[str, Any] | None = None
    error: str | None = None

    @property
    def is_absent(self) -> bool:
        return self.record is None


class BackendApiClient:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    def _url(self, path: str) -> str:
        return f"{self._settings.backend_api_url.rstrip('/')}{path}"

    def _authz(self, access_token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {access_token}"}

    async def get_current_user(self, *, access_token: str) -> UserLookup:
        r = await self._http.get(
            self._url("/users/me"),
            headers=self._authz(access_token),
            timeout=self._settings.http_timeout_seconds,
        )
        if r.status_code == 404:
            return UserLookup(error=_error_message(r) or "not found")
        r.raise_for_status()

        body = r.json()
        if isinstance(body, dict) and body.get("error"):
            return UserLookup(error=str(body["error"]))
        return UserLookup(record=dict(body))

    async def create_user(self, *, access_token: str, payload: dict[str, Any]) -> dict[str, Any]:
        r = await self._http.post(
            self._url("/users"),
            headers=self._authz(access_token),
            json=payload,
            timeout=self._settings.http_timeout_seconds,
        )
        r.raise_for_status()
        return r.json() if r.content else {}


def _error_message(r: httpx.Response) -> str | None:
    try:
        body = r.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None


# --- Module Notes -----------------------------------------------------------
# Only "not found" is an absence marker; any other non-2xx is a transient failure
# and propagates as `httpx.HTTPStatusError`.
