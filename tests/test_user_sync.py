"""
tests.test_user_sync

Backend user lookup and first-login provisioning.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from identity_orchestrator.clients.backend_api import BackendApiClient
from identity_orchestrator.services.user_sync import UserSyncService, transform_user
from identity_orchestrator.settings import Settings

PROFILE = {
    "sub": "auth0|user-1",
    "email": "ada@example.com",
    "email_verified": True,
    "given_name": "Ada",
    "family_name": "Lovelace",
    "picture": "https://cdn.example/ada.png",
    "locale": "en",
}


class FakeBackend:
    """In-memory `/users` API keyed by the bearer token's owner."""

    def __init__(self, users: dict[str, dict[str, Any]] | None = None, *, absent_status: int = 404) -> None:
        self.users = dict(users or {})
        self.absent_status = absent_status
        self.created: list[dict[str, Any]] = []
        self.bearer_tokens: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.bearer_tokens.append(request.headers.get("Authorization", ""))
        if request.method == "GET" and request.url.path.endswith("/users/me"):
            user = self.users.get("me")
            if user is None:
                return httpx.Response(self.absent_status, json={"error": "user not found"})
            return httpx.Response(200, json=user)
        if request.method == "POST" and request.url.path.endswith("/users"):
            payload = json.loads(request.content)
            self.created.append(payload)
            self.users["me"] = {"id": "u-1", **payload}
            return httpx.Response(201, json=self.users["me"])
        return httpx.Response(404)


def _service(settings: Settings, backend: FakeBackend) -> UserSyncService:
    http = httpx.AsyncClient(transport=httpx.MockTransport(backend))
    return UserSyncService(backend=BackendApiClient(settings=settings, http=http))


def test_transform_user_maps_profile_fields() -> None:
    assert transform_user(PROFILE) == {
        "auth0Id": "auth0|user-1",
        "email": "ada@example.com",
        "emailVerified": True,
        "firstName": "Ada",
        "lastName": "Lovelace",
        "picture": "https://cdn.example/ada.png",
        "locale": "en",
    }


def test_transform_user_falls_back_to_display_name() -> None:
    user = transform_user({"sub": "auth0|2", "name": "grace@example.com"})
    assert user["firstName"] == "grace@example.com"
    assert user["lastName"] == ""
    assert user["emailVerified"] is False


@pytest.mark.asyncio
async def test_existing_user_is_returned_with_roles(settings: Settings) -> None:
    backend = FakeBackend({"me": {"id": "u-1", "email": "ada@example.com"}})
    svc = _service(settings, backend)

    resolved = await svc.resolve(profile=PROFILE, roles=["admin"], access_token="AT")

    assert resolved.created is False
    assert resolved.identity == {"id": "u-1", "email": "ada@example.com", "roles": ["admin"]}
    assert backend.created == []
    assert backend.bearer_tokens == ["Bearer AT"]


@pytest.mark.asyncio
async def test_absent_user_is_created_once(settings: Settings) -> None:
    backend = FakeBackend()
    svc = _service(settings, backend)

    resolved = await svc.resolve(profile=PROFILE, roles=["member"], access_token="AT")

    assert resolved.created is True
    assert backend.created == [transform_user(PROFILE)]
    assert resolved.identity == {**transform_user(PROFILE), "roles": ["member"]}


@pytest.mark.asyncio
async def test_error_payload_on_200_is_an_absence_marker(settings: Settings) -> None:
    backend = FakeBackend(absent_status=200)
    svc = _service(settings, backend)

    lookup = await svc.fetch(access_token="AT")
    assert lookup.is_absent
    assert lookup.error == "user not found"


@pytest.mark.asyncio
async def test_prefetched_lookup_is_not_fetched_again(settings: Settings) -> None:
    backend = FakeBackend({"me": {"id": "u-1"}})
    svc = _service(settings, backend)

    lookup = await svc.fetch(access_token="AT")
    await svc.resolve(profile=PROFILE, roles=[], access_token="AT", lookup=lookup)

    assert len(backend.bearer_tokens) == 1


@pytest.mark.asyncio
async def test_backend_failure_propagates(settings: Settings) -> None:
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(503)))
    svc = UserSyncService(backend=BackendApiClient(settings=settings, http=http))

    with pytest.raises(httpx.HTTPStatusError):
        await svc.fetch(access_token="AT")
