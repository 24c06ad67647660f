"""
tests.test_smoke

Minimal smoke tests to validate the page host can boot and serve core endpoints.

Responsibilities:
- Ensure the FastAPI app starts and the client-state DB readiness probe works in test mode.
- Ensure page loads render each UI state (redirect, error, authenticated).
"""

from __future__ import annotations

import httpx
import pytest

from identity_orchestrator.api.app import create_app
from identity_orchestrator.api.deps import auth_deps
from identity_orchestrator.settings import Settings
from tests.test_auth_orchestrator import LOGIN_URL, FakeOidc, _cognito, _deps


@pytest.mark.asyncio
async def test_health_endpoints(settings: Settings) -> None:
    app = create_app(settings=settings)

    # httpx 0.28 ASGITransport does not manage lifespan automatically; do it explicitly.
    await app.router.startup()
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.get("/healthz")
            assert r.status_code == 200
            assert r.json()["status"] == "ok"
            assert r.headers["x-request-id"]

            r = await client.get("/readyz")
            assert r.status_code == 200
            assert r.json()["status"] == "ready"

            r = await client.get("/login/oauth")
            assert r.status_code == 302
            assert r.headers["location"].startswith("https://provider-a.test/oauth/authorize?")
            assert "client_id=a-client" in r.headers["location"]
    finally:
        await app.router.shutdown()


@pytest.mark.asyncio
async def test_page_load_renders_each_outcome(settings: Settings) -> None:
    app = create_app(settings=settings)
    fakes = {"oidc": FakeOidc()}
    app.dependency_overrides[auth_deps] = lambda: _deps(settings, oidc=fakes["oidc"])

    await app.router.startup()
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.get("/projects")
            assert r.status_code == 200
            body = r.json()
            assert body["status"] == "AUTHENTICATED"
            assert body["roles"] == ["admin"]
            assert body["storage"]["bucket"] == "user-uploads"
            assert body["storage"]["identity_id"] == "us-east-1:identity-1"

            fakes["oidc"] = FakeOidc(active=False)
            r = await client.get("/projects")
            assert r.status_code == 302
            assert r.headers["location"] == LOGIN_URL

            fakes["oidc"] = FakeOidc(callback_error=RuntimeError("boom"))
            r = await client.get("/?code=abc&state=xyz")
            assert r.status_code == 500
            assert "Something went Wrong!" in r.text
    finally:
        await app.router.shutdown()


@pytest.mark.asyncio
async def test_static_asset_requests_skip_the_auth_cycle(settings: Settings) -> None:
    app = create_app(settings=settings)
    oidc, cognito = FakeOidc(active=False), _cognito()
    app.dependency_overrides[auth_deps] = lambda: _deps(settings, oidc=oidc, cognito=cognito)

    await app.router.startup()
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            for path in ("/favicon.ico", "/static/app.JS", "/robots.txt"):
                r = await client.get(path)
                assert r.status_code == 404
    finally:
        await app.router.shutdown()

    assert oidc.logins == []
    assert oidc.callbacks == []
    cognito.get_id.assert_not_called()


# --- Module Notes -----------------------------------------------------------
# Provider fakes come from `tests.test_auth_orchestrator`; only the HTTP rendering is under test here.
