"""
identity_orchestrator.api.routers.pages

Page-load endpoints.

Responsibilities:
- Provider A login redirect and session probe.
- Catch-all page route: one authentication cycle per load, rendered by UI state.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import PurePosixPath
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel, Field
from starlette.status import HTTP_204_NO_CONTENT, HTTP_302_FOUND, HTTP_404_NOT_FOUND, HTTP_500_INTERNAL_SERVER_ERROR

from identity_orchestrator.api.deps import auth_deps, oauth_client
from identity_orchestrator.auth.oauth_code import OAuthCodeClient
from identity_orchestrator.navigation import PageNavigator
from identity_orchestrator.orchestrator.outcome import AuthOutcome, UiState
from identity_orchestrator.services.auth_service import AuthDependencies, AuthOrchestrator

router = APIRouter()

# Asset requests never start an authentication cycle.
STATIC_SUFFIXES = frozenset(
    {
        ".ico", ".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp",
        ".css", ".js", ".map", ".txt", ".webmanifest", ".woff", ".woff2",
    }
)


class StorageSummary(BaseModel):
    bucket: str
    region: str
    identity_id: str
    expiration: datetime | None = None


class SessionResponse(BaseModel):
    status: str
    user: dict[str, Any]
    roles: list[str] = Field(default_factory=list)
    location: str | None = None
    storage: StorageSummary


class OAuthSessionResponse(BaseModel):
    valid: bool


@router.get("/login/oauth")
async def oauth_login(oauth: OAuthCodeClient = Depends(oauth_client)) -> RedirectResponse:
    navigator = PageNavigator()
    oauth.initiate_login(navigator)
    return RedirectResponse(navigator.assigned_url or "/", status_code=HTTP_302_FOUND)


@router.get("/oauth/session", response_model=OAuthSessionResponse)
async def oauth_session(oauth: OAuthCodeClient = Depends(oauth_client)) -> OAuthSessionResponse:
    return OAuthSessionResponse(valid=await oauth.verify_session())


@router.get("/{path:path}", response_model=None)
async def page(
    request: Request,
    path: str,
    deps: AuthDependencies = Depends(auth_deps),
) -> Response:
    if is_static_asset(path):
        return Response(status_code=HTTP_404_NOT_FOUND)

    orchestrator = AuthOrchestrator(deps=deps)
    outcome = await orchestrator.authenticate(str(request.url))
    return render(outcome)


def is_static_asset(path: str) -> bool:
    return PurePosixPath(path).suffix.lower() in STATIC_SUFFIXES


def render(outcome: AuthOutcome) -> Response:
    if outcome.redirect_url:
        return RedirectResponse(outcome.redirect_url, status_code=HTTP_302_FOUND)
    if outcome.state is UiState.error:
        return HTMLResponse("<h1>Something went Wrong!</h1>", status_code=HTTP_500_INTERNAL_SERVER_ERROR)
    if outcome.session is None:
        return Response(status_code=HTTP_204_NO_CONTENT)

    session = outcome.session
    creds = session.storage.credentials
    body = SessionResponse(
        status=outcome.state.value,
        user=session.user,
        roles=session.roles,
        location=outcome.location,
        storage=StorageSummary(
            bucket=session.storage.bucket,
            region=session.storage.region,
            identity_id=creds.identity_id,
            expiration=creds.expiration,
        ),
    )
    return Response(content=body.model_dump_json(), media_type="application/json")


# --- Module Notes -----------------------------------------------------------
# Registered last in `create_app` so the catch-all never shadows health or login routes.
