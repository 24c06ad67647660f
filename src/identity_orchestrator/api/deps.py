"""
identity_orchestrator.api.deps

FastAPI dependency wiring for the page host.

Responsibilities:
- Provide DB sessions and the shared auth collaborators from app.state.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity_orchestrator.auth.oauth_code import OAuthCodeClient
from identity_orchestrator.services.auth_service import AuthDependencies


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created on app startup in `identity_orchestrator.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


def auth_deps(request: Request) -> AuthDependencies:
    return request.app.state.auth  # type: ignore[attr-defined]


def oauth_client(deps: AuthDependencies = Depends(auth_deps)) -> OAuthCodeClient:
    return deps.oauth


# --- Module Notes -----------------------------------------------------------
# Tests override `auth_deps` to swap in fake providers without touching startup wiring.
