"""
identity_orchestrator.api.app

FastAPI app factory for the local page host.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create and dispose shared infrastructure (client-state DB, HTTP client, provider clients).
- Provide the single composition root for the authentication collaborators.
"""

from __future__ import annotations

import httpx
from fastapi import FastAPI

from identity_orchestrator.api.routers.health import router as health_router
from identity_orchestrator.api.routers.pages import router as pages_router
from identity_orchestrator.auth.credential_store import CredentialStore
from identity_orchestrator.auth.oauth_code import OAuthCodeClient
from identity_orchestrator.auth.oidc import OidcSessionClient
from identity_orchestrator.clients.backend_api import BackendApiClient
from identity_orchestrator.clients.cognito_federation import IdentityFederationClient
from identity_orchestrator.db.init_db import init_db
from identity_orchestrator.db.session import create_engine, create_sessionmaker
from identity_orchestrator.observability.logging import configure_logging, get_logger
from identity_orchestrator.observability.middleware import PageLoadContextMiddleware
from identity_orchestrator.services.auth_service import AuthDependencies
from identity_orchestrator.services.user_sync import UserSyncService
from identity_orchestrator.settings import Settings
from identity_orchestrator.storage.client_storage import ClientStorage

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    app = FastAPI(
        title="Identity Orchestrator",
        version="0.1.0",
        docs_url=None if settings.env == "prod" else "/docs",
    )
    app.state.settings = settings

    app.add_middleware(PageLoadContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(pages_router, tags=["pages"])

    @app.on_event("startup")
    async def _startup() -> None:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        await init_db(engine)

        storage = ClientStorage(app.state.sessionmaker)
        http = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        oidc = OidcSessionClient(settings=settings, storage=storage)
        app.state.http = http
        app.state.oidc = oidc
        app.state.auth = AuthDependencies(
            settings=settings,
            oauth=OAuthCodeClient(settings=settings, http=http, store=CredentialStore(storage)),
            oidc=oidc,
            federation=IdentityFederationClient(),
            user_sync=UserSyncService(backend=BackendApiClient(settings=settings, http=http)),
        )

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        for name in ("oidc", "http"):
            client = getattr(app.state, name, None)
            if client is not None:
                await client.aclose()
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()
        log.info("shutdown")

    return app


# --- Module Notes -----------------------------------------------------------
# The Provider B client is configured once here and reused by every page load.
