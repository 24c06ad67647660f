"""
tests.conftest

Shared fixtures for unit and integration tests.

Responsibilities:
- Settings pointed at a throwaway client-state DB and fake provider hosts.
- A ready `ClientStorage`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from identity_orchestrator.db.init_db import init_db
from identity_orchestrator.db.session import create_engine, create_sessionmaker
from identity_orchestrator.settings import Settings
from identity_orchestrator.storage.client_storage import ClientStorage
from tests.helpers import ROLES_CLAIM


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'client_state.db'}",
        redirect_uri="http://localhost:3000/",
        oauth_authorize_url="https://provider-a.test/oauth/authorize",
        oauth_token_url="https://provider-a.test/oauth/token",
        oauth_api_base_url="https://provider-a.test/api",
        oauth_client_id="a-client",
        oauth_client_secret="a-secret",
        oidc_domain="tenant.provider-b.test",
        oidc_audience="https://api.app.test",
        oidc_client_id="b-client",
        oidc_roles_claim=ROLES_CLAIM,
        backend_api_url="https://backend.test/api/v1",
        cognito_region="us-east-1",
        cognito_identity_pool_id="us-east-1:pool",
        s3_bucket="user-uploads",
        s3_bucket_region="us-west-2",
    )


@pytest_asyncio.fixture
async def storage(settings: Settings) -> AsyncIterator[ClientStorage]:
    engine = create_engine(settings)
    await init_db(engine)
    try:
        yield ClientStorage(create_sessionmaker(engine))
    finally:
        await engine.dispose()


# --- Module Notes -----------------------------------------------------------
# Every test gets its own SQLite file under tmp_path, so client storage never leaks between tests.
