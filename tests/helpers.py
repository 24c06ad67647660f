"""
tests.helpers

Test-only builders shared across modules.
"""

from __future__ import annotations

import time
from typing import Any

import jwt

from identity_orchestrator.settings import Settings

TEST_SIGNING_KEY = "test-signing-key-not-a-secret-0123456789"
ROLES_CLAIM = "https://app.test/claims/roles"


def make_id_token(
    settings: Settings,
    *,
    sub: str = "auth0|user-1",
    nonce: str | None = None,
    expires_in: int = 3600,
    **claims: Any,
) -> str:
    now = int(time.time())
    payload: dict[str, Any] = {
        "iss": settings.oidc_issuer,
        "aud": settings.oidc_client_id,
        "sub": sub,
        "iat": now,
        "exp": now + expires_in,
        **claims,
    }
    if nonce is not None:
        payload["nonce"] = nonce
    return jwt.encode(payload, TEST_SIGNING_KEY, algorithm="HS256")
