"""
identity_orchestrator.auth.credential_store

Provider A bearer-token persistence.

Responsibilities:
- Store one opaque token under a fixed client-storage key, overwriting any prior value.
- Return it (or None) across process restarts.
"""

from __future__ import annotations

from identity_orchestrator.storage.client_storage import ClientStorage

TOKEN_KEY = "oauth.access_token"


class CredentialStore:
    """
    No TTL and no encryption; callers treat the value as sensitive.
    """

    def __init__(self, storage: ClientStorage, *, key: str = TOKEN_KEY) -> None:
        self._storage = storage
        self._key = key

    async def set(self, token: str) -> None:
        await self._storage.set_item(self._key, token)

    async def get(self) -> str | None:
        return await self._storage.get_item(self._key)


# --- Module Notes -----------------------------------------------------------
# Validity is never tracked here; `OAuthCodeClient.verify_session` probes it.
