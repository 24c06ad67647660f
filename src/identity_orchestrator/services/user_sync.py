"""
identity_orchestrator.services.user_sync

Application user resolution.

Responsibilities:
- Fetch the backend's record for the signed-in subject.
- Provision a record from the Provider B profile when the backend has none.
- Merge the roles claim into whichever record wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from identity_orchestrator.clients.backend_api import BackendApiClient, UserLookup
from identity_orchestrator.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedUser:
    user: dict[str, Any]
    roles: list[str]
    created: bool

    @property
    def identity(self) -> dict[str, Any]:
        return {**self.user, "roles": list(self.roles)}


def transform_user(profile: dict[str, Any]) -> dict[str, Any]:
    """Map a Provider B profile onto the backend's new-user payload."""

    return {
        "auth0Id": profile["sub"],
        "email": profile.get("email", ""),
        "emailVerified": bool(profile.get("email_verified", False)),
        "firstName": profile.get("given_name") or profile.get("name") or profile.get("nickname", ""),
        "lastName": profile.get("family_name", ""),
        "picture": profile.get("picture", ""),
        "locale": profile.get("locale", ""),
    }


class UserSyncService:
    def __init__(self, *, backend: BackendApiClient) -> None:
        self._backend = backend

    async def fetch(self, *, access_token: str) -> UserLookup:
        return await self._backend.get_current_user(access_token=access_token)

    async def resolve(
        self,
        *,
        profile: dict[str, Any],
        roles: list[str],
        access_token: str,
        lookup: UserLookup | None = None,
    ) -> ResolvedUser:
        """
        Exactly one path runs: the fetched record is returned as-is, or a new
        record is created. The create call is awaited before returning.
        """

        if lookup is None:
            lookup = await self.fetch(access_token=access_token)

        if not lookup.is_absent:
            return ResolvedUser(user=dict(lookup.record or {}), roles=roles, created=False)

        new_user = transform_user(profile)
        log.info("user_provisioning", subject=new_user["auth0Id"], reason=lookup.error)
        await self._backend.create_user(access_token=access_token, payload=new_user)
        return ResolvedUser(user=new_user, roles=roles, created=True)


# --- Module Notes -----------------------------------------------------------
# Re-running a cycle is safe: once created, the next fetch returns the record and
# the create branch is never reached again.
