"""
identity_orchestrator.auth.models

Identity value types produced by the provider clients.

Responsibilities:
- `IdentityClaims`: decoded Provider B id token (read-only).
- `AuthDetails`: claims + access token + raw profile for one session resolution.
- `OAuthToken`: cached Provider B token set.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class IdentityClaims:
    subject: str
    raw: str = field(repr=False)
    expires_at: int
    values: dict[str, Any] = field(default_factory=dict, repr=False)

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def roles(self, claim_key: str) -> list[str]:
        """Roles under a namespaced claim key; absent or malformed claims yield no roles."""
        raw_roles = self.values.get(claim_key, [])
        if isinstance(raw_roles, str):
            return [raw_roles]
        if not isinstance(raw_roles, list):
            return []
        return [str(r) for r in raw_roles]


@dataclass(frozen=True, slots=True)
class AuthDetails:
    claims: IdentityClaims
    access_token: str = field(repr=False)
    user: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class OAuthToken:
    access_token: str = field(repr=False)
    id_token: str = field(repr=False)
    expires_at: int
    refresh_token: str | None = field(default=None, repr=False)
    id_token_expires_at: int | None = None

    def is_expired(self, *, leeway: int = 0) -> bool:
        """Expired once either the access token or the id token is."""
        expires_at = self.expires_at
        if self.id_token_expires_at is not None:
            expires_at = min(expires_at, self.id_token_expires_at)
        return expires_at <= int(time.time()) + leeway

    def to_dict(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "id_token": self.id_token,
            "expires_at": self.expires_at,
            "refresh_token": self.refresh_token,
            "id_token_expires_at": self.id_token_expires_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OAuthToken:
        return cls(
            access_token=str(data["access_token"]),
            id_token=str(data["id_token"]),
            expires_at=int(data["expires_at"]),
            refresh_token=data.get("refresh_token"),
            id_token_expires_at=data.get("id_token_expires_at"),
        )


# --- Module Notes -----------------------------------------------------------
# Token-bearing fields are excluded from repr so logging a model never leaks credentials.
