"""
identity_orchestrator.orchestrator.outcome

Values produced by one authentication cycle.

Responsibilities:
- `UiState`: what the page should render.
- `SessionAction`s: identity updates for consumers (authenticate user, fetch avatar).
- `SessionContext`: the resolved identity, passed explicitly instead of global state.
- `AuthOutcome`: everything the page host needs to respond.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from identity_orchestrator.auth.models import IdentityClaims
from identity_orchestrator.clients.cognito_federation import FederatedStorage


class UiState(enum.StrEnum):
    init = "INIT"
    loading = "LOADING"
    authenticated = "AUTHENTICATED"
    anonymous = "ANONYMOUS"
    error = "ERROR"


@dataclass(frozen=True, slots=True)
class AuthenticateUser:
    user: dict[str, Any]


@dataclass(frozen=True, slots=True)
class FetchImage:
    user_id: str


SessionAction = AuthenticateUser | FetchImage


@dataclass(frozen=True, slots=True)
class SessionContext:
    user: dict[str, Any]
    roles: list[str]
    claims: IdentityClaims
    storage: FederatedStorage
    created: bool = False

    @property
    def subject(self) -> str:
        return self.claims.subject


@dataclass(frozen=True, slots=True)
class AuthOutcome:
    state: UiState
    session: SessionContext | None = None
    redirect_url: str | None = None
    location: str | None = None
    actions: tuple[SessionAction, ...] = ()
    events: tuple[dict[str, Any], ...] = field(default=(), repr=False)

    @property
    def is_authenticated(self) -> bool:
        return self.state is UiState.authenticated


# --- Module Notes -----------------------------------------------------------
# ERROR carries no cause on purpose: the page shows one generic failure, the log has the detail.
