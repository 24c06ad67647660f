"""
identity_orchestrator.orchestrator.state

Typed state schema used by the LangGraph authentication cycle.

Responsibilities:
- Define the contract between nodes (inputs/outputs).
"""

from __future__ import annotations

from typing import Annotated, Any, TypedDict

from identity_orchestrator.auth.models import AuthDetails
from identity_orchestrator.clients.backend_api import UserLookup
from identity_orchestrator.clients.cognito_federation import FederatedStorage
from identity_orchestrator.orchestrator.outcome import SessionAction
from identity_orchestrator.orchestrator.reducers import append_items
from identity_orchestrator.services.user_sync import ResolvedUser


class AuthCycleState(TypedDict, total=False):
    # Page load inputs
    url: str
    pathname: str

    # Evaluated once by the entry node
    redirect_kind: str

    # Set when a Provider B callback restored the pre-login location
    restored_path: str

    session_active: bool

    # Active-session branch, in execution order
    details: AuthDetails
    roles: list[str]
    user_lookup: UserLookup
    storage: FederatedStorage
    resolved: ResolvedUser

    actions: Annotated[list[SessionAction], append_items]
    events: Annotated[list[dict[str, Any]], append_items]


# --- Module Notes -----------------------------------------------------------
# Values are live objects (not JSON); the graph runs without a checkpointer.
