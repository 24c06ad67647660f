from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from identity_orchestrator.auth.oauth_code import OAuthCodeClient
from identity_orchestrator.auth.oidc import OidcSession
from identity_orchestrator.auth.redirects import RedirectKind, classify_redirect
from identity_orchestrator.clients.cognito_federation import (
    FederationRequest,
    IdentityFederationClient,
)
from identity_orchestrator.navigation import Navigator
from identity_orchestrator.observability.logging import get_logger
from identity_orchestrator.orchestrator.outcome import AuthenticateUser, FetchImage, SessionAction
from identity_orchestrator.orchestrator.state import AuthCycleState
from identity_orchestrator.services.user_sync import UserSyncService
from identity_orchestrator.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CycleDeps:
    settings: Settings
    oauth: OAuthCodeClient
    oidc: OidcSession
    federation: IdentityFederationClient
    user_sync: UserSyncService
    navigator: Navigator


def _event(name: str, **details: Any) -> list[dict[str, Any]]:
    return [{"event": name, "details": details}]


async def classify_node(state: AuthCycleState) -> AuthCycleState:
    kind = classify_redirect(state["url"])
    return {"redirect_kind": kind.value, "events": _event("CLASSIFY", redirect_kind=kind.value)}


async def oauth_callback_node(state: AuthCycleState, *, deps: CycleDeps) -> AuthCycleState:
    """
    Best-effort: a failed exchange only shows up later as a missing Provider A session.
    """

    try:
        await deps.oauth.complete_redirect(state["url"])
    except Exception as e:
        log.warning("oauth_callback_failed", error=str(e), exc_info=e)
        return {"events": _event("OAUTH_CALLBACK", ok=False)}
    return {"events": _event("OAUTH_CALLBACK", ok=True)}


async def oidc_callback_node(state: AuthCycleState, *, deps: CycleDeps) -> AuthCycleState:
    app_state = await deps.oidc.complete_redirect_callback(state["url"])
    target = app_state or state["pathname"]
    deps.navigator.push(target)
    return {"restored_path": target, "events": _event("OIDC_CALLBACK", restored_path=target)}


async def check_session_node(state: AuthCycleState, *, deps: CycleDeps) -> AuthCycleState:
    active = await deps.oidc.is_session_active()
    return {"session_active": active, "events": _event("SESSION_CHECK", active=active)}


async def login_redirect_node(state: AuthCycleState, *, deps: CycleDeps) -> AuthCycleState:
    await deps.oidc.initiate_login(navigator=deps.navigator, app_state=state["pathname"])
    return {"events": _event("LOGIN_REDIRECT", app_state=state["pathname"])}


async def resolve_claims_node(state: AuthCycleState, *, deps: CycleDeps) -> AuthCycleState:
    details = await deps.oidc.get_auth_details()
    roles = details.claims.roles(deps.settings.oidc_roles_claim)
    lookup = await deps.user_sync.fetch(access_token=details.access_token)
    return {
        "details": details,
        "roles": roles,
        "user_lookup": lookup,
        "events": _event(
            "RESOLVE_CLAIMS",
            subject=details.claims.subject,
            roles=roles,
            user_absent=lookup.is_absent,
        ),
    }


async def federate_node(state: AuthCycleState, *, deps: CycleDeps) -> AuthCycleState:
    # Needs the raw id token from RESOLVE_CLAIMS.
    details = state["details"]
    settings = deps.settings
    storage = await deps.federation.federate(
        FederationRequest(
            auth0_user=details.user,
            auth0_id_token=details.claims.raw,
            auth0_id_token_exp=details.claims.expires_at,
            auth0_domain=settings.oidc_domain,
            auth0_access_token=details.access_token,
            cognito_region=settings.cognito_region,
            cognito_identity_pool_id=settings.cognito_identity_pool_id,
            s3_bucket=settings.s3_bucket,
            s3_bucket_region=settings.s3_bucket_region,
        )
    )
    return {
        "storage": storage,
        "events": _event("FEDERATE", identity_id=storage.credentials.identity_id),
    }


async def sync_user_node(state: AuthCycleState, *, deps: CycleDeps) -> AuthCycleState:
    details = state["details"]
    resolved = await deps.user_sync.resolve(
        profile=details.user,
        roles=state.get("roles", []),
        access_token=details.access_token,
        lookup=state["user_lookup"],
    )
    return {"resolved": resolved, "events": _event("SYNC_USER", created=resolved.created)}


async def dispatch_node(state: AuthCycleState) -> AuthCycleState:
    resolved = state["resolved"]
    actions: list[SessionAction] = [AuthenticateUser(user=resolved.identity)]
    if not resolved.created:
        # Avatar lives in storage only for users the backend already knew.
        actions.append(FetchImage(user_id=state["details"].claims.subject))
    return {
        "actions": actions,
        "events": _event("DISPATCH", actions=[type(a).__name__ for a in actions]),
    }


def route_after_classify(state: AuthCycleState) -> str:
    kind = state.get("redirect_kind")
    if kind == RedirectKind.provider_a_callback:
        return "oauth_callback"
    if kind == RedirectKind.provider_b_callback:
        return "oidc_callback"
    return "check_session"


def route_after_session(state: AuthCycleState) -> str:
    if state.get("session_active"):
        return "resolve_claims"
    return "login_redirect"
