"""
identity_orchestrator.services.auth_service

Per-page-load authentication orchestrator.

Responsibilities:
- Run the LangGraph authentication cycle once for a page URL.
- Own the UI state (INIT -> LOADING -> AUTHENTICATED | ANONYMOUS | ERROR).
- Apply the error policy: restart login on "Invalid state", collapse everything else to ERROR.
- Hand the resolved identity to consumers as an explicit `SessionContext`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import httpx

from identity_orchestrator.auth.errors import is_invalid_state
from identity_orchestrator.auth.oauth_code import OAuthCodeClient
from identity_orchestrator.auth.oidc import OidcSession
from identity_orchestrator.clients.cognito_federation import IdentityFederationClient
from identity_orchestrator.navigation import PageNavigator
from identity_orchestrator.observability.logging import bind_cycle, get_logger, unbind_cycle
from identity_orchestrator.orchestrator.graph import build_graph
from identity_orchestrator.orchestrator.nodes import CycleDeps
from identity_orchestrator.orchestrator.outcome import (
    AuthOutcome,
    SessionAction,
    SessionContext,
    UiState,
)
from identity_orchestrator.orchestrator.state import AuthCycleState
from identity_orchestrator.services.user_sync import UserSyncService
from identity_orchestrator.settings import Settings

log = get_logger(__name__)

ActionSink = Callable[[SessionAction], None]


@dataclass(frozen=True, slots=True)
class AuthDependencies:
    """Process-wide collaborators; safe to share between page loads."""

    settings: Settings
    oauth: OAuthCodeClient
    oidc: OidcSession
    federation: IdentityFederationClient
    user_sync: UserSyncService


class AuthOrchestrator:
    """
    One instance per page load. Nothing mutable is shared with other loads
    except client storage, which the provider clients own.
    """

    def __init__(
        self,
        *,
        deps: AuthDependencies,
        navigator: PageNavigator | None = None,
        dispatch: ActionSink | None = None,
    ) -> None:
        self._deps = deps
        self._navigator = navigator or PageNavigator()
        self._dispatch = dispatch
        self.state = UiState.init
        self.is_loading = False

    @property
    def navigator(self) -> PageNavigator:
        return self._navigator

    async def authenticate(self, url: str) -> AuthOutcome:
        if self.state is not UiState.init:
            raise RuntimeError("authenticate() runs once per page load")

        self.state = UiState.loading
        self.is_loading = True
        bind_cycle()
        try:
            outcome = await self._run(url)
        finally:
            self.is_loading = False
            unbind_cycle()

        self.state = outcome.state
        return outcome

    async def _run(self, url: str) -> AuthOutcome:
        pathname = httpx.URL(url).path or "/"
        graph = build_graph(
            deps=CycleDeps(
                settings=self._deps.settings,
                oauth=self._deps.oauth,
                oidc=self._deps.oidc,
                federation=self._deps.federation,
                user_sync=self._deps.user_sync,
                navigator=self._navigator,
            )
        )

        try:
            final: AuthCycleState = await graph.ainvoke(
                {"url": url, "pathname": pathname, "actions": [], "events": []}
            )
        except Exception as e:
            return await self._recover(e)

        return self._finish(final)

    def _finish(self, final: AuthCycleState) -> AuthOutcome:
        events = tuple(final.get("events", []))
        resolved = final.get("resolved")
        if resolved is None:
            # Inactive session: the login redirect was issued and the page is leaving.
            log.info("auth_cycle_redirecting")
            return AuthOutcome(
                state=UiState.anonymous,
                redirect_url=self._navigator.assigned_url,
                location=final.get("restored_path"),
                events=events,
            )

        actions = tuple(final.get("actions", []))
        if self._dispatch is not None:
            for action in actions:
                self._dispatch(action)

        details = final["details"]
        session = SessionContext(
            user=resolved.identity,
            roles=list(resolved.roles),
            claims=details.claims,
            storage=final["storage"],
            created=resolved.created,
        )
        log.info("auth_cycle_authenticated", subject=session.subject, created=resolved.created)
        return AuthOutcome(
            state=UiState.authenticated,
            session=session,
            location=final.get("restored_path"),
            actions=actions,
            events=events,
        )

    async def _recover(self, exc: Exception) -> AuthOutcome:
        if not is_invalid_state(exc):
            log.error("auth_cycle_failed", error=str(exc), exc_info=exc)
            return AuthOutcome(state=UiState.error)

        log.info("oidc_invalid_state_restart")
        try:
            await self._deps.oidc.clear_transaction()
            await self._deps.oidc.initiate_login(navigator=self._navigator)
        except Exception as e:
            log.error("auth_login_restart_failed", error=str(e), exc_info=e)
            return AuthOutcome(state=UiState.error)

        return AuthOutcome(state=UiState.anonymous, redirect_url=self._navigator.assigned_url)


# --- Module Notes -----------------------------------------------------------
# Provider A callback failures never reach `_recover`; the graph node logs and
# continues, so only the Provider B session decides the outcome of a load.
