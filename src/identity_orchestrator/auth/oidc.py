"""
identity_orchestrator.auth.oidc

Provider B: hosted OIDC platform, public client with PKCE and refresh tokens.

Responsibilities:
- Start the hosted login (state, nonce, PKCE) and remember the caller's app state.
- Complete the redirect callback and cache the resulting token set.
- Answer "is there a session?" and hand out decoded claims for it.

Auth Flow: OAuth2 Authorization Code Flow + PKCE (S256)
Authorize URL: https://{domain}/authorize
Token URL: https://{domain}/oauth/token
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any, Protocol

import httpx
from authlib.common.security import generate_token
from authlib.integrations.httpx_client import AsyncOAuth2Client, OAuthError

from identity_orchestrator.auth.claims import decode_id_token, id_token_expiry, user_profile
from identity_orchestrator.auth.errors import AuthError, InvalidStateError, SessionRequiredError
from identity_orchestrator.auth.models import AuthDetails, OAuthToken
from identity_orchestrator.auth.redirects import query_param
from identity_orchestrator.navigation import Navigator
from identity_orchestrator.observability.logging import get_logger
from identity_orchestrator.settings import Settings
from identity_orchestrator.storage.client_storage import ClientStorage

log = get_logger(__name__)

TRANSACTION_KEY = "oidc.transaction"
SESSION_KEY = "oidc.session"


class OidcSession(Protocol):
    """Capability surface the orchestrator depends on."""

    async def is_session_active(self) -> bool: ...

    async def complete_redirect_callback(self, url: str) -> str | None: ...

    async def get_auth_details(self) -> AuthDetails: ...

    async def initiate_login(self, *, navigator: Navigator, app_state: str | None = None) -> None: ...

    async def clear_transaction(self) -> None: ...


@dataclass(frozen=True, slots=True)
class LoginTransaction:
    state: str
    nonce: str
    code_verifier: str
    app_state: str | None = None


class OidcSessionClient:
    """
    Thin layer over Authlib's `AsyncOAuth2Client`. Tokens and the pending login
    transaction are kept in client storage so a restart behaves like a page reload.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        storage: ClientStorage,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._storage = storage
        self._oauth = AsyncOAuth2Client(
            client_id=settings.oidc_client_id,
            token_endpoint_auth_method="none",
            scope=settings.oidc_scope,
            redirect_uri=settings.redirect_uri,
            code_challenge_method="S256",
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

    @property
    def authorize_url(self) -> str:
        return f"https://{self._settings.oidc_domain}/authorize"

    @property
    def token_url(self) -> str:
        return f"https://{self._settings.oidc_domain}/oauth/token"

    async def aclose(self) -> None:
        await self._oauth.aclose()

    # ------------------------------------------------------------------
    # Login
    # ------------------------------------------------------------------

    async def login_url(self, *, app_state: str | None = None) -> str:
        txn = LoginTransaction(
            state=generate_token(32),
            nonce=generate_token(32),
            code_verifier=generate_token(48),
            app_state=app_state,
        )
        url, _ = self._oauth.create_authorization_url(
            self.authorize_url,
            state=txn.state,
            code_verifier=txn.code_verifier,
            nonce=txn.nonce,
            audience=self._settings.oidc_audience,
        )
        await self._storage.set_item(
            TRANSACTION_KEY,
            json.dumps(
                {
                    "state": txn.state,
                    "nonce": txn.nonce,
                    "code_verifier": txn.code_verifier,
                    "app_state": txn.app_state,
                }
            ),
        )
        return url

    async def initiate_login(self, *, navigator: Navigator, app_state: str | None = None) -> None:
        url = await self.login_url(app_state=app_state)
        log.info("oidc_login_redirect", has_app_state=app_state is not None)
        navigator.assign(url)

    async def clear_transaction(self) -> None:
        await self._storage.remove_item(TRANSACTION_KEY)

    # ------------------------------------------------------------------
    # Callback
    # ------------------------------------------------------------------

    async def complete_redirect_callback(self, url: str) -> str | None:
        """
        Exchange the callback's code and return the app state remembered at login.

        Raises `InvalidStateError` when no pending transaction matches the
        callback's state; the broken transaction is discarded first.
        """

        error = query_param(url, "error")
        if error:
            await self.clear_transaction()
            raise AuthError(query_param(url, "error_description") or error)

        code = query_param(url, "code")
        state = query_param(url, "state")
        if not code or not state:
            raise AuthError("There are no query params available for parsing.")

        txn = await self._load_transaction()
        if txn is None or txn.state != state:
            await self.clear_transaction()
            raise InvalidStateError()

        await self.clear_transaction()
        token = await self._oauth.fetch_token(
            self.token_url,
            code=code,
            code_verifier=txn.code_verifier,
            audience=self._settings.oidc_audience,
        )

        cached = self._to_cache(token)
        claims = decode_id_token(
            token=cached.id_token,
            issuer=self._settings.oidc_issuer,
            audience=self._settings.oidc_client_id,
        )
        if claims.get("nonce") != txn.nonce:
            raise AuthError("Invalid nonce")

        await self._save_session(cached)
        log.info("oidc_callback_completed", subject=claims.subject)
        return txn.app_state

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def is_session_active(self) -> bool:
        cached = await self._load_session()
        if cached is None:
            return False
        if not cached.is_expired(leeway=self._settings.oidc_leeway_seconds):
            return True
        if not cached.refresh_token:
            return False

        try:
            token = await self._oauth.refresh_token(self.token_url, refresh_token=cached.refresh_token)
            refreshed = self._to_cache(token, previous=cached)
            if refreshed.is_expired(leeway=self._settings.oidc_leeway_seconds):
                raise AuthError("Refresh did not return a usable id token")
        except (OAuthError, httpx.HTTPError, AuthError) as e:
            log.warning("oidc_refresh_failed", error=str(e))
            await self._storage.remove_item(SESSION_KEY)
            return False

        await self._save_session(refreshed)
        log.info("oidc_session_refreshed")
        return True

    async def get_auth_details(self) -> AuthDetails:
        if not await self.is_session_active():
            raise SessionRequiredError("Login required")

        cached = await self._load_session()
        if cached is None:
            raise SessionRequiredError("Login required")

        claims = decode_id_token(
            token=cached.id_token,
            issuer=self._settings.oidc_issuer,
            audience=self._settings.oidc_client_id,
        )
        return AuthDetails(claims=claims, access_token=cached.access_token, user=user_profile(claims))

    # ------------------------------------------------------------------
    # Storage helpers
    # ------------------------------------------------------------------

    def _to_cache(self, token: dict[str, Any], previous: OAuthToken | None = None) -> OAuthToken:
        access_token = token.get("access_token")
        id_token = token.get("id_token") or (previous.id_token if previous else None)
        expires_at = token.get("expires_at")
        if not access_token or not id_token or expires_at is None:
            raise AuthError("Token response is missing access_token, id_token or expiry")

        refresh_token = token.get("refresh_token") or (previous.refresh_token if previous else None)
        return OAuthToken(
            access_token=str(access_token),
            id_token=str(id_token),
            expires_at=int(expires_at),
            refresh_token=refresh_token,
            id_token_expires_at=id_token_expiry(str(id_token)),
        )

    async def _load_transaction(self) -> LoginTransaction | None:
        raw = await self._storage.get_item(TRANSACTION_KEY)
        if raw is None:
            return None
        data = json.loads(raw)
        return LoginTransaction(
            state=str(data["state"]),
            nonce=str(data["nonce"]),
            code_verifier=str(data["code_verifier"]),
            app_state=data.get("app_state"),
        )

    async def _load_session(self) -> OAuthToken | None:
        raw = await self._storage.get_item(SESSION_KEY)
        if raw is None:
            return None
        cached = OAuthToken.from_dict(json.loads(raw))
        if cached.id_token_expires_at is None:
            cached = replace(cached, id_token_expires_at=id_token_expiry(cached.id_token))
        return cached

    async def _save_session(self, token: OAuthToken) -> None:
        await self._storage.set_item(SESSION_KEY, json.dumps(token.to_dict()))


# --- Module Notes -----------------------------------------------------------
# A session ends at the earlier of the access-token and id-token expiry; the
# refresh happens on demand only, there is no background scheduler.
