"""
identity_orchestrator.auth.oauth_code

Provider A: OAuth2 Authorization Code Flow (confidential client).

Responsibilities:
- Build the authorization redirect.
- Exchange the callback's code for a bearer token and persist it.
- Probe a protected endpoint to decide whether the stored token is still good.
"""

from __future__ import annotations

import httpx

from identity_orchestrator.auth.credential_store import CredentialStore
from identity_orchestrator.auth.errors import AuthError, TokenExchangeError
from identity_orchestrator.auth.redirects import query_param
from identity_orchestrator.navigation import Navigator
from identity_orchestrator.observability.logging import get_logger
from identity_orchestrator.settings import Settings

log = get_logger(__name__)


class OAuthCodeClient:
    def __init__(
        self,
        *,
        settings: Settings,
        http: httpx.AsyncClient,
        store: CredentialStore,
    ) -> None:
        self._settings = settings
        self._http = http
        self._store = store

    def authorization_url(self) -> str:
        url = httpx.URL(
            self._settings.oauth_authorize_url,
            params={
                "client_id": self._settings.oauth_client_id,
                "response_type": "code",
                "redirect_uri": self._settings.redirect_uri,
            },
        )
        return str(url)

    def initiate_login(self, navigator: Navigator) -> None:
        log.info("oauth_login_redirect")
        navigator.assign(self.authorization_url())

    async def complete_redirect(self, url: str) -> str:
        """
        Exchange the authorization code found in `url` and store the access token.

        Caller must have classified `url` as a Provider A callback. Non-2xx
        responses raise `httpx.HTTPStatusError`.
        """

        code = query_param(url, "code")
        if not code:
            raise AuthError("Missing authorization code")

        r = await self._http.post(
            self._settings.oauth_token_url,
            json={
                "grant_type": "authorization_code",
                "client_id": self._settings.oauth_client_id,
                "code": code,
                "client_secret": self._settings.oauth_client_secret,
                "redirect_uri": self._settings.redirect_uri,
            },
            timeout=self._settings.http_timeout_seconds,
        )
        r.raise_for_status()

        token = r.json().get("access_token")
        if not isinstance(token, str) or not token:
            raise TokenExchangeError("Token response did not include an access_token")

        await self._store.set(token)
        log.info("oauth_code_exchanged")
        return token

    async def verify_session(self) -> bool:
        token = await self._store.get()
        if not token:
            return False

        try:
            r = await self._http.get(
                f"{self._settings.oauth_api_base_url.rstrip('/')}/users/me",
                headers={"Authorization": f"Bearer {token}"},
                timeout=self._settings.http_timeout_seconds,
            )
        except httpx.HTTPError as e:
            log.warning("oauth_session_probe_failed", error=str(e))
            return False

        if r.status_code != 200:
            log.info("oauth_session_invalid", status_code=r.status_code)
            return False
        return True


# --- Module Notes -----------------------------------------------------------
# The probe endpoint is the only validity signal: the token carries no expiry we track.
