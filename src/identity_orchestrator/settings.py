"""
identity_orchestrator.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for both identity providers, federation and the backend.
- Hide client secrets from repr/logging.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    One settings object is shared by the page host, the provider clients and the
    orchestrator. Defaults are safe for a local single-user client.
    """

    model_config = SettingsConfigDict(env_prefix="IDO_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "identity-orchestrator"
    log_level: str = "INFO"

    api_host: str = "127.0.0.1"
    api_port: int = 3000

    # Local client state ("browser storage").
    database_url: str = "sqlite+aiosqlite:///./client_state.db"

    # Applied to every outbound HTTP call.
    http_timeout_seconds: float = 10.0

    # Shared redirect target for both providers.
    redirect_uri: str = "http://localhost:3000/"

    # Provider A: first-party OAuth2 authorization-code provider.
    oauth_authorize_url: str = "https://auth.provider-a.example/oauth/authorize"
    oauth_token_url: str = "https://api.provider-a.example/auth/oauth/token"
    oauth_api_base_url: str = "https://api.provider-a.example/auth/api/v1"
    oauth_client_id: str = "provider-a-client"
    oauth_client_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Provider B: hosted OIDC platform.
    oidc_domain: str = "tenant.provider-b.example"
    oidc_audience: str = "https://api.app.example"
    oidc_client_id: str = "provider-b-client"
    oidc_scope: str = "openid profile email offline_access"
    oidc_roles_claim: str = "https://app.example/claims/roles"
    oidc_leeway_seconds: int = 60

    # Application backend.
    backend_api_url: str = "http://localhost:8000/api/v1"

    # Cloud storage federation.
    cognito_region: str = "us-east-1"
    cognito_identity_pool_id: str = "us-east-1:00000000-0000-0000-0000-000000000000"
    s3_bucket: str = "app-user-uploads"
    s3_bucket_region: str = "us-east-1"

    @property
    def oidc_issuer(self) -> str:
        return f"https://{self.oidc_domain}/"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Provider endpoints are plain strings so tests can point them at httpx.MockTransport hosts.
