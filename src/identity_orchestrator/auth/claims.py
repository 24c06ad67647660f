"""
identity_orchestrator.auth.claims

Provider B id-token decoding.

Responsibilities:
- Decode id tokens received directly from the token endpoint.
- Enforce issuer/audience and the presence of registered claims.
- Split protocol claims from the user profile.

Note:
- The token arrives over TLS from the token endpoint in the same request, so
  the signature is not re-verified here (OIDC Core 3.1.3.7).
"""

from __future__ import annotations

from typing import Any

import jwt
from jwt import InvalidTokenError

from identity_orchestrator.auth.errors import AuthError
from identity_orchestrator.auth.models import IdentityClaims

# Claims that describe the token rather than the user.
PROTOCOL_CLAIMS = frozenset(
    {"iss", "aud", "exp", "nbf", "iat", "jti", "azp", "nonce", "auth_time", "at_hash", "c_hash", "sid"}
)


class ClaimsValidationError(AuthError):
    pass


def decode_id_token(*, token: str, issuer: str, audience: str) -> IdentityClaims:
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            audience=audience,
            issuer=issuer,
            options={
                "verify_signature": False,
                "verify_aud": True,
                "verify_iss": True,
                "require": ["exp", "iss", "aud", "sub"],
            },
        )
    except InvalidTokenError as e:
        raise ClaimsValidationError(str(e)) from e

    return IdentityClaims(
        subject=str(payload["sub"]),
        raw=token,
        expires_at=int(payload["exp"]),
        values=payload,
    )


def id_token_expiry(token: str) -> int:
    """`exp` of a cached id token; nothing else is checked here."""
    try:
        payload = jwt.decode(token, options={"verify_signature": False, "verify_exp": False, "require": ["exp"]})
    except InvalidTokenError as e:
        raise ClaimsValidationError(str(e)) from e
    return int(payload["exp"])


def user_profile(claims: IdentityClaims) -> dict[str, Any]:
    return {k: v for k, v in claims.values.items() if k not in PROTOCOL_CLAIMS}


# --- Module Notes -----------------------------------------------------------
# Expiry is not enforced at decode time; session activity is decided by the token cache.
