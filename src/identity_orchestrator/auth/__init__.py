"""
identity_orchestrator.auth

Identity provider package.

Responsibilities:
- Provider A (OAuth2 authorization code) client and its credential store.
- Provider B (OIDC) session client and id-token claim decoding.
- Redirect-kind classification shared by the orchestrator.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Everything here talks to identity providers only; backend and cloud calls live in `clients`.
