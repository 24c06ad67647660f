"""
identity_orchestrator.auth.redirects

Redirect-kind classification.

Responsibilities:
- Decide once per page load which provider (if any) sent the browser back.

Provider B callbacks always carry `state`; Provider A callbacks never do.
"""

from __future__ import annotations

import enum

import httpx


class RedirectKind(enum.StrEnum):
    provider_a_callback = "PROVIDER_A_CALLBACK"
    provider_b_callback = "PROVIDER_B_CALLBACK"
    no_callback = "NO_CALLBACK"


def classify_redirect(url: str | httpx.URL) -> RedirectKind:
    params = httpx.URL(str(url)).params
    if "code" not in params:
        return RedirectKind.no_callback
    if "state" in params:
        return RedirectKind.provider_b_callback
    return RedirectKind.provider_a_callback


def query_param(url: str | httpx.URL, name: str) -> str | None:
    return httpx.URL(str(url)).params.get(name)


# --- Module Notes -----------------------------------------------------------
# Only parameter presence matters; empty values still select a provider.
