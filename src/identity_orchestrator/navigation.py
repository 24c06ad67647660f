"""
identity_orchestrator.navigation

Navigation boundary for one page load.

Responsibilities:
- `assign`: leave the page for an external URL (provider login pages).
- `push`: move to an in-app path without reloading.
"""

from __future__ import annotations

from typing import Protocol


class Navigator(Protocol):
    def assign(self, url: str) -> None: ...

    def push(self, path: str) -> None: ...


class PageNavigator:
    """
    Records navigation requests; the page host turns `assigned_url` into an HTTP
    redirect. The first `assign` wins since the page is gone after it.
    """

    def __init__(self) -> None:
        self.assigned_url: str | None = None
        self.location: str | None = None

    def assign(self, url: str) -> None:
        if self.assigned_url is None:
            self.assigned_url = url

    def push(self, path: str) -> None:
        self.location = path
