"""
identity_orchestrator.observability.middleware

HTTP middleware for page-load logging context.

Responsibilities:
- Generate/propagate a page-load id.
- Bind path and redirect-shape hints into structlog contextvars.
"""

from __future__ import annotations

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


class PageLoadContextMiddleware(BaseHTTPMiddleware):
    """
    Every page load gets an id; query values are never logged, only which
    callback parameters were present.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        page_load_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        params = request.query_params
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            page_load_id=page_load_id,
            path=request.url.path,
            has_code="code" in params,
            has_state="state" in params,
        )
        try:
            response: Response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = page_load_id
        return response


# --- Module Notes -----------------------------------------------------------
# Authorization codes and state values are credentials; keep them out of log context.
