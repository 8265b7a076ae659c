from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from fastapi import Request
    from starlette.types import ASGIApp

logger = get_logger(__name__)

_MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class SecurityMiddleware(BaseHTTPMiddleware):
    """Add security headers and log every write request."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"

        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=15552000; includeSubDomains"

        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
        response.headers["Pragma"] = "no-cache"

        if request.method in _MUTATING_METHODS:
            client_ip = request.client.host if request.client else "unknown"
            logger.info(
                "Write request",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "status": response.status_code,
                    "ip": client_ip,
                },
            )

        return response
