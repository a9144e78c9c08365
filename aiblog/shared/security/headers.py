"""
Secure HTTP headers middleware.

Adds security-related headers to every response, including error
envelopes produced by the centralized handlers. The catch-all 500 handler
runs outside this middleware and applies the same headers itself.

No business logic. Pure cross-cutting concern.
"""

from collections.abc import Mapping
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

DEFAULT_SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'self'",
}


def apply_secure_headers(
    response: Response, headers: Mapping[str, str] = DEFAULT_SECURE_HEADERS
) -> Response:
    """Set each header on ``response`` unless it is already present."""
    for header_name, header_value in headers.items():
        response.headers.setdefault(header_name, header_value)
    return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that sets restrictive default headers on all responses.

    Headers already set by the endpoint are left untouched.
    """

    def __init__(self, app: ASGIApp, headers: Optional[Mapping[str, str]] = None) -> None:
        super().__init__(app)
        self._headers = dict(DEFAULT_SECURE_HEADERS if headers is None else headers)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        return apply_secure_headers(response, self._headers)
