"""
Centralized error handlers for FastAPI.

Maps every failure surfacing from request processing to the ApiResponse
envelope. This is the only recovery point for errors raised by services,
repositories and adapters.

Matching order:
1. BusinessError -> the error code's status and message (WARNING log).
2. RequestValidationError -> 400 with "field: message" pairs (WARNING log).
3. Anything else -> 500 with a fixed generic message (ERROR log with traceback).

No stack traces or internal details are exposed to clients.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from aiblog.shared.errors.exceptions import BusinessError
from aiblog.shared.response import ApiResponse
from aiblog.shared.security.headers import apply_secure_headers

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_429 = 429
HTTP_500 = 500

INTERNAL_ERROR_MESSAGE = "Internal server error"
RATE_LIMIT_MESSAGE = "Rate limit exceeded"

# Location prefixes FastAPI adds in front of the field path.
_REQUEST_SOURCES = frozenset({"body", "query", "path", "header", "cookie"})


def _error_response(status_code: int, message: str) -> JSONResponse:
    """Build a consistent JSON error envelope."""
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse.error(message).model_dump(),
    )


def combine_field_violations(violations: Iterable[tuple[str, str]]) -> str:
    """Join (field, message) pairs as ``"field: message"`` separated by ``", "``.

    Order is preserved as given.
    """
    return ", ".join(f"{field}: {message}" for field, message in violations)


def _field_name(location: Sequence[Any]) -> str:
    parts = [str(part) for part in location]
    if len(parts) > 1 and parts[0] in _REQUEST_SOURCES:
        parts = parts[1:]
    return ".".join(parts)


def field_violations(exc: RequestValidationError) -> list[tuple[str, str]]:
    """Extract (field, message) pairs from a validation error, in order."""
    return [(_field_name(error.get("loc", ())), error.get("msg", "")) for error in exc.errors()]


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(BusinessError)
    async def handle_business_error(_request: Request, exc: BusinessError) -> JSONResponse:
        """Handle modeled domain failures."""
        error_code = exc.error_code
        logger.warning("BusinessError: %s - %s", error_code.name, error_code.message)
        if exc.detail:
            logger.debug("BusinessError detail: %s - %s", error_code.name, exc.detail)
        return _error_response(error_code.status, error_code.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation failures."""
        message = combine_field_violations(field_violations(exc))
        logger.warning("Validation failed: %s", message)
        return _error_response(HTTP_400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Wrap framework HTTP errors (unknown route, wrong method) in the envelope."""
        logger.warning("HTTP error %d: %s", exc.status_code, exc.detail)
        response = _error_response(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RateLimitExceeded)
    async def handle_rate_limit(_request: Request, exc: RateLimitExceeded) -> JSONResponse:
        """Handle rate limit exceeded errors."""
        logger.warning("Rate limit exceeded: %s", exc.detail)
        return _error_response(HTTP_429, RATE_LIMIT_MESSAGE)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.error("Unhandled exception: %s", type(exc).__name__, exc_info=exc)
        return apply_secure_headers(_error_response(HTTP_500, INTERNAL_ERROR_MESSAGE))
