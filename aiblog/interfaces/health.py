"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
No business logic. Returns application status and version.
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from aiblog.core.config import settings
from aiblog.shared.response import ApiResponse
from aiblog.shared.security.rate_limiting import limiter

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str


@router.get(
    "/health",
    response_model=ApiResponse[HealthResponse],
    summary="Health check",
    description="Returns application health status and version.",
)
@limiter.limit(settings.rate_limit_default)
def health_check(request: Request) -> ApiResponse[HealthResponse]:
    """Return current application health status."""
    return ApiResponse.ok(HealthResponse(status="ok", version=settings.version))
