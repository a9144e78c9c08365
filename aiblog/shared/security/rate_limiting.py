"""
Rate limiting configuration and setup.

Uses slowapi to enforce per-client rate limits. Every route declares its
limit with ``@limiter.limit``: ``rate_limit_default`` for ordinary routes,
the stricter ``rate_limit_ai`` for routes that call AI providers.
Exceeded limits raise RateLimitExceeded inside the route, so the
centralized error handlers render the 429 envelope.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from aiblog.core.config import Settings, settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def configure_limiter(app_settings: Settings) -> Limiter:
    """Apply the enable switch from ``app_settings`` to the shared limiter."""
    limiter.enabled = app_settings.rate_limit_enabled
    return limiter
