"""
Composition root for the AI domain.

The only place that knows the concrete adapters. The service receives
them as TextGenerationPort instances. The shared HTTP client lives for
the lifetime of the application and is closed by close_ai_clients().
"""

import logging
from functools import lru_cache

import httpx

from aiblog.domain.ai.adapter import build_providers
from aiblog.domain.ai.config import ai_settings
from aiblog.domain.ai.service import AiService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_http_client() -> httpx.Client:
    """Process-wide HTTP client shared by all provider adapters."""
    return httpx.Client(timeout=ai_settings.timeout_seconds)


@lru_cache(maxsize=1)
def get_ai_service() -> AiService:
    """Build the process-wide AiService with configured providers."""
    return AiService(providers=build_providers(ai_settings, get_http_client()))


def close_ai_clients() -> None:
    """Close the shared HTTP client and forget the cached service."""
    if get_http_client.cache_info().currsize:
        get_http_client().close()
        logger.info("Closed AI provider HTTP client")
    get_http_client.cache_clear()
    get_ai_service.cache_clear()
