"""
AI provider adapters.

Concrete implementations of TextGenerationPort. Only the composition
root (aiblog.domain.ai.dependencies) may import this package.
"""

import logging

import httpx

from aiblog.domain.ai.adapter.anthropic_messages import AnthropicAdapter
from aiblog.domain.ai.adapter.openai_compatible import OpenAICompatibleAdapter
from aiblog.domain.ai.config import AISettings
from aiblog.domain.ai.port import TextGenerationPort

logger = logging.getLogger(__name__)


def build_providers(settings: AISettings, client: httpx.Client) -> list[TextGenerationPort]:
    """Instantiate adapters in failover order, skipping providers without a key.

    Args:
        settings: AI settings.
        client: Shared HTTP client.

    Returns:
        Adapters in the order listed by ``settings.providers``.
    """
    providers: list[TextGenerationPort] = []
    for name in settings.providers:
        if name == "openai" and settings.openai_api_key:
            providers.append(
                OpenAICompatibleAdapter(
                    name="openai",
                    base_url=settings.openai_base_url,
                    api_key=settings.openai_api_key,
                    model=settings.openai_model,
                    client=client,
                    temperature=settings.temperature,
                    max_tokens=settings.max_tokens,
                )
            )
        elif name == "groq" and settings.groq_api_key:
            providers.append(
                OpenAICompatibleAdapter(
                    name="groq",
                    base_url=settings.groq_base_url,
                    api_key=settings.groq_api_key,
                    model=settings.groq_model,
                    client=client,
                    temperature=settings.temperature,
                    max_tokens=settings.max_tokens,
                )
            )
        elif name == "anthropic" and settings.anthropic_api_key:
            providers.append(
                AnthropicAdapter(
                    api_key=settings.anthropic_api_key,
                    model=settings.anthropic_model,
                    client=client,
                    base_url=settings.anthropic_base_url,
                    api_version=settings.anthropic_version,
                    temperature=settings.temperature,
                    max_tokens=settings.max_tokens,
                )
            )
        else:
            logger.info("AI provider %s has no API key configured; skipping", name)

    logger.info("AI providers enabled: %s", [provider.name for provider in providers] or "none")
    return providers


__all__ = ["AnthropicAdapter", "OpenAICompatibleAdapter", "build_providers"]
