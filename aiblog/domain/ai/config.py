"""
AI module configuration.

Manages settings for:
- Provider order used for failover
- Per-provider API credentials, models and endpoints
- Generation parameters shared by all providers
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_PROVIDERS = ("openai", "anthropic", "groq")


class AISettings(BaseSettings):
    """AI provider settings, read from ``AI_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Failover order; providers without an API key are skipped ---
    providers: list[str] = ["openai", "anthropic", "groq"]

    # --- OpenAI ---
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com/v1"

    # --- Anthropic ---
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-3-5-haiku-latest"
    anthropic_base_url: str = "https://api.anthropic.com/v1"
    anthropic_version: str = "2023-06-01"

    # --- Groq (OpenAI-compatible) ---
    groq_api_key: str = ""
    groq_model: str = "llama-3.3-70b-versatile"
    groq_base_url: str = "https://api.groq.com/openai/v1"

    # --- Generation ---
    timeout_seconds: float = 30.0
    temperature: float = 0.7
    max_tokens: int = 1024

    @field_validator("providers")
    @classmethod
    def _known_providers(cls, value: list[str]) -> list[str]:
        normalized = [name.strip().lower() for name in value if name.strip()]
        unknown = sorted(set(normalized) - set(SUPPORTED_PROVIDERS))
        if unknown:
            raise ValueError(f"Unsupported AI providers: {', '.join(unknown)}")
        return normalized


ai_settings = AISettings()
