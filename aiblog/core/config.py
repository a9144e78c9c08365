"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, no scattered magic strings.
AI provider settings live in aiblog.domain.ai.config.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        api_prefix: Path prefix for all routers.
        rate_limit_enabled: Toggle slowapi enforcement.
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_ai: Rate limit for AI generation endpoints.
        database_url: SQLAlchemy database URL.
        database_echo: Echo SQL statements to the log.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    project_name: str = "AI Blog"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api/v1"

    rate_limit_enabled: bool = True
    rate_limit_default: str = "60/minute"
    rate_limit_ai: str = "10/minute"

    database_url: str = "sqlite:///./aiblog.db"
    database_echo: bool = False


settings = Settings()
