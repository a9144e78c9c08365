"""
Shared fixtures.

Environment overrides are applied before aiblog is imported so the
module-level settings objects never pick up a developer's .env file
values for rate limiting or provider keys.
"""

import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
for _key in ("AI_OPENAI_API_KEY", "AI_ANTHROPIC_API_KEY", "AI_GROQ_API_KEY"):
    os.environ[_key] = ""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from aiblog.core.config import Settings
from aiblog.domain.ai.dependencies import get_ai_service
from aiblog.domain.ai.port import Prompt, TextGenerationPort
from aiblog.domain.ai.service import AiService
from aiblog.main import create_app
from aiblog.shared.database import Base, Database, get_database
from aiblog.shared.errors import BusinessError, ErrorCode


class FakeProvider(TextGenerationPort):
    """Provider returning canned answers, or failing like a real adapter."""

    def __init__(self, name: str, answer: str = "", fail: bool = False) -> None:
        self._name = name
        self.answer = answer
        self.fail = fail
        self.prompts: list[Prompt] = []

    @property
    def name(self) -> str:
        return self._name

    def complete(self, prompt: Prompt) -> str:
        self.prompts.append(prompt)
        if self.fail:
            raise BusinessError(ErrorCode.AI_API_CALL_FAILED, detail=f"{self._name}: HTTP 500")
        return self.answer


@pytest.fixture
def app_settings() -> Settings:
    return Settings(database_url="sqlite://", rate_limit_enabled=False, log_level="WARNING")


@pytest.fixture
def fake_providers() -> list[FakeProvider]:
    return [
        FakeProvider("openai", fail=True),
        FakeProvider("anthropic", answer="A short summary of the post."),
    ]


@pytest.fixture
def app(app_settings: Settings, fake_providers: list[FakeProvider]) -> FastAPI:
    application = create_app(app_settings)
    application.dependency_overrides[get_ai_service] = lambda: AiService(fake_providers)
    return application


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
    Base.metadata.drop_all(get_database().engine)


@pytest.fixture
def session() -> Iterator[Session]:
    """A session on a fresh in-memory database."""
    database = Database("sqlite://")
    database.create_all()
    db_session = database.session()
    try:
        yield db_session
    finally:
        db_session.close()
        database.dispose()
