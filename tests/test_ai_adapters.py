"""
Tests for the HTTP provider adapters.

Uses httpx.MockTransport so requests never leave the process.
"""

import json

import httpx
import pytest

from aiblog.domain.ai.adapter import AnthropicAdapter, OpenAICompatibleAdapter, build_providers
from aiblog.domain.ai.config import AISettings
from aiblog.domain.ai.port import Prompt
from aiblog.domain.ai.service import AiService
from aiblog.shared.errors import BusinessError, ErrorCode

PROMPT = Prompt(system="Be brief.", user="Summarize this.")


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def _openai(handler) -> OpenAICompatibleAdapter:
    return OpenAICompatibleAdapter(
        name="openai",
        base_url="https://llm.test/v1/",
        api_key="sk-test",
        model="gpt-test",
        client=_client(handler),
    )


class TestOpenAICompatibleAdapter:
    def test_success(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"choices": [{"message": {"content": " Done. "}}]})

        assert _openai(handler).complete(PROMPT) == "Done."
        assert seen["url"] == "https://llm.test/v1/chat/completions"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"]["model"] == "gpt-test"
        assert seen["body"]["messages"][0] == {"role": "system", "content": "Be brief."}

    def test_http_error_is_api_call_failure(self) -> None:
        adapter = _openai(lambda request: httpx.Response(500, json={"error": "boom"}))
        with pytest.raises(BusinessError) as excinfo:
            adapter.complete(PROMPT)
        assert excinfo.value.error_code is ErrorCode.AI_API_CALL_FAILED
        assert excinfo.value.detail == "openai: HTTP 500"

    def test_malformed_payload_is_api_call_failure(self) -> None:
        adapter = _openai(lambda request: httpx.Response(200, json={"choices": []}))
        with pytest.raises(BusinessError) as excinfo:
            adapter.complete(PROMPT)
        assert excinfo.value.error_code is ErrorCode.AI_API_CALL_FAILED

    def test_non_json_is_api_call_failure(self) -> None:
        adapter = _openai(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(BusinessError) as excinfo:
            adapter.complete(PROMPT)
        assert excinfo.value.detail == "openai: response is not JSON"

    def test_transport_error_is_api_call_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(BusinessError) as excinfo:
            _openai(handler).complete(PROMPT)
        assert excinfo.value.detail == "openai: ConnectError"

    def test_api_key_not_in_error_detail(self) -> None:
        adapter = _openai(lambda request: httpx.Response(401))
        with pytest.raises(BusinessError) as excinfo:
            adapter.complete(PROMPT)
        assert "sk-test" not in excinfo.value.detail


class TestAnthropicAdapter:
    def test_joins_text_blocks(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "content": [
                        {"type": "text", "text": "Part one. "},
                        {"type": "tool_use", "id": "x"},
                        {"type": "text", "text": "Part two."},
                    ]
                },
            )

        adapter = AnthropicAdapter(api_key="ak-test", model="claude-test", client=_client(handler))
        assert adapter.complete(PROMPT) == "Part one. Part two."
        assert seen["headers"]["x-api-key"] == "ak-test"
        assert seen["headers"]["anthropic-version"] == "2023-06-01"
        assert seen["body"]["system"] == "Be brief."
        assert seen["body"]["messages"] == [{"role": "user", "content": "Summarize this."}]

    def test_missing_content_is_api_call_failure(self) -> None:
        adapter = AnthropicAdapter(
            api_key="ak-test",
            model="claude-test",
            client=_client(lambda request: httpx.Response(200, json={"id": "msg"})),
        )
        with pytest.raises(BusinessError) as excinfo:
            adapter.complete(PROMPT)
        assert excinfo.value.error_code is ErrorCode.AI_API_CALL_FAILED


class TestBuildProviders:
    def test_order_follows_settings_and_skips_missing_keys(self) -> None:
        settings = AISettings(
            providers=["groq", "openai", "anthropic"],
            groq_api_key="gk",
            openai_api_key="",
            anthropic_api_key="ak",
        )
        providers = build_providers(settings, _client(lambda request: httpx.Response(200)))
        assert [provider.name for provider in providers] == ["groq", "anthropic"]

    def test_unknown_provider_rejected(self) -> None:
        with pytest.raises(ValueError):
            AISettings(providers=["openai", "cohere"])


class TestAnthropicNullText:
    """A text block whose text is null is an unusable answer, not a crash."""

    def _adapter(self, blocks: list) -> AnthropicAdapter:
        return AnthropicAdapter(
            api_key="ak-test",
            model="claude-test",
            client=_client(lambda request: httpx.Response(200, json={"content": blocks})),
        )

    def test_null_text_only_is_api_call_failure(self) -> None:
        with pytest.raises(BusinessError) as excinfo:
            self._adapter([{"type": "text", "text": None}]).complete(PROMPT)
        assert excinfo.value.error_code is ErrorCode.AI_API_CALL_FAILED
        assert excinfo.value.detail == "anthropic: empty completion"

    def test_null_text_block_is_skipped(self) -> None:
        blocks = [{"type": "text", "text": None}, {"type": "text", "text": "Kept."}]
        assert self._adapter(blocks).complete(PROMPT) == "Kept."

    def test_failover_after_null_text(self) -> None:
        fallback = _openai(
            lambda request: httpx.Response(200, json={"choices": [{"message": {"content": "fine"}}]})
        )
        service = AiService([self._adapter([{"type": "text", "text": None}]), fallback])
        assert service.summarize("x") == "fine"
