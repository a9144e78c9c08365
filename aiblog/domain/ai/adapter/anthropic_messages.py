"""
Adapter: Anthropic messages API.

Implements TextGenerationPort over ``POST {base_url}/messages``.
"""

import httpx

from aiblog.domain.ai.adapter.base import HttpProviderAdapter
from aiblog.domain.ai.port import Prompt


class AnthropicAdapter(HttpProviderAdapter):
    """Calls the Anthropic messages endpoint and joins the text blocks."""

    def __init__(
        self,
        api_key: str,
        model: str,
        client: httpx.Client,
        base_url: str = "https://api.anthropic.com/v1",
        api_version: str = "2023-06-01",
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ) -> None:
        super().__init__("anthropic", base_url, model, client)
        self._api_key = api_key
        self._api_version = api_version
        self._temperature = temperature
        self._max_tokens = max_tokens

    def complete(self, prompt: Prompt) -> str:
        payload = {
            "model": self.model,
            "system": prompt.system,
            "messages": [{"role": "user", "content": prompt.user}],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }
        body = self.post_json(
            "messages",
            payload,
            headers={"x-api-key": self._api_key, "anthropic-version": self._api_version},
        )
        blocks = body.get("content")
        if not isinstance(blocks, list):
            raise self.failure("malformed message payload")
        text = "".join(
            block["text"]
            for block in blocks
            if isinstance(block, dict)
            and block.get("type") == "text"
            and isinstance(block.get("text"), str)
        )
        return self.require_text(text)
