"""
Adapter: OpenAI-compatible chat completions.

Implements TextGenerationPort for OpenAI and for providers exposing the
same ``/chat/completions`` API (Groq).
"""

import httpx

from aiblog.domain.ai.adapter.base import HttpProviderAdapter
from aiblog.domain.ai.port import Prompt


class OpenAICompatibleAdapter(HttpProviderAdapter):
    """Calls ``POST {base_url}/chat/completions`` with bearer authentication."""

    def __init__(
        self,
        name: str,
        base_url: str,
        api_key: str,
        model: str,
        client: httpx.Client,
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ) -> None:
        super().__init__(name, base_url, model, client)
        self._api_key = api_key
        self._temperature = temperature
        self._max_tokens = max_tokens

    def complete(self, prompt: Prompt) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user},
            ],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }
        body = self.post_json(
            "chat/completions",
            payload,
            headers={"Authorization": f"Bearer {self._api_key}"},
        )
        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise self.failure("malformed completion payload") from exc
        return self.require_text(content)
