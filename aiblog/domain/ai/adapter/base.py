"""
Shared HTTP plumbing for AI provider adapters.

Every transport, status or payload failure is converted into
BusinessError(AI_API_CALL_FAILED) so the service can fail over to the
next provider. API keys never appear in error details or logs.
"""

import logging
from typing import Any

import httpx

from aiblog.domain.ai.port import TextGenerationPort
from aiblog.shared.errors import BusinessError, ErrorCode

logger = logging.getLogger(__name__)


class HttpProviderAdapter(TextGenerationPort):
    """Base adapter for JSON-over-HTTP completion APIs."""

    def __init__(self, name: str, base_url: str, model: str, client: httpx.Client) -> None:
        self._name = name
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._client = client

    @property
    def name(self) -> str:
        return self._name

    @property
    def model(self) -> str:
        return self._model

    def failure(self, reason: str) -> BusinessError:
        return BusinessError(ErrorCode.AI_API_CALL_FAILED, detail=f"{self._name}: {reason}")

    def post_json(self, path: str, payload: dict[str, Any], headers: dict[str, str]) -> dict[str, Any]:
        """POST ``payload`` and return the decoded JSON object."""
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = self._client.post(url, json=payload, headers=headers)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            raise self.failure(f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise self.failure(type(exc).__name__) from exc
        except ValueError as exc:
            raise self.failure("response is not JSON") from exc

        if not isinstance(body, dict):
            raise self.failure("unexpected response shape")
        logger.debug("Provider %s answered model=%s", self._name, self._model)
        return body

    def require_text(self, text: Any) -> str:
        if not isinstance(text, str) or not text.strip():
            raise self.failure("empty completion")
        return text.strip()
