"""
AI writing assistance with provider failover.

Input: post content from controllers or other services.
Output: summaries and title suggestions.
Failure cases: AI_ALL_PROVIDERS_FAILED once every provider has failed
or when no provider is configured.

Providers are tried in configured order. A provider failing with
AI_API_CALL_FAILED (including an unusable answer) is logged and the
next one is tried; any other error propagates unchanged.
"""

import logging
import re
from collections.abc import Callable, Sequence
from typing import TypeVar

from aiblog.domain.ai.port import Prompt, TextGenerationPort
from aiblog.shared.errors import BusinessError, ErrorCode

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUMMARY_SYSTEM_PROMPT = (
    "You are an editor for a technical blog. Summarize the post the user sends "
    "in at most {max_sentences} sentences. Reply with the summary only, in the "
    "language of the post."
)
TITLES_SYSTEM_PROMPT = (
    "You are an editor for a technical blog. Suggest {count} distinct, concise "
    "titles for the post the user sends. Reply with one title per line and "
    "nothing else, in the language of the post."
)

_LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")
_QUOTES = "\"'“”‘’`"


class AiService:
    """Generates writing aids through the first provider that succeeds."""

    def __init__(self, providers: Sequence[TextGenerationPort]) -> None:
        self._providers = list(providers)

    @property
    def provider_names(self) -> list[str]:
        return [provider.name for provider in self._providers]

    def generate(self, prompt: Prompt, parse: Callable[[str], T]) -> T:
        """Complete ``prompt`` and parse the answer, failing over between providers.

        Args:
            prompt: The prompt sent to every provider tried.
            parse: Turns raw completion text into a result. Raises
                BusinessError(AI_API_CALL_FAILED) for unusable text.

        Raises:
            BusinessError: AI_ALL_PROVIDERS_FAILED when no provider succeeded.
        """
        for provider in self._providers:
            try:
                return parse(provider.complete(prompt))
            except BusinessError as exc:
                if exc.error_code is not ErrorCode.AI_API_CALL_FAILED:
                    raise
                logger.warning("AI provider %s failed: %s", provider.name, exc.detail or exc.message)

        raise BusinessError(
            ErrorCode.AI_ALL_PROVIDERS_FAILED,
            detail=f"tried={self.provider_names}",
        )

    def summarize(self, content: str, max_sentences: int = 3) -> str:
        """Return a short summary of ``content``."""
        prompt = Prompt(
            system=SUMMARY_SYSTEM_PROMPT.format(max_sentences=max_sentences),
            user=content,
        )
        return self.generate(prompt, _parse_summary)

    def suggest_titles(self, content: str, count: int = 3) -> list[str]:
        """Return up to ``count`` title suggestions for ``content``."""
        prompt = Prompt(system=TITLES_SYSTEM_PROMPT.format(count=count), user=content)
        return self.generate(prompt, lambda text: _parse_titles(text, count))


def _parse_summary(text: str) -> str:
    summary = text.strip()
    if not summary:
        raise BusinessError(ErrorCode.AI_API_CALL_FAILED, detail="empty summary")
    return summary


def _parse_titles(text: str, count: int) -> list[str]:
    titles: list[str] = []
    for line in text.splitlines():
        title = _LIST_MARKER.sub("", line).strip().strip(_QUOTES).strip()
        if title and title not in titles:
            titles.append(title)
    if not titles:
        raise BusinessError(ErrorCode.AI_API_CALL_FAILED, detail="no titles in completion")
    return titles[:count]
