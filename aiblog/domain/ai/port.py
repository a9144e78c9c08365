"""
Port interfaces (ABCs) for the AI domain.

Ports define the contracts the AI service requires from the outside world.
Adapters implement these interfaces.
The service never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Prompt:
    """A single-turn prompt: system instructions plus user content."""

    system: str
    user: str


class TextGenerationPort(ABC):
    """Port for generating text with a large language model."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name used in logs."""
        raise NotImplementedError

    @abstractmethod
    def complete(self, prompt: Prompt) -> str:
        """Return the model's completion for ``prompt``.

        Raises:
            BusinessError: AI_API_CALL_FAILED when the provider cannot be
                reached, rejects the call or answers with no usable text.
        """
        raise NotImplementedError
