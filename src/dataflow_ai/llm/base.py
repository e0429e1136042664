"""Provider-independent transport interface for text generation."""

from __future__ import annotations

from abc import ABC, abstractmethod

from dataflow_ai.models.generation import GenerationConfig


class TextTransport(ABC):
    """Sends one prompt to a generation endpoint with a given credential."""

    @abstractmethod
    def send(self, prompt: str, config: GenerationConfig, credential: str) -> str:
        """Return the raw generated text.

        Raises ``QuotaExceededError`` when the endpoint signals rate limiting
        and ``TransportError`` for every other failure.
        """
