"""Bounded-retry generation client with credential rotation."""

from __future__ import annotations

import logging

from dataflow_ai.errors import (
    GenerationError,
    MalformedOutputError,
    QuotaExceededError,
    RetryBudgetExhaustedError,
    TransportError,
)
from dataflow_ai.llm.base import TextTransport
from dataflow_ai.llm.credentials import CredentialPool
from dataflow_ai.llm.normalizer import ResponseShape, classify, is_valid_json, normalize
from dataflow_ai.models.generation import GenerationConfig, GenerationRequest

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3

JSON_ONLY_DIRECTIVE = (
    "IMPORTANT: Your previous response was not valid JSON. "
    "Return ONLY a single valid JSON object with no markdown fences, "
    "comments or explanations."
)


def strengthen_prompt(prompt: str) -> str:
    """Append the JSON-only directive once."""
    if prompt.endswith(JSON_ONLY_DIRECTIVE):
        return prompt
    return f"{prompt}\n\n{JSON_ONLY_DIRECTIVE}"


class GenerationClient:
    """Issue generation requests through a shared credential pool.

    Quota failures rotate the pool and retry; empty text and JSON-shaped text
    that does not parse are retried, the latter with a strengthened prompt.
    Every retry consumes the same attempt budget. Any other transport failure
    is raised immediately.
    """

    def __init__(
        self,
        transport: TextTransport,
        pool: CredentialPool,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.transport = transport
        self.pool = pool
        self.max_attempts = max_attempts

    def generate_text(self, prompt: str, config: GenerationConfig | None = None) -> str:
        request = GenerationRequest(prompt=prompt, config=config or GenerationConfig())
        return self.generate(request)

    def generate(self, request: GenerationRequest) -> str:
        prompt = request.prompt
        last_error: GenerationError | None = None

        for attempt in range(1, self.max_attempts + 1):
            logger.info("Issuing generation request (attempt %s/%s).", attempt, self.max_attempts)
            credential = self.pool.current()
            try:
                raw = self.transport.send(prompt, request.config, credential)
            except QuotaExceededError as exc:
                exc.attempts = attempt
                last_error = exc
                self.pool.rotate_from(credential)
                logger.warning(
                    "Quota exceeded on attempt %s/%s; rotated to credential %s.",
                    attempt,
                    self.max_attempts,
                    self.pool.index,
                )
                continue
            except TransportError as exc:
                exc.attempts = attempt
                logger.error("Generation failed on attempt %s: %s", attempt, exc)
                raise

            text = normalize(raw)
            if not text:
                last_error = MalformedOutputError(
                    "Model returned empty content.", attempts=attempt
                )
                logger.warning(
                    "Empty response on attempt %s/%s. Retrying...",
                    attempt,
                    self.max_attempts,
                )
                continue

            if classify(text) is ResponseShape.JSON and not is_valid_json(text):
                last_error = MalformedOutputError(
                    "Model returned JSON-shaped content that does not parse.",
                    attempts=attempt,
                )
                logger.warning(
                    "Invalid JSON on attempt %s/%s. Retrying with JSON-only directive...",
                    attempt,
                    self.max_attempts,
                )
                prompt = strengthen_prompt(request.prompt)
                continue

            logger.info("Generation succeeded on attempt %s.", attempt)
            return text

        logger.error(
            "Generation exhausted %s attempts; last failure: %s",
            self.max_attempts,
            last_error,
        )
        raise RetryBudgetExhaustedError(
            f"Generation exhausted after {self.max_attempts} attempts: {last_error}",
            attempts=self.max_attempts,
            last_error=last_error,
        )
