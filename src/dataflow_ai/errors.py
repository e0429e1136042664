"""Failure taxonomy shared by the generation client and the translator."""

from __future__ import annotations


class GenerationError(RuntimeError):
    """Base error for generation and translation failures.

    ``kind`` names the failure category and ``attempts`` records how many
    endpoint calls had been issued when the error surfaced, so callers can
    decide whether to fall back to a default payload.
    """

    kind = "generation"

    def __init__(self, message: str, *, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class TransportError(GenerationError):
    """Raised for non-quota HTTP errors, connectivity errors and bad envelopes."""

    kind = "transport"

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message, attempts=attempts)
        self.status = status


class QuotaExceededError(GenerationError):
    """Raised when the endpoint reports rate limiting or quota exhaustion."""

    kind = "quota"

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message, attempts=attempts)
        self.status = status


class MalformedOutputError(GenerationError):
    """Raised when the model returns empty text or unparseable JSON."""

    kind = "malformed"


class ShapeValidationError(GenerationError):
    """Raised when a JSON document lacks the fields a diagram needs."""

    kind = "shape"


class RetryBudgetExhaustedError(GenerationError):
    """Raised when every allowed attempt failed with a retryable error."""

    kind = "exhausted"

    def __init__(
        self,
        message: str,
        *,
        attempts: int,
        last_error: GenerationError | None = None,
    ) -> None:
        super().__init__(message, attempts=attempts)
        self.last_error = last_error
