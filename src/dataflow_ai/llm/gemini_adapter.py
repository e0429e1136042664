"""Gemini implementation of the text transport interface."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from urllib import error, parse, request

from dataflow_ai.errors import QuotaExceededError, TransportError
from dataflow_ai.llm.base import TextTransport
from dataflow_ai.models.generation import GenerationConfig

logger = logging.getLogger(__name__)

QUOTA_STATUS_CODES = frozenset({429})
QUOTA_MARKERS = (
    "quota",
    "rate limit",
    "rate-limit",
    "ratelimit",
    "resource_exhausted",
    "resource has been exhausted",
    "too many requests",
)


def is_quota_failure(status: int | None, body: str) -> bool:
    """Return True when a failed response signals rate limiting or quota exhaustion."""
    if status in QUOTA_STATUS_CODES:
        return True
    lowered = body.lower()
    return any(marker in lowered for marker in QUOTA_MARKERS)


@dataclass(frozen=True)
class GeminiTransport(TextTransport):
    """Send prompts to the Gemini ``generateContent`` endpoint."""

    model: str
    api_version: str = "v1beta"
    base_url: str = "https://generativelanguage.googleapis.com"
    timeout_seconds: int = 60

    def endpoint(self, credential: str) -> str:
        model_path = self.model if self.model.startswith("models/") else f"models/{self.model}"
        query = parse.urlencode({"key": credential})
        return (
            f"{self.base_url.rstrip('/')}/{self.api_version}/{model_path}:generateContent?{query}"
        )

    def send(self, prompt: str, config: GenerationConfig, credential: str) -> str:
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": config.to_wire(),
        }

        url = self.endpoint(credential)
        logger.info("Sending request to Gemini API: %s", self.endpoint("REDACTED"))
        req = request.Request(
            url,
            method="POST",
            data=json.dumps(body).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

        try:
            with request.urlopen(req, timeout=self.timeout_seconds) as response:
                payload = json.loads(response.read().decode("utf-8"))
        except error.HTTPError as exc:
            details = exc.read().decode("utf-8", errors="replace")
            if is_quota_failure(exc.code, details):
                raise QuotaExceededError(
                    f"Gemini quota exceeded with HTTP {exc.code}: {details}",
                    status=exc.code,
                ) from exc
            logger.error("Gemini API error (HTTP %s): %s", exc.code, details)
            raise TransportError(
                f"Gemini request failed with HTTP {exc.code}: {details}",
                status=exc.code,
            ) from exc
        except error.URLError as exc:
            raise TransportError(f"Gemini request failed: {exc.reason}") from exc
        except TimeoutError as exc:
            raise TransportError("Gemini request timed out.") from exc
        except UnicodeDecodeError as exc:
            raise TransportError("Gemini response was not valid UTF-8.") from exc
        except (json.JSONDecodeError, RecursionError) as exc:
            raise TransportError("Gemini response was not valid JSON.") from exc

        logger.info("Received successful response from Gemini API.")
        return self._extract_text(payload)

    @staticmethod
    def _extract_text(payload: object) -> str:
        if not isinstance(payload, dict):
            raise TransportError("Gemini response has invalid format.")

        candidates = payload.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            raise TransportError("Gemini response is missing candidates.")

        first = candidates[0]
        if not isinstance(first, dict):
            raise TransportError("Gemini response has invalid candidate format.")

        content = first.get("content")
        if not isinstance(content, dict):
            raise TransportError("Gemini response is missing candidate content.")

        parts = content.get("parts")
        if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
            raise TransportError("Gemini response is missing content parts.")

        text = parts[0].get("text")
        if not isinstance(text, str):
            raise TransportError("Gemini response part has no text.")
        return text
