"""Generation client, transports and factory helpers."""

from dataflow_ai.config import Settings
from dataflow_ai.llm.base import TextTransport
from dataflow_ai.llm.credentials import CredentialPool
from dataflow_ai.llm.gemini_adapter import GeminiTransport
from dataflow_ai.llm.normalizer import ResponseShape, classify, is_valid_json, normalize
from dataflow_ai.llm.retry import GenerationClient


def create_generation_client(settings: Settings) -> GenerationClient:
    """Create the default Gemini-backed client for current settings."""
    settings.validate_llm_requirements()
    transport = GeminiTransport(
        model=settings.gemini_model,
        api_version=settings.gemini_api_version,
        base_url=settings.gemini_base_url,
        timeout_seconds=settings.request_timeout_seconds,
    )
    return GenerationClient(
        transport,
        CredentialPool(settings.gemini_api_keys),
        max_attempts=settings.max_attempts,
    )


__all__ = [
    "CredentialPool",
    "GeminiTransport",
    "GenerationClient",
    "ResponseShape",
    "TextTransport",
    "classify",
    "create_generation_client",
    "is_valid_json",
    "normalize",
]
