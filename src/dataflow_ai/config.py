"""Application configuration loading and validation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_GEMINI_API_VERSION = "v1beta"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com"


class ConfigError(ValueError):
    """Raised when configuration cannot be loaded safely."""


class Settings(BaseModel):
    """Runtime settings loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    gemini_api_keys: tuple[str, ...] = ()
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_api_version: str = DEFAULT_GEMINI_API_VERSION
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    max_attempts: int = Field(default=3, ge=1)
    request_timeout_seconds: int = Field(default=60, gt=0)

    @field_validator("gemini_api_keys", mode="before")
    @classmethod
    def split_api_keys(cls, value: str | list[str] | tuple[str, ...] | None) -> tuple[str, ...]:
        if value is None:
            return ()
        items = value.split(",") if isinstance(value, str) else value
        return tuple(item.strip() for item in items if item and item.strip())

    @field_validator("gemini_model", "gemini_api_version")
    @classmethod
    def validate_non_empty(cls, value: str) -> str:
        normalized = value.strip().strip("/")
        if not normalized:
            raise ValueError("value cannot be empty.")
        return normalized

    @field_validator("gemini_base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        normalized = value.strip().rstrip("/")
        if not normalized.startswith(("https://", "http://")):
            raise ValueError(
                "GEMINI_BASE_URL must start with 'https://' or 'http://'."
            )
        return normalized

    def validate_llm_requirements(self) -> None:
        """Fail with a friendly message when API keys are required."""
        if not self.gemini_api_keys:
            raise ConfigError(
                "GEMINI_API_KEYS (or GEMINI_API_KEY) is required for generation commands."
            )


def _env_value(name: str, default: str | None = None) -> str | None:
    import os

    value = os.getenv(name, default)
    if value is None:
        return None
    return value.strip()


def load_settings() -> Settings:
    """Load settings from environment variables."""
    payload = {
        "gemini_api_keys": _env_value("GEMINI_API_KEYS") or _env_value("GEMINI_API_KEY", ""),
        "gemini_model": _env_value("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        "gemini_api_version": _env_value("GEMINI_API_VERSION", DEFAULT_GEMINI_API_VERSION),
        "gemini_base_url": _env_value("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL),
        "max_attempts": _env_value("GEMINI_MAX_ATTEMPTS", "3"),
        "request_timeout_seconds": _env_value("GEMINI_TIMEOUT_SECONDS", "60"),
    }

    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        messages = []
        for err in exc.errors():
            field = ".".join(str(item) for item in err["loc"])
            messages.append(f"- {field}: {err['msg']}")
        raise ConfigError(
            "Invalid configuration values:\n" + "\n".join(messages)
        ) from exc
