"""Typed generation request passed to the generation client."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerationConfig(BaseModel):
    """Sampling parameters biased toward deterministic, truncation-safe output."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    top_p: float = Field(default=0.2, gt=0.0, le=1.0)
    top_k: int = Field(default=10, ge=1)
    max_output_tokens: int = Field(default=2048, ge=1)

    def to_wire(self) -> dict[str, float | int]:
        return {
            "temperature": self.temperature,
            "topP": self.top_p,
            "topK": self.top_k,
            "maxOutputTokens": self.max_output_tokens,
        }


class GenerationRequest(BaseModel):
    """Immutable prompt plus tuning configuration."""

    model_config = ConfigDict(frozen=True)

    prompt: str
    config: GenerationConfig = Field(default_factory=GenerationConfig)

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt cannot be empty.")
        return value
