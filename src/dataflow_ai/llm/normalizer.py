"""Cleanup and shape detection for raw model responses."""

from __future__ import annotations

import enum
import json
import re

DIAGRAM_ROOT_KEYWORD = "erDiagram"

_FENCE_PATTERN = re.compile(r"```(?:json|mermaid)?", re.IGNORECASE)


class ResponseShape(str, enum.Enum):
    JSON = "json"
    DIAGRAM = "diagram"
    OTHER = "other"


def normalize(raw: str) -> str:
    """Strip code fences and surrounding whitespace.

    Removing a fence can splice stray backticks into a new fence, so the
    cleanup repeats until the text stops changing.
    """
    text = raw or ""
    while True:
        cleaned = _FENCE_PATTERN.sub("", text).strip().lstrip("\ufeff").strip()
        if cleaned == text:
            return cleaned
        text = cleaned


def classify(text: str) -> ResponseShape:
    """Classify normalized text by its leading token."""
    if text.startswith("{"):
        return ResponseShape.JSON
    if text.startswith(DIAGRAM_ROOT_KEYWORD):
        return ResponseShape.DIAGRAM
    return ResponseShape.OTHER


def is_valid_json(text: str) -> bool:
    try:
        json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return False
    return True
