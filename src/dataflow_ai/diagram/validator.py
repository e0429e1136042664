"""JSON boundary checks for the document model."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from dataflow_ai.errors import ShapeValidationError
from dataflow_ai.models.document import DocumentModel

REQUIRED_FIELDS = ("entities", "relationships")


def validate_document_shape(payload: Any) -> dict[str, Any]:
    """Ensure a decoded JSON document carries entities and relationships.

    Missing fields are reported, never filled in.
    """
    if not isinstance(payload, dict):
        raise ShapeValidationError("Document payload root must be a JSON object.")

    missing = [name for name in REQUIRED_FIELDS if name not in payload]
    if missing:
        raise ShapeValidationError(
            "Document payload is missing required field(s): " + ", ".join(missing)
        )

    for name in REQUIRED_FIELDS:
        if not isinstance(payload[name], list):
            raise ShapeValidationError(f"Document field '{name}' must be a list.")
    return payload


def document_from_json(text: str) -> DocumentModel:
    """Decode, shape-check and build a document model from JSON text."""
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise ShapeValidationError(f"Document is not valid JSON: {exc}") from exc

    validate_document_shape(payload)

    try:
        return DocumentModel.model_validate(payload)
    except ValidationError as exc:
        messages = []
        for err in exc.errors():
            field = ".".join(str(item) for item in err["loc"])
            messages.append(f"- {field}: {err['msg']}")
        raise ShapeValidationError(
            "Document violated the entity/relationship contract:\n" + "\n".join(messages)
        ) from exc


def document_to_json(document: DocumentModel, *, indent: int | None = 2) -> str:
    return json.dumps(document.model_dump(by_alias=True), indent=indent)
