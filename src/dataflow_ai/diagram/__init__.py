"""Mermaid ER diagram translation utilities."""

from dataflow_ai.diagram.parser import LineKind, classify_line, parse_diagram
from dataflow_ai.diagram.serializer import serialize_document
from dataflow_ai.diagram.validator import (
    document_from_json,
    document_to_json,
    validate_document_shape,
)

__all__ = [
    "LineKind",
    "classify_line",
    "parse_diagram",
    "serialize_document",
    "document_from_json",
    "document_to_json",
    "validate_document_shape",
]
