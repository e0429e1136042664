"""Tokens of the Mermaid ``erDiagram`` subset understood by the translator."""

from __future__ import annotations

from dataflow_ai.models.document import MANY_TO_MANY, MANY_TO_ONE, ONE_TO_MANY, ONE_TO_ONE

ROOT_KEYWORD = "erDiagram"
BLOCK_OPEN = "{"
BLOCK_CLOSE = "}"
CONNECTOR_TOKEN = "--"
DESCRIPTION_SEPARATOR = " : "
PRIMARY_KEY_MARKER = "PK"
FOREIGN_KEY_MARKER = "FK"

DEFAULT_KIND = ONE_TO_MANY

KIND_TO_CONNECTOR: dict[str, str] = {
    ONE_TO_MANY: "||--o{",
    MANY_TO_ONE: "}o--||",
    ONE_TO_ONE: "||--||",
    MANY_TO_MANY: "}o--o{",
}

CONNECTOR_TO_KIND: dict[str, str] = {
    symbol: kind for kind, symbol in KIND_TO_CONNECTOR.items()
}

KIND_TO_CARDINALITY: dict[str, str] = {
    ONE_TO_MANY: "1:N",
    MANY_TO_ONE: "N:1",
    ONE_TO_ONE: "1:1",
    MANY_TO_MANY: "N:M",
}


def connector_for(kind: str) -> str:
    return KIND_TO_CONNECTOR.get(kind, KIND_TO_CONNECTOR[DEFAULT_KIND])


def sanitize_identifier(name: str) -> str:
    """Drop every character that is not a letter or digit."""
    return "".join(char for char in name if char.isalnum())
