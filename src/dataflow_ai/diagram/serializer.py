"""Serialize a ``DocumentModel`` into Mermaid ``erDiagram`` text."""

from __future__ import annotations

from dataflow_ai.diagram.grammar import (
    BLOCK_CLOSE,
    BLOCK_OPEN,
    DESCRIPTION_SEPARATOR,
    FOREIGN_KEY_MARKER,
    PRIMARY_KEY_MARKER,
    ROOT_KEYWORD,
    connector_for,
    sanitize_identifier,
)
from dataflow_ai.models.document import Attribute, DocumentModel

ENTITY_INDENT = "    "
ATTRIBUTE_INDENT = ENTITY_INDENT * 2


def _attribute_line(attribute: Attribute) -> str:
    markers = []
    if attribute.is_primary_key:
        markers.append(PRIMARY_KEY_MARKER)
    if attribute.is_foreign_key:
        markers.append(FOREIGN_KEY_MARKER)

    line = f"{ATTRIBUTE_INDENT}{attribute.type} {attribute.name}"
    if markers:
        line += " " + ",".join(markers)
    return line


def serialize_document(document: DocumentModel) -> str:
    """Render entity blocks first, then one line per relationship.

    Entity names and relationship endpoints lose every non-alphanumeric
    character, so two names differing only in punctuation or spacing
    collapse to the same identifier.
    """
    lines = [ROOT_KEYWORD]

    for entity in document.entities:
        lines.append(f"{ENTITY_INDENT}{sanitize_identifier(entity.name)} {BLOCK_OPEN}")
        lines.extend(_attribute_line(attribute) for attribute in entity.attributes)
        lines.append(f"{ENTITY_INDENT}{BLOCK_CLOSE}")

    for relationship in document.relationships:
        description = relationship.description.replace('"', "'")
        lines.append(
            f"{ENTITY_INDENT}{sanitize_identifier(relationship.source)} "
            f"{connector_for(relationship.kind)} "
            f"{sanitize_identifier(relationship.target)}"
            f'{DESCRIPTION_SEPARATOR}"{description}"'
        )

    return "\n".join(lines) + "\n"
