"""Lenient Mermaid ``erDiagram`` parser producing a ``DocumentModel``."""

from __future__ import annotations

import enum
import re

from dataflow_ai.diagram.grammar import (
    BLOCK_CLOSE,
    BLOCK_OPEN,
    CONNECTOR_TO_KIND,
    CONNECTOR_TOKEN,
    DEFAULT_KIND,
    DESCRIPTION_SEPARATOR,
    FOREIGN_KEY_MARKER,
    KIND_TO_CARDINALITY,
    PRIMARY_KEY_MARKER,
    ROOT_KEYWORD,
)
from dataflow_ai.models.document import Attribute, DocumentModel, Entity, Relationship

# Left marker, "--", right marker. Combinations outside the kind table are
# still recognized but fall back to the default kind.
_CONNECTOR_PATTERN = re.compile(r"(\|o|\|\||\}o|\}\|)--(o\||\|\||o\{|\|\{)")


class LineKind(enum.Enum):
    ROOT = "root"
    RELATIONSHIP = "relationship"
    ENTITY_OPEN = "entity_open"
    ENTITY_CLOSE = "entity_close"
    ATTRIBUTE = "attribute"
    IGNORED = "ignored"


def classify_line(line: str, *, in_entity: bool) -> LineKind:
    """Assign a stripped, non-blank line to exactly one line kind."""
    if line == ROOT_KEYWORD:
        return LineKind.ROOT
    if CONNECTOR_TOKEN in line and DESCRIPTION_SEPARATOR in line:
        return LineKind.RELATIONSHIP
    if line.endswith(BLOCK_OPEN):
        return LineKind.ENTITY_OPEN if line[:-1].split() else LineKind.IGNORED
    if line == BLOCK_CLOSE:
        return LineKind.ENTITY_CLOSE if in_entity else LineKind.IGNORED
    if in_entity and CONNECTOR_TOKEN not in line and len(line.split()) >= 2:
        return LineKind.ATTRIBUTE
    return LineKind.IGNORED


def _parse_relationship(line: str) -> Relationship | None:
    left, _, right = line.partition(DESCRIPTION_SEPARATOR)

    match = _CONNECTOR_PATTERN.search(left)
    if match:
        before, after = left[: match.start()], left[match.end() :]
        kind = CONNECTOR_TO_KIND.get(match.group(0), DEFAULT_KIND)
    else:
        before, _, after = left.partition(CONNECTOR_TOKEN)
        kind = DEFAULT_KIND

    before_tokens = before.split()
    after_tokens = after.split()
    if not before_tokens or not after_tokens:
        return None

    return Relationship(
        source=before_tokens[-1],
        target=after_tokens[0],
        kind=kind,
        description=right.strip().strip('"'),
        cardinality=KIND_TO_CARDINALITY[kind],
    )


def _parse_attribute(line: str, entity_name: str) -> Attribute:
    tokens = line.split()
    attr_type, name = tokens[0], tokens[1]

    markers: set[str] = set()
    for token in tokens[2:]:
        if token.startswith('"'):
            break
        markers.update(item.strip() for item in token.split(",") if item.strip())

    return Attribute(
        name=name,
        type=attr_type,
        is_primary_key=PRIMARY_KEY_MARKER in markers,
        is_foreign_key=FOREIGN_KEY_MARKER in markers,
        description=f"The {name.lower()} of the {entity_name}",
    )


def parse_diagram(text: str) -> DocumentModel:
    """Parse diagram text into a document model.

    Unrecognized lines are skipped rather than reported, and an entity is
    only kept once its closing brace is seen. Relationship endpoints are not
    checked against declared entities.
    """
    entities: list[Entity] = []
    relationships: list[Relationship] = []

    entity_name: str | None = None
    attributes: list[Attribute] = []

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        kind = classify_line(line, in_entity=entity_name is not None)

        if kind is LineKind.RELATIONSHIP:
            relationship = _parse_relationship(line)
            if relationship is not None:
                relationships.append(relationship)
        elif kind is LineKind.ENTITY_OPEN:
            entity_name = line[:-1].split()[-1]
            attributes = []
        elif kind is LineKind.ENTITY_CLOSE:
            assert entity_name is not None
            entities.append(
                Entity(
                    name=entity_name,
                    description=f"Represents a {entity_name.lower()} in the system",
                    attributes=attributes,
                )
            )
            entity_name = None
            attributes = []
        elif kind is LineKind.ATTRIBUTE:
            assert entity_name is not None
            attributes.append(_parse_attribute(line, entity_name))

    return DocumentModel(entities=entities, relationships=relationships)
