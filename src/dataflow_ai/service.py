"""Diagram and documentation generation built on the generation client."""

from __future__ import annotations

import copy
import json
import logging
from typing import Any

from dataflow_ai.diagram.parser import parse_diagram
from dataflow_ai.diagram.serializer import serialize_document
from dataflow_ai.diagram.validator import document_from_json
from dataflow_ai.llm.normalizer import ResponseShape, classify
from dataflow_ai.llm.retry import GenerationClient
from dataflow_ai.models.document import DocumentModel
from dataflow_ai.prompts.generation import (
    build_api_documentation_prompt,
    build_dfd_diagram_prompt,
    build_dfd_documentation_prompt,
    build_er_diagram_prompt,
    build_er_document_prompt,
)

logger = logging.getLogger(__name__)

FLOWCHART_ROOT = "flowchart TD"

DEFAULT_ER_DIAGRAM = """erDiagram
    User {
        string id PK
        string name
    }
    Record {
        string id PK
        string userId FK
    }
    User ||--o{ Record : "owns"
"""

DEFAULT_DFD_DIAGRAM = """flowchart TD
    A[User] --> B(Process)
    B --> C{{Data Store}}
    C --> B
    B --> A"""

DEFAULT_DFD_DOCUMENTATION: dict[str, Any] = {
    "systemOverview": "Default system overview",
    "level0DFD": "Default Level 0 DFD description",
    "externalEntities": [],
    "processes": [],
    "dataStores": [],
    "dataFlows": [],
    "systemBoundaries": "Default system boundaries",
}

DEFAULT_API_DOCUMENTATION: dict[str, Any] = {
    "openapi": "3.0.0",
    "info": {
        "title": "Default API",
        "version": "1.0.0",
        "description": "Default API documentation",
    },
    "paths": {},
}


def generate_er_diagram(client: GenerationClient, description: str) -> str:
    """Generate Mermaid ER text, re-rendered through the document model.

    Responses that are neither diagram nor JSON shaped yield
    ``DEFAULT_ER_DIAGRAM``. JSON documents missing entities or relationships
    raise ``ShapeValidationError``.
    """
    bundle = build_er_diagram_prompt(description)
    text = client.generate_text(bundle.prompt)

    shape = classify(text)
    if shape is ResponseShape.DIAGRAM:
        document = parse_diagram(text)
        if document.entities:
            return serialize_document(document)
        logger.warning("Generated diagram declared no entities; using default diagram.")
        return DEFAULT_ER_DIAGRAM
    if shape is ResponseShape.JSON:
        return serialize_document(document_from_json(text))

    logger.warning("Generated ER response was not diagram-shaped; using default diagram.")
    return DEFAULT_ER_DIAGRAM


def generate_er_document(client: GenerationClient, description: str) -> DocumentModel:
    """Generate the structured entity/relationship document."""
    bundle = build_er_document_prompt(description)
    text = client.generate_text(bundle.prompt)

    shape = classify(text)
    if shape is ResponseShape.JSON:
        return document_from_json(text)
    if shape is ResponseShape.DIAGRAM:
        return parse_diagram(text)

    logger.warning("Generated ER document was neither JSON nor diagram; using default.")
    return parse_diagram(DEFAULT_ER_DIAGRAM)


def generate_dfd_diagram(client: GenerationClient, description: str) -> str:
    """Generate a Level 0 data flow diagram as a Mermaid flowchart."""
    bundle = build_dfd_diagram_prompt(description)
    text = client.generate_text(bundle.prompt)
    if not text.startswith(FLOWCHART_ROOT):
        logger.warning("Generated DFD did not start with %r; using default.", FLOWCHART_ROOT)
        return DEFAULT_DFD_DIAGRAM
    return text


def generate_dfd_documentation(client: GenerationClient, description: str) -> dict[str, Any]:
    """Generate DFD documentation; missing sections are filled from the default."""
    bundle = build_dfd_documentation_prompt(description)
    text = client.generate_text(bundle.prompt)

    if classify(text) is not ResponseShape.JSON:
        logger.warning("Generated DFD documentation was not JSON; using default.")
        return copy.deepcopy(DEFAULT_DFD_DOCUMENTATION)

    payload = json.loads(text)
    documentation = copy.deepcopy(DEFAULT_DFD_DOCUMENTATION)
    documentation.update(payload)
    return documentation


def generate_api_documentation(client: GenerationClient, description: str) -> dict[str, Any]:
    """Generate OpenAPI documentation, or ``DEFAULT_API_DOCUMENTATION`` for non-JSON text."""
    bundle = build_api_documentation_prompt(description)
    text = client.generate_text(bundle.prompt)

    if classify(text) is not ResponseShape.JSON:
        logger.warning("Generated API documentation was not JSON; using default.")
        return copy.deepcopy(DEFAULT_API_DOCUMENTATION)
    return json.loads(text)
