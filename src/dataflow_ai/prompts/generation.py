"""Prompt builders for diagram and documentation generation requests."""

from __future__ import annotations

import json
from dataclasses import dataclass

from dataflow_ai.diagram.grammar import KIND_TO_CONNECTOR, ROOT_KEYWORD
from dataflow_ai.models.document import ATTRIBUTE_TYPES, RELATIONSHIP_KINDS


class PromptBuildError(RuntimeError):
    """Raised when a generation prompt cannot be built."""


@dataclass(frozen=True)
class PromptBundle:
    """Inspectable prompt sent to the generation client."""

    description: str
    expected_output: str
    prompt: str


_ER_DOCUMENT_CONTRACT = {
    "entities": [
        {
            "name": "Alphanumeric entity name, no spaces",
            "description": "What the entity represents",
            "attributes": [
                {
                    "name": "Alphanumeric attribute name",
                    "type": " | ".join(ATTRIBUTE_TYPES),
                    "isPrimaryKey": False,
                    "isForeignKey": False,
                    "description": "What the attribute holds",
                }
            ],
        }
    ],
    "relationships": [
        {
            "from": "Entity name",
            "to": "Entity name",
            "kind": " | ".join(RELATIONSHIP_KINDS),
            "description": "Verb phrase describing the link",
            "cardinality": "1:N",
        }
    ],
}

_DFD_DOCUMENTATION_CONTRACT = {
    "systemOverview": "A brief description of the system and its main purpose",
    "level0DFD": "Description of the Level 0 DFD showing the main processes and data flows",
    "externalEntities": [
        {"name": "", "description": "", "interactions": ""},
    ],
    "processes": [
        {"name": "", "description": "", "inputs": "", "outputs": ""},
    ],
    "dataStores": [
        {"name": "", "description": "", "data": ""},
    ],
    "dataFlows": [
        {"from": "", "to": "", "description": "", "data": ""},
    ],
    "systemBoundaries": "Description of what is inside and outside the system",
}


def _normalized_description(description: str) -> str:
    normalized = description.strip()
    if not normalized:
        raise PromptBuildError("System description cannot be empty.")
    return normalized


def build_er_diagram_prompt(description: str) -> PromptBundle:
    """Ask for a Mermaid ER diagram of the described system."""
    normalized = _normalized_description(description)
    connectors = "\n".join(
        f"  - {kind}: {symbol}" for kind, symbol in KIND_TO_CONNECTOR.items()
    )
    prompt = (
        "Given the following system description, generate an entity relationship "
        "diagram in Mermaid.js format.\n"
        "Rules:\n"
        f"1. Start with '{ROOT_KEYWORD}'.\n"
        "2. Declare each entity as 'Name {' followed by one attribute per line "
        "('type name', optionally followed by PK or FK) and a closing '}'.\n"
        f"3. Attribute types must be one of: {', '.join(ATTRIBUTE_TYPES)}.\n"
        "4. Entity and attribute names must be alphanumeric with no spaces.\n"
        "5. After all entities, declare relationships as "
        "'From <connector> To : \"description\"' using these connectors:\n"
        f"{connectors}\n"
        "6. Do not include markdown formatting, backticks or explanations.\n\n"
        f"System description:\n{normalized}\n\n"
        f"Important: Return ONLY the Mermaid code starting with '{ROOT_KEYWORD}'."
    )
    return PromptBundle(description=normalized, expected_output="diagram", prompt=prompt)


def build_er_document_prompt(description: str) -> PromptBundle:
    """Ask for the entity/relationship document as JSON."""
    normalized = _normalized_description(description)
    contract_json = json.dumps(_ER_DOCUMENT_CONTRACT, indent=2)
    prompt = (
        "Given the following system description, identify the data entities, "
        "their attributes and the relationships between them.\n"
        "Return a JSON object with exactly this structure:\n"
        f"{contract_json}\n\n"
        f"System description:\n{normalized}\n\n"
        "Important: Return ONLY the JSON object. Do not include any other text "
        "or formatting."
    )
    return PromptBundle(description=normalized, expected_output="json", prompt=prompt)


def build_dfd_diagram_prompt(description: str) -> PromptBundle:
    """Ask for a Level 0 data flow diagram as a Mermaid flowchart."""
    normalized = _normalized_description(description)
    prompt = (
        "Given the following system description, generate a Level 0 Data Flow "
        "Diagram in Mermaid.js format.\n"
        "Focus on identifying main processes, external entities, and data flows.\n"
        "Rules:\n"
        "1. Start with 'flowchart TD'.\n"
        "2. Use square brackets [] for external entities.\n"
        "3. Use round brackets () for processes.\n"
        "4. Use double curly brackets {{}} for data stores.\n"
        "5. Use --> for connections.\n"
        "6. Use simple node IDs like A, B, C.\n"
        "7. Do not include markdown formatting or backticks.\n\n"
        f"System description:\n{normalized}\n\n"
        "Important: Return ONLY the Mermaid code starting with 'flowchart TD'."
    )
    return PromptBundle(description=normalized, expected_output="flowchart", prompt=prompt)


def build_dfd_documentation_prompt(description: str) -> PromptBundle:
    """Ask for structured data flow documentation as JSON."""
    normalized = _normalized_description(description)
    contract_json = json.dumps(_DFD_DOCUMENTATION_CONTRACT, indent=2)
    prompt = (
        "Given the following system description, generate detailed Data Flow "
        "Diagram (DFD) documentation in JSON format.\n"
        "Return a JSON object with the following structure:\n"
        f"{contract_json}\n\n"
        f"System description:\n{normalized}\n\n"
        "Important: Return ONLY the JSON object with the DFD documentation."
    )
    return PromptBundle(description=normalized, expected_output="json", prompt=prompt)


def build_api_documentation_prompt(description: str) -> PromptBundle:
    """Ask for OpenAPI documentation of the described system as JSON."""
    normalized = _normalized_description(description)
    prompt = (
        "Given the following system description, generate OpenAPI (Swagger) "
        "documentation in JSON format.\n"
        "Include endpoints, request/response schemas, and descriptions.\n"
        "The response must be a single valid OpenAPI 3.0 JSON object with "
        "'openapi', 'info' and 'paths' keys.\n"
        "Do not include markdown formatting or backticks.\n\n"
        f"System description:\n{normalized}\n\n"
        "Important: Return ONLY the OpenAPI JSON object."
    )
    return PromptBundle(description=normalized, expected_output="json", prompt=prompt)
