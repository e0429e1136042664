"""Typed models shared by the generation client and the translator."""

from dataflow_ai.models.document import (
    ATTRIBUTE_TYPES,
    MANY_TO_MANY,
    MANY_TO_ONE,
    ONE_TO_MANY,
    ONE_TO_ONE,
    RELATIONSHIP_KINDS,
    Attribute,
    DocumentModel,
    Entity,
    Relationship,
)
from dataflow_ai.models.generation import GenerationConfig, GenerationRequest

__all__ = [
    "ATTRIBUTE_TYPES",
    "MANY_TO_MANY",
    "MANY_TO_ONE",
    "ONE_TO_MANY",
    "ONE_TO_ONE",
    "RELATIONSHIP_KINDS",
    "Attribute",
    "DocumentModel",
    "Entity",
    "Relationship",
    "GenerationConfig",
    "GenerationRequest",
]
