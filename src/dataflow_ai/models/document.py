"""Structured form of an entity/relationship diagram."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

ATTRIBUTE_TYPES = ("int", "string", "date", "decimal", "boolean", "float")

ONE_TO_ONE = "one-to-one"
ONE_TO_MANY = "one-to-many"
MANY_TO_ONE = "many-to-one"
MANY_TO_MANY = "many-to-many"

RELATIONSHIP_KINDS = (ONE_TO_ONE, ONE_TO_MANY, MANY_TO_ONE, MANY_TO_MANY)


class Attribute(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    type: str = "string"
    is_primary_key: bool = Field(default=False, alias="isPrimaryKey")
    is_foreign_key: bool = Field(default=False, alias="isForeignKey")
    description: str = ""


class Entity(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    attributes: list[Attribute] = Field(default_factory=list)


class Relationship(BaseModel):
    """Directed link between two entities.

    ``source`` and ``target`` are not required to name declared entities.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    kind: str = Field(
        default=ONE_TO_MANY,
        validation_alias=AliasChoices("kind", "type"),
    )
    description: str = ""
    cardinality: str = ""


class DocumentModel(BaseModel):
    """Entities and relationships in declaration order."""

    model_config = ConfigDict(frozen=True)

    entities: list[Entity] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)

    def entity_names(self) -> list[str]:
        return [entity.name for entity in self.entities]
