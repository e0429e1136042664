import json

import pytest

from dataflow_ai.diagram.validator import (
    document_from_json,
    document_to_json,
    validate_document_shape,
)
from dataflow_ai.errors import ShapeValidationError
from dataflow_ai.models.document import DocumentModel, Entity, Relationship


def test_document_from_json_accepts_camel_case_fields():
    document = document_from_json(
        json.dumps(
            {
                "entities": [
                    {
                        "name": "User",
                        "description": "A person",
                        "attributes": [
                            {"name": "id", "type": "int", "isPrimaryKey": True},
                        ],
                    }
                ],
                "relationships": [
                    {"from": "User", "to": "Order", "type": "one-to-many", "description": "places"},
                ],
            }
        )
    )

    assert document.entities[0].attributes[0].is_primary_key
    assert document.relationships[0].source == "User"
    assert document.relationships[0].kind == "one-to-many"


@pytest.mark.parametrize(
    ("payload", "missing"),
    [
        ({"entities": []}, "relationships"),
        ({"relationships": []}, "entities"),
        ({}, "entities, relationships"),
    ],
)
def test_missing_fields_are_reported(payload, missing):
    with pytest.raises(ShapeValidationError, match=missing) as excinfo:
        validate_document_shape(payload)

    assert excinfo.value.kind == "shape"


def test_non_object_root_is_rejected():
    with pytest.raises(ShapeValidationError):
        validate_document_shape([])


def test_non_list_field_is_rejected():
    with pytest.raises(ShapeValidationError, match="entities"):
        validate_document_shape({"entities": {}, "relationships": []})


def test_entity_without_name_is_a_shape_error():
    with pytest.raises(ShapeValidationError, match="name"):
        document_from_json('{"entities": [{"description": "x"}], "relationships": []}')


def test_invalid_json_is_a_shape_error():
    with pytest.raises(ShapeValidationError):
        document_from_json("{nope")


def test_document_to_json_round_trips():
    document = DocumentModel(
        entities=[Entity(name="A")],
        relationships=[Relationship(source="A", target="B", description="d", cardinality="1:N")],
    )

    payload = json.loads(document_to_json(document))

    assert payload["relationships"][0]["from"] == "A"
    assert payload["relationships"][0]["to"] == "B"
    assert document_from_json(document_to_json(document)).model_dump() == document.model_dump()
