import json

import pytest

from dataflow_ai import service
from dataflow_ai.errors import ShapeValidationError
from dataflow_ai.prompts import PromptBuildError


def test_er_diagram_is_reparsed_and_rendered(make_client, sample_diagram):
    client, transport = make_client([f"```mermaid\n{sample_diagram}```"])

    result = service.generate_er_diagram(client, "A shop where users place orders")

    assert result == sample_diagram
    assert "A shop where users place orders" in transport.calls[0][0]


def test_er_diagram_from_json_document(make_client):
    payload = {
        "entities": [{"name": "Order Item", "attributes": [{"name": "id", "type": "int", "isPrimaryKey": True}]}],
        "relationships": [],
    }
    client, _ = make_client([json.dumps(payload)])

    result = service.generate_er_diagram(client, "items")

    assert result == "erDiagram\n    OrderItem {\n        int id PK\n    }\n"


def test_er_diagram_json_without_relationships_raises(make_client):
    client, _ = make_client(['{"entities": []}'])

    with pytest.raises(ShapeValidationError):
        service.generate_er_diagram(client, "x")


def test_er_diagram_falls_back_on_prose(make_client):
    client, _ = make_client(["Sorry, I cannot draw that."])

    assert service.generate_er_diagram(client, "x") == service.DEFAULT_ER_DIAGRAM


def test_er_diagram_without_entities_falls_back(make_client):
    client, _ = make_client(["erDiagram\n    nonsense"])

    assert service.generate_er_diagram(client, "x") == service.DEFAULT_ER_DIAGRAM


def test_er_document_from_json(make_client):
    client, _ = make_client(['{"entities": [{"name": "User"}], "relationships": []}'])

    document = service.generate_er_document(client, "users")

    assert document.entity_names() == ["User"]


def test_er_document_from_diagram(make_client, sample_diagram):
    client, _ = make_client([sample_diagram])

    document = service.generate_er_document(client, "shop")

    assert document.entity_names() == ["User", "Order"]


def test_er_document_fallback(make_client):
    client, _ = make_client(["no idea"])

    document = service.generate_er_document(client, "x")

    assert document.entity_names() == ["User", "Record"]


def test_dfd_diagram_passthrough_and_fallback(make_client):
    diagram = "flowchart TD\n    A[User] --> B(Login)"
    client, _ = make_client([diagram, "graph LR\n A --> B"])

    assert service.generate_dfd_diagram(client, "login") == diagram
    assert service.generate_dfd_diagram(client, "login") == service.DEFAULT_DFD_DIAGRAM


def test_dfd_documentation_fills_missing_sections(make_client):
    client, _ = make_client(['{"systemOverview": "Auth", "processes": [{"name": "Login"}]}'])

    documentation = service.generate_dfd_documentation(client, "auth")

    assert documentation["systemOverview"] == "Auth"
    assert documentation["processes"] == [{"name": "Login"}]
    assert documentation["dataStores"] == []
    assert documentation["systemBoundaries"] == "Default system boundaries"


def test_dfd_documentation_fallback_is_a_copy(make_client):
    client, _ = make_client(["not json"])

    documentation = service.generate_dfd_documentation(client, "x")
    documentation["processes"].append("mutated")

    assert service.DEFAULT_DFD_DOCUMENTATION["processes"] == []


def test_api_documentation_passthrough(make_client):
    openapi = {"openapi": "3.0.0", "info": {"title": "Shop"}, "paths": {"/orders": {}}}
    client, transport = make_client(["```json\n" + json.dumps(openapi) + "\n```"])

    documentation = service.generate_api_documentation(client, "shop api")

    assert documentation == openapi
    assert "OpenAPI" in transport.calls[0][0]


def test_api_documentation_falls_back_on_prose(make_client):
    client, _ = make_client(["Here is your API: GET /orders"])

    documentation = service.generate_api_documentation(client, "x")

    assert documentation == service.DEFAULT_API_DOCUMENTATION


def test_api_documentation_fallback_is_a_copy(make_client):
    client, _ = make_client(["not json"])

    documentation = service.generate_api_documentation(client, "x")
    documentation["paths"]["/mutated"] = {}

    assert service.DEFAULT_API_DOCUMENTATION["paths"] == {}


def test_blank_description_is_rejected(make_client):
    client, transport = make_client([])

    with pytest.raises(PromptBuildError):
        service.generate_er_diagram(client, "   ")
    assert transport.calls == []
