import pytest
from pydantic import ValidationError

from autoclient.parser.base import ClassDescriptor, MethodDescriptor, ParameterDescriptor, QueryParameterDescriptor


class TestParameterDescriptor:
    def test_create_required_param(self):
        p = ParameterDescriptor(name="id")
        assert p.required is True
        assert p.default is None
        assert p.type == ""
        assert p.description == ""

    def test_create_optional_param(self):
        p = ParameterDescriptor(name="page", type="int", required=False, default="1")
        assert p.default == "1"

    def test_is_frozen(self):
        p = ParameterDescriptor(name="id")
        with pytest.raises(ValidationError):
            p.name = "other"


class TestMethodDescriptor:
    def test_create_minimal_method(self):
        m = MethodDescriptor(server_side_name="getUser", client_side_name="getUser", http_verb="get")
        assert m.parameters == []
        assert m.query_parameters == []
        assert m.tags == {}

    def test_repeated_tags_keep_lists(self):
        m = MethodDescriptor(
            server_side_name="getUser",
            client_side_name="getUser",
            http_verb="get",
            query_parameters=[QueryParameterDescriptor(name="page", type="int")],
            tags={"description": "", "out": ["int id", "string name"]},
        )
        assert m.tags["out"] == ["int id", "string name"]
        assert m.tags["description"] == ""

    def test_serialization_roundtrip(self):
        m = MethodDescriptor(
            server_side_name="deleteUser",
            client_side_name="removeUser",
            http_verb="delete",
            parameters=[ParameterDescriptor(name="id", type="int")],
            tags={"description": "Deletes.", "api": ""},
        )
        c = ClassDescriptor(description="Users.", methods=[m])
        c2 = ClassDescriptor(**c.model_dump())
        assert c2 == c
        assert c2.methods[0].parameters[0].name == "id"
