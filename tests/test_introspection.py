from pathlib import Path

import pytest

from autoclient.introspection.base import IntrospectionError
from autoclient.introspection.manifest import ManifestIntrospector
from autoclient.introspection.python import PythonIntrospector

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def introspector(monkeypatch):
    monkeypatch.syspath_prepend(str(FIXTURES))
    return PythonIntrospector()


class TestPythonIntrospector:
    def test_resolve_colon_and_dotted_forms(self, introspector):
        by_colon = introspector.resolve("users_controller:UsersController")
        by_dot = introspector.resolve("users_controller.UsersController")
        assert by_colon is by_dot
        assert by_colon.__name__ == "UsersController"

    def test_unknown_module(self, introspector):
        with pytest.raises(IntrospectionError, match="Cannot import"):
            introspector.resolve("no_such_module:Foo")

    def test_unknown_class(self, introspector):
        with pytest.raises(IntrospectionError, match="does not exist"):
            introspector.list_public_methods("users_controller:MissingController")

    def test_not_a_class(self, introspector):
        with pytest.raises(IntrospectionError, match="not a class"):
            introspector.resolve("users_controller:VERSION")

    def test_invalid_reference(self, introspector):
        with pytest.raises(IntrospectionError, match="Invalid class reference"):
            introspector.resolve("UsersController")

    def test_methods_in_declaration_order(self, introspector):
        methods = introspector.list_public_methods("users_controller:UsersController")
        assert [m.name for m in methods] == [
            "getUser",
            "getUsers",
            "postUser",
            "deleteUser",
            "helper",
            "getStatic",
            "getFromClass",
            "get_health",
        ]

    def test_static_and_class_methods_flagged(self, introspector):
        methods = {m.name: m for m in introspector.list_public_methods("users_controller:UsersController")}
        assert methods["getStatic"].is_static is True
        assert methods["getFromClass"].is_static is True
        assert methods["getUser"].is_static is False

    def test_parameters(self, introspector):
        methods = {m.name: m for m in introspector.list_public_methods("users_controller:UsersController")}

        assert [p.name for p in methods["getUser"].parameters] == ["id"]
        assert methods["getUser"].parameters[0].has_default is False

        page, tags = methods["getUsers"].parameters
        assert (page.name, page.has_default, page.default) == ("page", True, 1)
        assert (tags.name, tags.has_default, tags.default) == ("tags", True, ())

        # *args / **kwargs are not route parameters
        assert [p.name for p in methods["deleteUser"].parameters] == ["id"]
        assert methods["getFromClass"].parameters == []

    def test_docs_are_cleaned(self, introspector):
        methods = {m.name: m for m in introspector.list_public_methods("users_controller:UsersController")}
        assert methods["getUser"].doc.startswith("Loads one user.\n\n@api\n@param int $id")

    def test_class_doc_is_not_inherited(self, introspector):
        assert introspector.class_doc("users_controller:UsersController").startswith("Manages the users")
        assert introspector.class_doc("users_controller:ProductsController") is None


class TestManifestIntrospector:
    def test_from_file(self):
        introspector = ManifestIntrospector.from_file(FIXTURES / "manifest.yaml")
        methods = introspector.list_public_methods("ItemsController")

        assert [m.name for m in methods] == ["getItem", "getItems", "putItem", "internalHelper", "getCount"]
        assert methods[4].is_static is True
        assert "Catalog items." in introspector.class_doc("ItemsController")

    def test_parameter_defaults(self):
        introspector = ManifestIntrospector.from_file(FIXTURES / "manifest.yaml")
        methods = {m.name: m for m in introspector.list_public_methods("ItemsController")}

        assert methods["getItem"].parameters[0].has_default is False
        assert methods["getItems"].parameters[0].has_default is True
        assert methods["getItems"].parameters[0].default is None
        assert methods["putItem"].parameters[0].name == "id"

    def test_empty_class_entry(self):
        introspector = ManifestIntrospector.from_file(FIXTURES / "manifest.yaml")
        assert introspector.list_public_methods("EmptyController") == []
        assert introspector.class_doc("EmptyController") is None

    def test_unknown_class(self):
        introspector = ManifestIntrospector.from_file(FIXTURES / "manifest.yaml")
        with pytest.raises(IntrospectionError, match="not described"):
            introspector.list_public_methods("MissingController")

    def test_missing_file(self, tmp_path):
        with pytest.raises(IntrospectionError, match="Cannot read"):
            ManifestIntrospector.from_file(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("classes: [invalid\n")
        with pytest.raises(IntrospectionError, match="Invalid manifest"):
            ManifestIntrospector.from_file(f)

    def test_no_classes_mapping(self, tmp_path):
        f = tmp_path / "empty.yaml"
        f.write_text("version: 1\n")
        with pytest.raises(IntrospectionError, match="no 'classes' mapping"):
            ManifestIntrospector.from_file(f)

    def test_method_without_name(self):
        introspector = ManifestIntrospector({"Foo": {"methods": [{"doc": "@api"}]}})
        with pytest.raises(IntrospectionError, match="without a name"):
            introspector.list_public_methods("Foo")

    def test_class_entry_not_a_mapping(self):
        introspector = ManifestIntrospector({"Foo": "oops"})
        with pytest.raises(IntrospectionError, match="must be a mapping"):
            introspector.list_public_methods("Foo")
        with pytest.raises(IntrospectionError, match="must be a mapping"):
            introspector.class_doc("Foo")

    def test_methods_not_a_list(self):
        introspector = ManifestIntrospector({"Foo": {"methods": "oops"}})
        with pytest.raises(IntrospectionError, match="must be a list"):
            introspector.list_public_methods("Foo")

    def test_parameter_entry_not_a_mapping(self):
        introspector = ManifestIntrospector({"Foo": {"methods": [{"name": "getBar", "parameters": [42]}]}})
        with pytest.raises(IntrospectionError, match="without a name"):
            introspector.list_public_methods("Foo")

    def test_invalid_method_field(self):
        introspector = ManifestIntrospector({"Foo": {"methods": [{"name": "getBar", "doc": ["@api"]}]}})
        with pytest.raises(IntrospectionError, match="Invalid method entry"):
            introspector.list_public_methods("Foo")
