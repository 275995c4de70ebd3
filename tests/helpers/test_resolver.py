"""
Тесты HelperResolver: пространства имён, алиасы, разрешение классов.
"""

import pytest

from stencil.errors import ResolutionError
from stencil.helpers.base import AbstractHelper
from stencil.helpers.builtin import CdataHelper, IfHelper
from stencil.helpers.registry import BUILTIN_ROOT, HelperRegistry, candidate_name
from stencil.helpers.resolver import HelperResolver

from tests.infrastructure import TEST_ROOT, EchoHelper

FIRST_ROOT = "stencil_first_root.helpers"
SECOND_ROOT = "stencil_second_root.helpers"


class FirstEcho(AbstractHelper):
    pass


class SecondEcho(AbstractHelper):
    pass


def two_root_registry() -> HelperRegistry:
    registry = HelperRegistry()
    registry.register(FIRST_ROOT, "echo")(FirstEcho)
    registry.register(SECOND_ROOT, "echo")(SecondEcho)
    registry.register(FIRST_ROOT, "only.first")(FirstEcho)
    return registry


class TestCandidateName:

    @pytest.mark.parametrize("identifier, expected", [
        ("if", "IfHelper"),
        ("format.cdata", "Format.CdataHelper"),
        ("link.external", "Link.ExternalHelper"),
    ])
    def test_candidate(self, identifier, expected):
        assert candidate_name(identifier) == expected


class TestNamespaces:

    def test_default_namespace(self, resolver):
        assert resolver.get_namespaces() == {"f": [BUILTIN_ROOT]}
        assert resolver.is_namespace_valid("f")

    def test_add_namespace_merges_without_duplicates(self, resolver):
        resolver.add_namespace("x", "foo.bar")
        resolver.add_namespace("x", ["foo.bar", "foo.baz"])
        assert resolver.get_namespaces()["x"] == ["foo.bar", "foo.baz"]

    def test_add_to_default_namespace_appends(self, resolver):
        resolver.add_namespace("f", "foo.bar")
        assert resolver.get_namespaces()["f"] == [BUILTIN_ROOT, "foo.bar"]

    def test_none_marks_new_namespace_ignored(self, resolver):
        resolver.add_namespace("ignored", None)
        assert resolver.is_namespace_ignored("ignored")
        assert not resolver.is_namespace_valid("ignored")
        assert resolver.is_namespace_valid_or_ignored("ignored")

    def test_none_does_not_clear_existing_roots(self, resolver):
        resolver.add_namespace("x", "foo.bar")
        resolver.add_namespace("x", None)
        assert resolver.get_namespaces()["x"] == ["foo.bar"]
        assert not resolver.is_namespace_ignored("x")

    def test_wildcard_ignores(self, resolver):
        resolver.add_namespace("xsi*", None)
        assert resolver.is_namespace_ignored("xsi")
        assert resolver.is_namespace_ignored("xsi.schema")
        assert not resolver.is_namespace_ignored("xs")
        assert not resolver.is_namespace_ignored("other")

    def test_unknown_namespace(self, resolver):
        assert not resolver.is_namespace_valid("nope")
        assert not resolver.is_namespace_valid_or_ignored("nope")

    def test_set_namespaces_replaces_everything(self, resolver):
        resolver.set_namespaces({"x": ["foo.bar"]})
        assert resolver.get_namespaces() == {"x": ["foo.bar"]}
        assert not resolver.is_namespace_valid("f")

    def test_get_namespaces_returns_copy(self, resolver):
        resolver.get_namespaces()["f"].append("mutated")
        assert resolver.get_namespaces()["f"] == [BUILTIN_ROOT]


class TestResolve:

    def test_builtin_helpers(self, resolver):
        assert resolver.resolve("f", "if") is IfHelper
        assert resolver.resolve("f", "format.cdata") is CdataHelper

    def test_last_root_wins(self):
        resolver = HelperResolver(registry=two_root_registry())
        resolver.set_namespaces({"x": [FIRST_ROOT, SECOND_ROOT]})
        assert resolver.resolve("x", "echo") is SecondEcho

    def test_earlier_root_used_when_later_lacks_candidate(self):
        resolver = HelperResolver(registry=two_root_registry())
        resolver.set_namespaces({"x": [FIRST_ROOT, SECOND_ROOT]})
        assert resolver.resolve("x", "only.first") is FirstEcho

    def test_adding_root_invalidates_memo(self):
        resolver = HelperResolver(registry=two_root_registry())
        resolver.set_namespaces({"x": [FIRST_ROOT]})
        assert resolver.resolve("x", "echo") is FirstEcho
        resolver.add_namespace("x", SECOND_ROOT)
        assert resolver.resolve("x", "echo") is SecondEcho

    def test_unresolvable_helper(self, resolver):
        with pytest.raises(ResolutionError) as exc_info:
            resolver.resolve("f", "does.not.exist")
        error = exc_info.value
        assert error.namespace == "f"
        assert error.identifier == "does.not.exist"
        assert error.candidate == f"{BUILTIN_ROOT}.Does.Not.ExistHelper"
        assert error.searched_roots == [BUILTIN_ROOT]
        assert "<f:does.not.exist>" in str(error)

    def test_unknown_namespace_raises(self, resolver):
        with pytest.raises(ResolutionError) as exc_info:
            resolver.resolve("nope", "if")
        assert exc_info.value.searched_roots == []

    def test_alias(self, isolated_resolver):
        isolated_resolver.add_alias("shout", "t", "echo")
        assert isolated_resolver.is_alias_registered("shout")
        assert isolated_resolver.resolve(None, "shout") is EchoHelper

    def test_create_helper_returns_fresh_instances(self, isolated_resolver):
        first = isolated_resolver.create_helper("t", "echo")
        second = isolated_resolver.create_helper("t", "echo")
        assert isinstance(first, EchoHelper)
        assert first is not second

    def test_argument_definitions(self, isolated_resolver):
        helper = isolated_resolver.create_helper("t", "echo")
        definitions = isolated_resolver.get_argument_definitions(helper)
        assert set(definitions) == {"param1", "param2"}
        assert definitions["param1"].required
        assert definitions["param2"].default == "default"


class TestRegistry:

    def test_roots_without_module_are_allowed(self):
        registry = HelperRegistry()
        registry.register(TEST_ROOT, "echo")(EchoHelper)
        assert registry.lookup(TEST_ROOT, "EchoHelper") is EchoHelper
        assert registry.lookup("stencil_missing_root", "EchoHelper") is None

    def test_builtin_root_is_imported_on_demand(self):
        from stencil.helpers.registry import helper_registry
        assert "IfHelper" in helper_registry.helpers(BUILTIN_ROOT)

    def test_overwrite_warns(self, caplog):
        registry = HelperRegistry()
        registry.register(TEST_ROOT, "echo")(EchoHelper)
        with caplog.at_level("WARNING"):
            registry.register(TEST_ROOT, "echo")(FirstEcho)
        assert "overwrites" in caplog.text
        assert registry.lookup(TEST_ROOT, "EchoHelper") is FirstEcho


class TestNamespaceValidity:

    def test_empty_root_list_is_valid(self, resolver):
        resolver.set_namespaces({"empty": []})
        assert resolver.is_namespace_valid("empty")
        assert not resolver.is_namespace_ignored("empty")

    def test_ignored_namespace_is_not_valid(self, resolver):
        resolver.set_namespaces({"ignored": None})
        assert not resolver.is_namespace_valid("ignored")
