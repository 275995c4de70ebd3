"""
Тесты HelperInvoker и AbstractHelper: проверка аргументов, значения
по умолчанию, ленивые аргументы.
"""

import pytest

from stencil.errors import HelperError
from stencil.helpers.arguments import ArgumentDefinition, HelperArguments, LazyArgument
from stencil.helpers.base import AbstractHelper

from tests.infrastructure import EchoHelper, ExplodingHelper, OpenArgumentsHelper


class CountingHelper(AbstractHelper):

    def initialize_arguments(self):
        self.register_argument("flag", bool, "A flag", default=False)
        self.register_argument("count", int, "A number")

    def render(self):
        return f"{self.arguments['flag']}:{self.arguments['count']}"


class TestInvoke:

    def test_required_argument_missing(self, isolated_ctx):
        with pytest.raises(HelperError, match='Required argument "param1"'):
            isolated_ctx.helper_invoker.invoke(EchoHelper(), {}, isolated_ctx)

    def test_default_applied(self, isolated_ctx):
        helper = EchoHelper()
        isolated_ctx.helper_invoker.invoke(helper, {"param1": "x"}, isolated_ctx)
        assert helper.arguments["param2"] == "default"

    def test_renders_value(self, isolated_ctx):
        assert isolated_ctx.helper_invoker.invoke(EchoHelper(), {"param1": "hello"}, isolated_ctx) == "hello"

    def test_renders_children_when_value_empty(self, isolated_ctx):
        result = isolated_ctx.helper_invoker.invoke(EchoHelper(), {"param1": ""}, isolated_ctx, lambda: "children")
        assert result == "children"

    def test_accepts_class(self, isolated_ctx):
        assert isolated_ctx.helper_invoker.invoke(EchoHelper, {"param1": "cls"}, isolated_ctx) == "cls"

    def test_undeclared_arguments_rejected(self, isolated_ctx):
        with pytest.raises(HelperError, match="Undeclared arguments"):
            isolated_ctx.helper_invoker.invoke(EchoHelper(), {"param1": "x", "extra": 1}, isolated_ctx)

    def test_undeclared_arguments_handled(self, isolated_ctx):
        helper = OpenArgumentsHelper()
        isolated_ctx.helper_invoker.invoke(helper, {"param1": "x", "extra": 1}, isolated_ctx)
        assert helper.additional_arguments == {"extra": 1}

    def test_type_mismatch(self, isolated_ctx):
        with pytest.raises(HelperError, match='registered with type "str"'):
            isolated_ctx.helper_invoker.invoke(EchoHelper(), {"param1": 42}, isolated_ctx)

    def test_bool_arguments_are_coerced(self, ctx):
        assert ctx.helper_invoker.invoke(CountingHelper(), {"flag": [1], "count": 3}, ctx) == "True:3"
        assert ctx.helper_invoker.invoke(CountingHelper(), {"flag": [], "count": 3}, ctx) == "False:3"

    def test_helper_errors_propagate(self, isolated_ctx):
        with pytest.raises(HelperError, match="boom"):
            isolated_ctx.helper_invoker.invoke(ExplodingHelper(), {}, isolated_ctx)

    def test_context_and_closure_are_set(self, isolated_ctx):
        helper = EchoHelper()
        closure = lambda: "x"  # noqa: E731
        isolated_ctx.helper_invoker.invoke(helper, {"param1": "v"}, isolated_ctx, closure)
        assert helper.rendering_context is isolated_ctx
        assert helper.render_children_closure is closure


class TestLazyArguments:

    def test_lazy_value_evaluated_once_on_access(self):
        calls = []

        def produce():
            calls.append(1)
            return "value"

        definitions = {"param": ArgumentDefinition("param", str)}
        arguments = HelperArguments({"param": LazyArgument(produce)}, definitions, "Test")
        assert arguments.is_lazy("param")
        assert calls == []
        assert arguments["param"] == "value"
        assert arguments["param"] == "value"
        assert calls == [1]
        assert not arguments.is_lazy("param")

    def test_unused_lazy_argument_never_evaluated(self, ctx):
        def fail():
            raise AssertionError("must not be evaluated")

        result = ctx.helper_invoker.invoke(
            _IgnoringHelper(),
            {"unused": LazyArgument(fail)},
            ctx,
        )
        assert result == "ignored"

    def test_lazy_argument_type_checked_on_access(self):
        definitions = {"param": ArgumentDefinition("param", int)}
        arguments = HelperArguments({"param": LazyArgument(lambda: "text")}, definitions, "Test")
        with pytest.raises(HelperError):
            arguments["param"]


class _IgnoringHelper(AbstractHelper):

    def initialize_arguments(self):
        self.register_argument("unused", object)

    def render(self):
        return "ignored"


class TestArgumentRegistration:

    def test_duplicate_registration(self):
        helper = AbstractHelper()
        helper.register_argument("a")
        with pytest.raises(HelperError, match="already been defined"):
            helper.register_argument("a")

    def test_override_requires_existing(self):
        helper = AbstractHelper()
        with pytest.raises(HelperError, match="can't be overridden"):
            helper.override_argument("a")
        helper.register_argument("a", str)
        helper.override_argument("a", int, required=True)
        assert helper.argument_definitions["a"].type is int
        assert helper.argument_definitions["a"].required

    def test_prepare_arguments_runs_once(self):
        helper = EchoHelper()
        first = helper.prepare_arguments()
        second = helper.prepare_arguments()
        assert first is second
        assert list(first) == ["param1", "param2"]

    def test_type_name(self):
        assert ArgumentDefinition("a", (int, float)).type_name() == "int | float"
        assert ArgumentDefinition("a", str).type_name() == "str"
