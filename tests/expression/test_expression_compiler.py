"""
Скомпилированное выражение должно давать тот же результат, что и интерпретатор.
"""

import pytest

from stencil.expression.parser import BooleanParser
from stencil.expression.runtime import runtime_namespace


def run_compiled(code: str, context, context_name: str = "context"):
    namespace = runtime_namespace()
    namespace[context_name] = context
    return eval(code, namespace)


class Box:
    pass


EXPRESSIONS = [
    "1 == 1",
    "1 === '1'",
    "{foo} == 1",
    "foo > 2",
    "{name} == 'Ann'",
    "!{flag}",
    "{flag} || {missing}",
    "({items} && {foo}) == 1",
    "{a} == {b}",
    "{a} == {a}",
    "{foo} % 2",
    "{name} % 2",
    "'x' % 2",
    "true % 2",
    "(1 == 1) % 2",
    "TRUE and !false",
    "'it \\'s' == \"it \\'s\"",
    "",
]


class TestCompiledEquivalence:

    def setup_method(self):
        self.parser = BooleanParser()
        shared = Box()
        self.context = {
            "foo": 3,
            "name": "Ann",
            "flag": False,
            "items": [1],
            "a": shared,
            "b": Box(),
        }

    @pytest.mark.parametrize("expression", EXPRESSIONS)
    def test_compiled_matches_interpreted(self, expression):
        interpreted = self.parser.evaluate(expression, self.context)
        compiled = run_compiled(self.parser.compile(expression), self.context)
        assert bool(compiled) is interpreted

    def test_custom_context_name(self):
        code = self.parser.compile("{foo} == 3", "variables")
        assert "variables" in code
        assert run_compiled(code, self.context, "variables") is True


class TestCompiledShape:

    def setup_method(self):
        self.parser = BooleanParser()

    @pytest.mark.parametrize("expression", ["'x' % 2", "2 % 'x'", "true % 2", "(1 == 1) % 2"])
    def test_statically_non_numeric_modulo_is_literal_zero(self, expression):
        assert self.parser.compile(expression) == "0"

    def test_variable_modulo_is_runtime_call(self):
        code = self.parser.compile("a % b")
        assert code.startswith("compare(")
        assert "'%'" in code
        assert run_compiled(code, {"a": "x", "b": 2}) is False
        assert run_compiled(code, {"a": 3, "b": 2}) is True

    def test_string_literal_compiles_to_python_literal(self):
        assert self.parser.compile("'foo'") == "'foo'"

    def test_terms_resolve_through_context(self):
        assert self.parser.compile("foo") == "resolve_term(context, 'foo')"

    def test_compilation_is_deterministic(self):
        expression = "({a} == 1 || b) && !c"
        assert self.parser.compile(expression) == self.parser.compile(expression)
