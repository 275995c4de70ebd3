"""
Тесты тернарных и арифметических выражений.
"""

import pytest

from stencil.errors import ExpressionError
from stencil.expression.arithmetic import evaluate_math, tokenize_math
from stencil.expression.ternary import TERNARY_DETECTION, evaluate_ternary, split_ternary
from stencil.variables.provider import VariableProvider


class TestTernary:

    def test_requires_exactly_three_parts(self):
        with pytest.raises(ExpressionError):
            evaluate_ternary(VariableProvider(), "x ? y")

    @pytest.mark.parametrize("expression, expected", [
        ("1 ? 2 : 3", 2),
        ("0 ? 2 : 3", 3),
        ("{1 ? 'yes' : 'no'}", "yes"),
        ("false ? 'yes' : 'no'", "no"),
    ])
    def test_literals(self, expression, expected):
        assert evaluate_ternary(VariableProvider(), expression) == expected

    def test_branches_resolve_variables(self):
        variables = VariableProvider({"flag": True, "user": {"name": "Ann"}, "other": "Bob"})
        assert evaluate_ternary(variables, "{flag} ? user.name : other") == "Ann"
        assert evaluate_ternary(variables, "!{flag} ? user.name : other") == "Bob"

    def test_missing_variable_falls_back_to_literal(self):
        assert evaluate_ternary(VariableProvider(), "1 ? unknown : other") == "unknown"

    def test_elvis_form(self):
        variables = VariableProvider({"name": "Ann"})
        assert split_ternary("name ?: 'anonymous'") == ("name", "name", "'anonymous'")
        assert evaluate_ternary(variables, "name ?: 'anonymous'") == "Ann"
        assert split_ternary("!name ?: 'fallback'") == ("!name", "'fallback'", "'fallback'")

    def test_quoted_separators_are_not_split(self):
        assert split_ternary("a ? 'x:y' : 'z?'") == ("a", "'x:y'", "'z?'")

    @pytest.mark.parametrize("expression", [
        "{true ? foo : bar}",
        "{true ? 1 : 0}",
        "{true ? foo : 'no'}",
        "{(true) ? 'yes' : 'no'}",
        "{!(true) ? 'yes' : 'no'}",
        "{(true || false) ? 'yes' : 'no'}",
        "{('foo' == 'foo') ? 'yes' : 'no'}",
        "{(1 >= 0) ? 'yes' : 'no'}",
        "{(1 % 0) ? 'yes' : 'no'}",
        "{(foo || 1 && 1 && !(false) || (1 % 2) || (1 > 0) || ('foo' == 'bar')) ? 'yes' : 'no'}",
        "{{f:if(condition: 1, then: 1, else: 0)} ? 'yes' : 'no'}",
    ])
    def test_detection(self, expression):
        assert TERNARY_DETECTION.search(expression) is not None

    def test_detection_rejects_plain_variable(self):
        assert TERNARY_DETECTION.search("{user.name}") is None


class TestMath:

    @pytest.mark.parametrize("expression, variables, expected", [
        ("1 + 1", {}, 2),
        ("2 - 1", {}, 1),
        ("2 % 4", {}, 2),
        ("2 * 4", {}, 8),
        ("4 / 2", {}, 2),
        ("4 ^ 2", {}, 16),
        ("a + 1", {"a": 1}, 2),
        ("a + 1", {"a": None}, 1),
        ("a + b", {"a": "2", "b": 3}, 5),
        ("{a * 2}", {"a": 3}, 6),
        ("1 + 2 * 3", {}, 9),
        ("-1 + 3", {}, 2),
    ])
    def test_evaluate(self, expression, variables, expected):
        assert evaluate_math(VariableProvider(variables), expression) == expected

    def test_division_and_modulo_by_zero_yield_zero(self):
        assert evaluate_math(VariableProvider(), "1 / 0") == 0
        assert evaluate_math(VariableProvider(), "1 % 0") == 0

    def test_invalid_operator_raises(self):
        with pytest.raises(ExpressionError):
            evaluate_math(VariableProvider(), "1 gabbagabbahey 1")

    def test_dangling_operator_raises(self):
        with pytest.raises(ExpressionError):
            tokenize_math("1 +")

    def test_empty_raises(self):
        with pytest.raises(ExpressionError):
            tokenize_math("{}")

    def test_tokenize(self):
        assert tokenize_math("a-b * 2") == ["a", "-", "b", "*", "2"]

    @pytest.mark.parametrize("expression, variables", [
        ("{a ^ b}", {"b": -1}),
        ("0 ^ -2", {}),
        ("{10 ^ 400.5}", {}),
        ("{-8 ^ 0.5}", {}),
    ])
    def test_degenerate_power_yields_zero(self, expression, variables):
        assert evaluate_math(VariableProvider(variables), expression) == 0

    def test_fractional_power(self):
        assert evaluate_math(VariableProvider(), "9 ^ 0.5") == 3.0
        assert evaluate_math(VariableProvider(), "2 ^ -1") == 0.5
