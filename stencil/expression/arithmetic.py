"""
Арифметические выражения: {a + 1}, {total / count}.

Операции выполняются строго слева направо, без приоритетов.
Операнды - числовые литералы или пути к переменным; отсутствующая
переменная считается нулём.
"""

from __future__ import annotations

import re
from typing import Any, List

from ..errors import ExpressionError
from ..variables.provider import VariableProvider
from .runtime import Number, is_numeric, modulo, to_number

OPERATORS = ("+", "-", "*", "/", "%", "^")

_OPERAND_RE = re.compile(r"-?[^\s+\-*/%^]+")
_OPERATOR_RE = re.compile(r"[+\-*/%^]")
_WORD_RE = re.compile(r"\S+")


def tokenize_math(expression: str) -> List[str]:
    """
    Разбивает выражение на чередующиеся операнды и операторы.

    Raises:
        ExpressionError: Пустое выражение, неизвестный оператор,
            два операнда подряд или оператор без правого операнда
    """
    text = expression.strip()
    if text.startswith("{") and text.endswith("}"):
        text = text[1:-1]

    tokens: List[str] = []
    expect_operand = True
    position = 0
    while position < len(text):
        if text[position].isspace():
            position += 1
            continue
        pattern = _OPERAND_RE if expect_operand else _OPERATOR_RE
        match = pattern.match(text, position)
        if match is None:
            offending = _WORD_RE.match(text, position).group(0)
            kind = "operand" if expect_operand else "operator"
            raise ExpressionError(f'Invalid {kind} "{offending}" in math expression "{expression}"')
        tokens.append(match.group(0))
        position = match.end()
        expect_operand = not expect_operand

    if not tokens:
        raise ExpressionError(f'Empty math expression "{expression}"')
    if expect_operand:
        raise ExpressionError(f'Missing operand after "{tokens[-1]}" in math expression "{expression}"')
    return tokens


def _operand_value(variables: VariableProvider, token: str) -> Number:
    if is_numeric(token):
        return to_number(token)
    value = variables.get_by_path(token)
    if isinstance(value, bool):
        return int(value)
    if is_numeric(value):
        return to_number(value)
    return 0


def _power(base: Number, exponent: Number) -> Number:
    """Степень; ноль в отрицательной степени, переполнение и комплексный результат дают 0."""
    if base == 0 and exponent < 0:
        return 0
    try:
        result = base ** exponent
    except (OverflowError, ZeroDivisionError):
        return 0
    if isinstance(result, complex):
        return 0
    return result


def apply_operator(left: Number, operator: str, right: Number) -> Number:
    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    if operator == "/":
        if right == 0:
            return 0
        if isinstance(left, int) and isinstance(right, int) and left % right == 0:
            return left // right
        return left / right
    if operator == "%":
        return modulo(left, right)
    if operator == "^":
        return _power(left, right)
    raise ExpressionError(f'Invalid operator "{operator}"')


def evaluate_math(variables: VariableProvider, expression: str) -> Any:
    tokens = tokenize_math(expression)
    result = _operand_value(variables, tokens[0])
    for index in range(1, len(tokens), 2):
        right = _operand_value(variables, tokens[index + 1])
        result = apply_operator(result, tokens[index], right)
    return result


__all__ = ["OPERATORS", "tokenize_math", "apply_operator", "evaluate_math"]
