"""
Тернарные выражения: {check ? then : else}.

Условие вычисляется BooleanParser'ом, ветки разрешаются как переменная
шаблона либо как литерал. Пустая ветка then - сокращённая форма
{check ?: else}: результатом становится само условие (или ветка else,
если условие начинается с отрицания).
"""

from __future__ import annotations

import re
from typing import Any, List, Tuple

from ..errors import ExpressionError
from ..variables.provider import PathContext, VariableProvider
from .parser import BooleanParser
from .runtime import is_numeric, to_number

# Шаблон обнаружения тернарного выражения в тексте шаблона
TERNARY_DETECTION = re.compile(
    r"""
    (
        \{
            (?:
                [\\!_a-zA-Z0-9.()|&'"=<>%\s{}:,]+   # условие
                \s?\?\s?
                [_a-zA-Z0-9.\s'"\\]*                # then, может отсутствовать
                \s?:\s?
                [_a-zA-Z0-9.\s'"\\]+                # else
            )
        \}
    )""",
    re.VERBOSE,
)

_QUOTES = ("'", '"')


def _split_parts(expression: str) -> List[str]:
    """Делит выражение по ? и : вне кавычек, скобок и фигурных скобок."""
    parts: List[str] = []
    current: List[str] = []
    quote = ""
    depth = 0
    escaped = False
    for char in expression:
        if escaped:
            current.append(char)
            escaped = False
            continue
        if char == "\\":
            current.append(char)
            escaped = True
            continue
        if quote:
            if char == quote:
                quote = ""
            current.append(char)
            continue
        if char in _QUOTES:
            quote = char
        elif char in "({":
            depth += 1
        elif char in ")}":
            depth -= 1
        elif char in "?:" and depth <= 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def split_ternary(expression: str) -> Tuple[str, str, str]:
    """
    Разбирает тернарное выражение на условие и две ветки.

    Raises:
        ExpressionError: Если частей не ровно три
    """
    text = expression.strip()
    if text.startswith("{") and text.endswith("}"):
        text = text[1:-1]
    parts = [part.strip() for part in _split_parts(text)]
    if len(parts) != 3:
        raise ExpressionError(
            f'Invalid ternary expression "{expression}": '
            f"expected exactly three parts (check ? then : else), got {len(parts)}"
        )
    check, then, otherwise = parts
    if then == "":
        then = otherwise if check.startswith("!") else check
    return check, then, otherwise


def resolve_ternary_part(variables: VariableProvider, part: str) -> Any:
    """
    Значение ветки тернарного выражения.

    Строка в кавычках - литерал без кавычек; число - число;
    {путь} - переменная; иначе переменная по пути или сам текст,
    если такой переменной нет.
    """
    if len(part) >= 2 and part[0] in _QUOTES and part[-1] == part[0]:
        return part[1:-1]
    if is_numeric(part):
        return to_number(part)
    if part.startswith("{") and part.endswith("}"):
        return variables.get_by_path(part[1:-1])
    value = variables.get_by_path(part)
    return part if value is None else value


def evaluate_ternary(variables: VariableProvider, expression: str) -> Any:
    check, then, otherwise = split_ternary(expression)
    if BooleanParser().evaluate(check, PathContext(variables)):
        return resolve_ternary_part(variables, then)
    return resolve_ternary_part(variables, otherwise)


__all__ = [
    "TERNARY_DETECTION",
    "split_ternary",
    "resolve_ternary_part",
    "evaluate_ternary",
]
