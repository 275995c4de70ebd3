"""
Приведение результатов рендеринга к строке.
"""

from __future__ import annotations

from typing import Any

from ..errors import ParserError


def to_output_string(value: Any) -> str:
    """
    Строковое представление значения для вывода.

    None выводится как пустая строка. Объект без собственного
    __str__ вывести нельзя - это ошибка шаблона.

    Raises:
        ParserError: Для объектов без собственного __str__
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if type(value).__str__ is object.__str__:
        raise ParserError(
            f'Cannot cast object of type "{type(value).__name__}" to string: '
            f"it does not implement __str__"
        )
    return str(value)


def concatenate(*values: Any) -> str:
    return "".join(to_output_string(value) for value in values)


__all__ = ["to_output_string", "concatenate"]
