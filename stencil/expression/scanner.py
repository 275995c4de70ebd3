"""
Сканер булевых выражений.

В отличие от табличного лексера, работает лениво от курсора: parser
подсматривает следующий токен (peek) и явно потребляет его (consume).
Пробелы незначимы везде, кроме строк в кавычках, поэтому peek умеет
возвращать токен вместе с окружающими пробелами.
"""

from __future__ import annotations

import re

# Один класс токенов на всё выражение; порядок альтернатив важен
TOKEN_RE = re.compile(
    r"""
    \s*(
        \\'                         # экранированная одинарная кавычка
      | \\"                         # экранированная двойная кавычка
      | ['"]                        # начало или конец строки
      | (?:[_A-Za-z0-9.{}\-]|\\(?!['"]))+  # термы: переменные, {ссылки}, числа
      | ===
      | ==
      | !==
      | !=
      | <=
      | >=
      | <
      | >
      | %
      | \|\|
      | [aA][nN][dD]
      | &&
      | [oO][rR]
      | .?
    )\s*
    """,
    re.VERBOSE | re.DOTALL,
)


class ExpressionScanner:
    """
    Курсор по строке выражения.

    Attributes:
        expression: Исходная строка
        cursor: Текущая позиция
    """

    def __init__(self, expression: str):
        self.expression = expression
        self.cursor = 0

    def peek(self, include_whitespace: bool = False) -> str:
        """
        Возвращает следующий токен, не сдвигая курсор.

        На конце входа возвращает пустую строку.
        """
        match = TOKEN_RE.match(self.expression, self.cursor)
        if match is None:
            return ""
        if include_whitespace:
            return match.group(0)
        return match.group(1)

    def consume(self, token: str) -> None:
        """
        Сдвигает курсор за ближайшее вхождение токена.

        Пустой токен ничего не потребляет. Если токен не найден,
        курсор переходит в конец входа.
        """
        if not token:
            return
        position = self.expression.find(token, self.cursor)
        if position < 0:
            self.cursor = len(self.expression)
            return
        self.cursor = position + len(token)

    def at_end(self) -> bool:
        return not self.expression[self.cursor:].strip()


__all__ = ["ExpressionScanner", "TOKEN_RE"]
