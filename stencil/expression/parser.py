"""
Парсер булевых выражений с рекурсивным спуском.

Грамматика (от слабого к сильному):
expression  → or_expr
or_expr     → and_expr (("||" | "or") and_expr)*
and_expr    → compare (("&&" | "and") compare)*
compare     → not_expr (COMPARATOR not_expr)*
not_expr    → "!" not_expr | bracket
bracket     → "(" expression ")" | string
string      → QUOTE chunk* QUOTE | term
term        → TOKEN

COMPARATOR  → == | === | != | !== | <= | >= | < | > | %

Парсер не бросает ошибок: незакрытые строки и скобки, а также
лишние токены тихо доходят до конца входа.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from .model import (
    Comparison,
    Expression,
    ExpressionType,
    LogicalExpression,
    Negation,
    StringLiteral,
    Term,
)
from .scanner import ExpressionScanner

COMPARATORS = ("==", "===", "!==", "!=", "<=", ">=", "<", ">", "%")
_OR_TOKENS = ("||", "or")
_AND_TOKENS = ("&&", "and")
_QUOTES = ("'", '"')


class BooleanParser:
    """
    Разбор, вычисление и компиляция булевых выражений.

    Одна грамматика обслуживает оба режима: parse() строит дерево,
    evaluate() интерпретирует его, compile() генерирует Python-выражение.
    """

    def __init__(self):
        self._scanner: Optional[ExpressionScanner] = None

    def parse(self, expression: str) -> Expression:
        """
        Строит дерево выражения.

        Args:
            expression: Строка выражения

        Returns:
            Корневой узел дерева
        """
        self._scanner = ExpressionScanner(expression)
        return self._parse_or_expression()

    def evaluate(self, expression: str, context: Optional[Mapping[str, Any]] = None) -> bool:
        """
        Вычисляет выражение в контексте переменных.

        Args:
            expression: Строка выражения
            context: Отображение имя/путь → значение

        Returns:
            Булево значение
        """
        from .evaluator import ExpressionEvaluator
        return bool(ExpressionEvaluator(context).evaluate(self.parse(expression)))

    def compile(self, expression: str, context_name: str = "context") -> str:
        """
        Компилирует выражение в Python-выражение.

        Сгенерированный код ссылается на переменную context_name
        и на функции из stencil.expression.runtime.
        """
        from .compiler import ExpressionCompiler
        return ExpressionCompiler(context_name).compile(self.parse(expression))

    # ---- грамматика ----

    def _peek(self, include_whitespace: bool = False) -> str:
        return self._scanner.peek(include_whitespace)

    def _consume(self, token: str) -> None:
        self._scanner.consume(token)

    def _parse_or_expression(self) -> Expression:
        left = self._parse_and_expression()
        while self._peek().lower() in _OR_TOKENS:
            self._consume(self._peek())
            right = self._parse_and_expression()
            left = LogicalExpression(ExpressionType.OR, left, right)
        return left

    def _parse_and_expression(self) -> Expression:
        left = self._parse_compare()
        while self._peek().lower() in _AND_TOKENS:
            self._consume(self._peek())
            right = self._parse_compare()
            left = LogicalExpression(ExpressionType.AND, left, right)
        return left

    def _parse_compare(self) -> Expression:
        left = self._parse_not()
        while self._peek() in COMPARATORS:
            comparator = self._peek()
            self._consume(comparator)
            right = self._parse_not()
            left = Comparison(comparator, left, right)
        return left

    def _parse_not(self) -> Expression:
        if self._peek() == "!":
            self._consume("!")
            return Negation(self._parse_not())
        return self._parse_bracket()

    def _parse_bracket(self) -> Expression:
        if self._peek() == "(":
            self._consume("(")
            result = self._parse_or_expression()
            if self._peek() == ")":
                self._consume(")")
            return result
        return self._parse_string()

    def _parse_string(self) -> Expression:
        quote = self._peek()
        if quote not in _QUOTES:
            return self._parse_term()

        self._consume(quote)
        chunks: List[str] = []
        while True:
            chunk = self._peek(include_whitespace=True)
            if not chunk or chunk.strip() == quote:
                break
            self._consume(chunk)
            chunks.append(chunk)
        self._consume(quote)
        return StringLiteral("".join(chunks), quote)

    def _parse_term(self) -> Expression:
        token = self._peek()
        self._consume(token)
        return Term(token)


__all__ = ["BooleanParser", "COMPARATORS"]
