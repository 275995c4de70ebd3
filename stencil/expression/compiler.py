"""
Генератор Python-кода для булевых выражений.

Результат - одно Python-выражение. Оно ссылается на переменную
контекста (имя задаёт вызывающая сторона) и на функции из
stencil.expression.runtime: resolve_term, compare.
"""

from __future__ import annotations

from typing import cast

from .model import (
    Comparison,
    Expression,
    ExpressionType,
    LogicalExpression,
    Negation,
    StringLiteral,
    Term,
    is_statically_non_numeric,
)


class ExpressionCompiler:
    """
    Компилятор дерева выражения в исходный код.

    Args:
        context_name: Имя переменной с контекстом в сгенерированном коде
    """

    def __init__(self, context_name: str = "context"):
        self.context_name = context_name

    def compile(self, node: Expression) -> str:
        node_type = node.get_type()

        if node_type == ExpressionType.TERM:
            return f"resolve_term({self.context_name}, {cast(Term, node).token!r})"
        elif node_type == ExpressionType.STRING:
            return repr(cast(StringLiteral, node).value)
        elif node_type == ExpressionType.NOT:
            return f"(not {self.compile(cast(Negation, node).operand)})"
        elif node_type == ExpressionType.AND:
            logical = cast(LogicalExpression, node)
            return f"(bool({self.compile(logical.left)}) and bool({self.compile(logical.right)}))"
        elif node_type == ExpressionType.OR:
            logical = cast(LogicalExpression, node)
            return f"(bool({self.compile(logical.left)}) or bool({self.compile(logical.right)}))"
        elif node_type == ExpressionType.COMPARE:
            return self._compile_comparison(cast(Comparison, node))
        raise ValueError(f"Unknown expression type: {node_type}")

    def _compile_comparison(self, node: Comparison) -> str:
        if node.comparator == "%" and (
            is_statically_non_numeric(node.left) or is_statically_non_numeric(node.right)
        ):
            return "0"
        left = self.compile(node.left)
        right = self.compile(node.right)
        return f"compare({left}, {right}, {node.comparator!r})"


__all__ = ["ExpressionCompiler"]
