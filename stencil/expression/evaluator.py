"""
Вычислитель булевых выражений.

Проходит по дереву выражения и вычисляет его значение в контексте
переменных. Термы разрешаются общими процедурами из runtime, поэтому
результат совпадает с результатом скомпилированного кода.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, cast

from .model import (
    Comparison,
    Expression,
    ExpressionType,
    LogicalExpression,
    Negation,
    StringLiteral,
    Term,
)
from .runtime import compare, resolve_term


class ExpressionEvaluator:
    """
    Интерпретатор дерева выражения.

    Принимает контекст (отображение имя → значение) и возвращает
    значение узла. Для корня результат приводится к bool вызывающей стороной.
    """

    def __init__(self, context: Optional[Mapping[str, Any]] = None):
        self.context = context

    def evaluate(self, node: Expression) -> Any:
        node_type = node.get_type()

        if node_type == ExpressionType.TERM:
            return resolve_term(self.context, cast(Term, node).token)
        elif node_type == ExpressionType.STRING:
            return cast(StringLiteral, node).value
        elif node_type == ExpressionType.NOT:
            return not self.evaluate(cast(Negation, node).operand)
        elif node_type == ExpressionType.AND:
            logical = cast(LogicalExpression, node)
            return bool(self.evaluate(logical.left)) and bool(self.evaluate(logical.right))
        elif node_type == ExpressionType.OR:
            logical = cast(LogicalExpression, node)
            return bool(self.evaluate(logical.left)) or bool(self.evaluate(logical.right))
        elif node_type == ExpressionType.COMPARE:
            comparison = cast(Comparison, node)
            return compare(
                self.evaluate(comparison.left),
                self.evaluate(comparison.right),
                comparison.comparator,
            )
        raise ValueError(f"Unknown expression type: {node_type}")


__all__ = ["ExpressionEvaluator"]
