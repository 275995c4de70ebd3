"""
Модели данных для булевых выражений.

Дерево строится парсером один раз и затем обходится либо
вычислителем, либо компилятором.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class ExpressionType(Enum):
    """Типы узлов выражения."""
    TERM = "term"
    STRING = "string"
    NOT = "not"
    AND = "and"
    OR = "or"
    COMPARE = "compare"


@dataclass(frozen=True)
class Expression(ABC):
    """Базовый класс узлов выражения."""

    @abstractmethod
    def get_type(self) -> ExpressionType:
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass(frozen=True)
class Term(Expression):
    """
    Атомарный терм: переменная, {ссылка}, число, true/false или голая строка.

    Что именно это за терм, выясняется только при вычислении.
    """
    token: str

    def get_type(self) -> ExpressionType:
        return ExpressionType.TERM

    def _to_string(self) -> str:
        return self.token


@dataclass(frozen=True)
class StringLiteral(Expression):
    """Строка в кавычках; value хранится без обрамляющих кавычек."""
    value: str
    quote: str = "'"

    def get_type(self) -> ExpressionType:
        return ExpressionType.STRING

    def _to_string(self) -> str:
        return f"{self.quote}{self.value}{self.quote}"


@dataclass(frozen=True)
class Negation(Expression):
    operand: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.NOT

    def _to_string(self) -> str:
        return f"!{self.operand}"


@dataclass(frozen=True)
class LogicalExpression(Expression):
    """Логическое И/ИЛИ; operator - ExpressionType.AND или ExpressionType.OR."""
    operator: ExpressionType
    left: Expression
    right: Expression

    def get_type(self) -> ExpressionType:
        return self.operator

    def _to_string(self) -> str:
        op_str = "&&" if self.operator == ExpressionType.AND else "||"
        return f"({self.left} {op_str} {self.right})"


@dataclass(frozen=True)
class Comparison(Expression):
    comparator: str
    left: Expression
    right: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.COMPARE

    def _to_string(self) -> str:
        return f"{self.left} {self.comparator} {self.right}"


def is_statically_non_numeric(node: Expression) -> bool:
    """
    Узел, значение которого заведомо не число.

    Строковые литералы, литералы true/false, а также результаты отрицания,
    логических операций и сравнений (они всегда bool).
    """
    if isinstance(node, Term):
        return node.token.lower() in ("true", "false")
    return node.get_type() in (
        ExpressionType.STRING,
        ExpressionType.NOT,
        ExpressionType.AND,
        ExpressionType.OR,
        ExpressionType.COMPARE,
    )


__all__ = [
    "ExpressionType",
    "Expression",
    "Term",
    "StringLiteral",
    "Negation",
    "LogicalExpression",
    "Comparison",
    "is_statically_non_numeric",
]
