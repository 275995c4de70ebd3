from .arithmetic import evaluate_math
from .compiler import ExpressionCompiler
from .evaluator import ExpressionEvaluator
from .model import (
    Comparison,
    Expression,
    ExpressionType,
    LogicalExpression,
    Negation,
    StringLiteral,
    Term,
)
from .parser import COMPARATORS, BooleanParser
from .scanner import ExpressionScanner
from .ternary import TERNARY_DETECTION, evaluate_ternary, split_ternary

__all__ = [
    "BooleanParser",
    "COMPARATORS",
    "ExpressionScanner",
    "ExpressionEvaluator",
    "ExpressionCompiler",
    "Expression",
    "ExpressionType",
    "Term",
    "StringLiteral",
    "Negation",
    "LogicalExpression",
    "Comparison",
    "TERNARY_DETECTION",
    "split_ternary",
    "evaluate_ternary",
    "evaluate_math",
]
