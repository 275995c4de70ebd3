"""
Общие процедуры вычисления выражений.

Используются и интерпретатором (ExpressionEvaluator), и кодом,
сгенерированным ExpressionCompiler, поэтому оба режима разрешают
термы и сравнивают значения одинаково.
"""

from __future__ import annotations

import math
import operator
import re
from collections.abc import Mapping, Sized
from typing import Any, Callable, Dict, Optional, Union

Number = Union[int, float]

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")

_TEXT_TYPES = (str, bytes, bytearray)
_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool)

_ORDERING: Dict[str, Callable[[Any, Any], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def is_numeric(value: Any) -> bool:
    """Число (но не bool) или строка с записью числа."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return bool(_NUMERIC_RE.match(value))
    return False


def to_number(value: Any) -> Number:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if _INTEGER_RE.match(value):
        return int(value)
    return float(value)


def convert_node_to_boolean(value: Any) -> Any:
    """Коллекции превращаются в признак непустоты, остальное возвращается как есть."""
    if isinstance(value, Sized) and not isinstance(value, _TEXT_TYPES):
        return len(value) > 0
    return value


def _lookup(context: Optional[Mapping], key: str) -> Any:
    if context is None:
        return None
    return context.get(key)


def resolve_term(context: Optional[Mapping], token: str) -> Any:
    """
    Разрешает атомарный терм выражения.

    Порядок: ключ контекста (или ссылка в фигурных скобках), число,
    true/false без учёта регистра, строка без обрамляющих кавычек.
    """
    if _lookup(context, token) is not None or (token.startswith("{") and token.endswith("}")):
        return convert_node_to_boolean(_lookup(context, token.strip("{}")))
    if is_numeric(token):
        return to_number(token)
    lowered = token.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return token.strip("'\"")


def is_structured(value: Any) -> bool:
    return value is not None and not isinstance(value, _SCALAR_TYPES)


def loose_equals(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return bool(left) == bool(right)
    if left is None or right is None:
        other = right if left is None else left
        return not other
    if is_numeric(left) and is_numeric(right):
        return to_number(left) == to_number(right)
    return left == right


def strict_equals(left: Any, right: Any) -> bool:
    if is_structured(left) and is_structured(right):
        return left is right
    return type(left) is type(right) and left == right


def modulo(left: Any, right: Any) -> Number:
    """Остаток от деления; нечисловой операнд или нулевой делитель дают 0."""
    if not (is_numeric(left) and is_numeric(right)):
        return 0
    divisor = int(to_number(right))
    if divisor == 0:
        return 0
    # Знак результата следует за делимым
    return int(math.fmod(int(to_number(left)), divisor))


def _ordered(left: Any, right: Any, comparator: str) -> bool:
    compare_fn = _ORDERING[comparator]
    if left is None:
        left = 0
    if right is None:
        right = 0
    if (is_numeric(left) or isinstance(left, bool)) and (is_numeric(right) or isinstance(right, bool)):
        return compare_fn(to_number(left), to_number(right))
    try:
        return bool(compare_fn(left, right))
    except TypeError:
        return compare_fn(str(left), str(right))


def compare(left: Any, right: Any, comparator: str) -> bool:
    """
    Сравнивает два значения.

    == и != между двумя структурными значениями сравнивают идентичность.
    """
    if comparator in ("==", "!=") and is_structured(left) and is_structured(right):
        comparator = "===" if comparator == "==" else "!=="
    if comparator == "==":
        return loose_equals(left, right)
    if comparator == "===":
        return strict_equals(left, right)
    if comparator == "!=":
        return not loose_equals(left, right)
    if comparator == "!==":
        return not strict_equals(left, right)
    if comparator == "%":
        return bool(modulo(left, right))
    if comparator in _ORDERING:
        return _ordered(left, right, comparator)
    return False


def runtime_namespace() -> Dict[str, Any]:
    """Имена, на которые ссылается скомпилированный код выражений."""
    return {
        "compare": compare,
        "convert_node_to_boolean": convert_node_to_boolean,
        "modulo": modulo,
        "resolve_term": resolve_term,
    }


__all__ = [
    "is_numeric",
    "to_number",
    "convert_node_to_boolean",
    "resolve_term",
    "is_structured",
    "loose_equals",
    "strict_equals",
    "modulo",
    "compare",
    "runtime_namespace",
]
