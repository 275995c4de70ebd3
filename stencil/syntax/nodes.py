"""
Узлы AST шаблона.

Дерево строит внешний парсер разметки; здесь только данные.
Родитель владеет дочерними узлами, циклов нет.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class TemplateNode:
    """Базовый класс узлов шаблона."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """Литеральный текст."""
    text: str


@dataclass(frozen=True)
class ObjectAccessorNode(TemplateNode):
    """
    Обращение к переменной: {user.name}.

    accessors - подсказки видов доступа по сегментам, определённые
    при разборе; неверная подсказка при рендеринге переопределяется.
    """
    path: str
    accessors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExpressionNode(TemplateNode):
    """Базовый класс узлов-выражений."""
    expression: str


@dataclass(frozen=True)
class BooleanNode(ExpressionNode):
    """Булево выражение, результат - bool."""
    pass


@dataclass(frozen=True)
class TernaryExpressionNode(ExpressionNode):
    """{check ? then : else}"""
    pass


@dataclass(frozen=True)
class MathExpressionNode(ExpressionNode):
    """{a + b}"""
    pass


@dataclass(frozen=True)
class HelperNode(TemplateNode):
    """
    Вызов хелпера: <f:if condition="...">...</f:if> или {f:if(...)}.

    Attributes:
        namespace: Алиас пространства имён (None для алиасов хелперов)
        name: Идентификатор хелпера
        arguments: Аргументы; значение - узел или простое значение
        children: Дочерние узлы
    """
    namespace: Optional[str]
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    children: List[TemplateNode] = field(default_factory=list)


@dataclass(frozen=True)
class SequenceNode(TemplateNode):
    """Литерал последовательности {key: value, ...}; значения - узлы или простые значения."""
    items: Dict[Any, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RootNode(TemplateNode):
    """Корень шаблона или секции."""
    children: List[TemplateNode] = field(default_factory=list)


def child_nodes(node: TemplateNode) -> List[TemplateNode]:
    if isinstance(node, (RootNode, HelperNode)):
        return list(node.children)
    return []


__all__ = [
    "TemplateNode",
    "TextNode",
    "ObjectAccessorNode",
    "ExpressionNode",
    "BooleanNode",
    "TernaryExpressionNode",
    "MathExpressionNode",
    "HelperNode",
    "SequenceNode",
    "RootNode",
    "child_nodes",
]
