"""
Интерпретатор AST шаблона.

Используется, когда шаблон не скомпилирован (кэш выключен, шаблон
некомпилируем или ещё не сохранён).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Sequence

from ..errors import ParserError
from ..expression.arithmetic import evaluate_math
from ..expression.parser import BooleanParser
from ..expression.ternary import evaluate_ternary
from ..syntax.nodes import (
    BooleanNode,
    HelperNode,
    MathExpressionNode,
    ObjectAccessorNode,
    RootNode,
    SequenceNode,
    TemplateNode,
    TernaryExpressionNode,
    TextNode,
)
from .output import concatenate

if TYPE_CHECKING:
    from .context import RenderingContext


class NodeEvaluator:
    """
    Вычисляет узлы в контексте рендеринга.

    Правило для списка дочерних узлов: пустой → None, один → его
    значение как есть, несколько → конкатенация строк.
    """

    def __init__(self, rendering_context: RenderingContext):
        self.rendering_context = rendering_context
        self._handlers: Dict[type, Callable[[Any], Any]] = {
            TextNode: self._evaluate_text,
            RootNode: self._evaluate_root,
            ObjectAccessorNode: self._evaluate_object_accessor,
            BooleanNode: self._evaluate_boolean,
            TernaryExpressionNode: self._evaluate_ternary,
            MathExpressionNode: self._evaluate_math,
            SequenceNode: self._evaluate_sequence,
            HelperNode: self._evaluate_helper,
        }

    def evaluate(self, node: TemplateNode) -> Any:
        handler = self._handlers.get(type(node))
        if handler is None:
            raise ParserError(f"Unsupported node type: {type(node).__name__}")
        return handler(node)

    def evaluate_children(self, nodes: Sequence[TemplateNode]) -> Any:
        if not nodes:
            return None
        if len(nodes) == 1:
            return self.evaluate(nodes[0])
        return concatenate(*(self.evaluate(node) for node in nodes))

    def evaluate_value(self, value: Any) -> Any:
        if isinstance(value, TemplateNode):
            return self.evaluate(value)
        return value

    def _evaluate_text(self, node: TextNode) -> str:
        return node.text

    def _evaluate_root(self, node: RootNode) -> Any:
        return self.evaluate_children(node.children)

    def _evaluate_object_accessor(self, node: ObjectAccessorNode) -> Any:
        return self.rendering_context.variable_provider.get_by_path(node.path, list(node.accessors))

    def _evaluate_boolean(self, node: BooleanNode) -> bool:
        return BooleanParser().evaluate(node.expression, self.rendering_context.expression_context())

    def _evaluate_ternary(self, node: TernaryExpressionNode) -> Any:
        return evaluate_ternary(self.rendering_context.variable_provider, node.expression)

    def _evaluate_math(self, node: MathExpressionNode) -> Any:
        return evaluate_math(self.rendering_context.variable_provider, node.expression)

    def _evaluate_sequence(self, node: SequenceNode) -> Dict[Any, Any]:
        return {key: self.evaluate_value(value) for key, value in node.items.items()}

    def _evaluate_helper(self, node: HelperNode) -> Any:
        context = self.rendering_context
        helper = context.helper_resolver.create_helper(node.namespace, node.name)
        arguments = {name: self.evaluate_value(value) for name, value in node.arguments.items()}
        children: List[TemplateNode] = list(node.children)
        return context.helper_invoker.invoke(
            helper,
            arguments,
            context,
            lambda: self.evaluate_children(children),
        )


__all__ = ["NodeEvaluator"]
