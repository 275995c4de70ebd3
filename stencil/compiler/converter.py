"""
Преобразование узлов AST в фрагменты Python-кода.

Каждый узел превращается в пару: код инициализации (операторы,
выполняемые заранее) и код выполнения (одно выражение). Сгенерированный
код исполняется внутри метода шаблона, где доступна переменная
rendering_context.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Sequence

from ..errors import ParserError
from ..expression.parser import BooleanParser
from ..expression.ternary import split_ternary
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

if TYPE_CHECKING:
    from .compiler import TemplateCompiler


@dataclass(frozen=True)
class ConvertedNode:
    """
    Результат преобразования узла.

    Attributes:
        initialization: Операторы, каждый на своей строке (может быть пусто)
        execution: Python-выражение со значением узла
    """
    initialization: str
    execution: str


def _literal(value: Any) -> bool:
    """Значение можно записать в код через repr и прочитать обратно."""
    try:
        return ast.literal_eval(repr(value)) == value
    except (ValueError, SyntaxError):
        return False


class NodeConverter:
    """
    Конвертер узлов в код.

    Счётчик временных переменных сбрасывается перед компиляцией
    каждого шаблона, поэтому одинаковые деревья дают одинаковый код.
    """

    def __init__(self, compiler: TemplateCompiler):
        self.compiler = compiler
        self._variable_counter = 0
        self._converters: Dict[type, Callable[[Any], ConvertedNode]] = {
            TextNode: self._convert_text,
            RootNode: self._convert_root,
            ObjectAccessorNode: self._convert_object_accessor,
            BooleanNode: self._convert_boolean,
            TernaryExpressionNode: self._convert_ternary,
            MathExpressionNode: self._convert_math,
            SequenceNode: self._convert_sequence,
            HelperNode: self._convert_helper,
        }

    def set_variable_counter(self, value: int) -> None:
        self._variable_counter = value

    def variable_name(self, prefix: str) -> str:
        name = f"{prefix}_{self._variable_counter}"
        self._variable_counter += 1
        return name

    def convert(self, node: TemplateNode) -> ConvertedNode:
        converter = self._converters.get(type(node))
        if converter is None:
            raise ParserError(f"Cannot compile node type: {type(node).__name__}")
        return converter(node)

    def convert_list(self, nodes: Sequence[TemplateNode]) -> ConvertedNode:
        """Пусто → None, один узел → его значение, несколько → конкатенация."""
        if not nodes:
            return ConvertedNode("", "None")
        if len(nodes) == 1:
            return self.convert(nodes[0])
        initialization: List[str] = []
        executions: List[str] = []
        for node in nodes:
            converted = self.convert(node)
            initialization.append(converted.initialization)
            executions.append(converted.execution)
        return ConvertedNode("".join(initialization), f"concatenate({', '.join(executions)})")

    def convert_value(self, value: Any) -> ConvertedNode:
        if isinstance(value, TemplateNode):
            return self.convert(value)
        if not _literal(value):
            # Значение нельзя воспроизвести в коде - шаблон останется интерпретируемым
            self.compiler.disable()
        return ConvertedNode("", repr(value))

    def _convert_text(self, node: TextNode) -> ConvertedNode:
        return ConvertedNode("", repr(node.text))

    def _convert_root(self, node: RootNode) -> ConvertedNode:
        return self.convert_list(node.children)

    def _convert_object_accessor(self, node: ObjectAccessorNode) -> ConvertedNode:
        return ConvertedNode(
            "",
            f"rendering_context.variable_provider.get_by_path({node.path!r}, {list(node.accessors)!r})",
        )

    def _expression_context(self) -> ConvertedNode:
        name = self.variable_name("expression_context")
        return ConvertedNode(f"{name} = rendering_context.expression_context()\n", name)

    def _convert_boolean(self, node: BooleanNode) -> ConvertedNode:
        context = self._expression_context()
        condition = BooleanParser().compile(node.expression, context.execution)
        return ConvertedNode(context.initialization, f"bool({condition})")

    def _convert_ternary(self, node: TernaryExpressionNode) -> ConvertedNode:
        check, then, otherwise = split_ternary(node.expression)
        context = self._expression_context()
        condition = BooleanParser().compile(check, context.execution)
        return ConvertedNode(
            context.initialization,
            f"(resolve_ternary_part(rendering_context.variable_provider, {then!r}) "
            f"if {condition} else "
            f"resolve_ternary_part(rendering_context.variable_provider, {otherwise!r}))",
        )

    def _convert_math(self, node: MathExpressionNode) -> ConvertedNode:
        return ConvertedNode(
            "",
            f"evaluate_math(rendering_context.variable_provider, {node.expression!r})",
        )

    def _convert_sequence(self, node: SequenceNode) -> ConvertedNode:
        initialization: List[str] = []
        items: List[str] = []
        for key, value in node.items.items():
            if not _literal(key):
                self.compiler.disable()
            converted = self.convert_value(value)
            initialization.append(converted.initialization)
            items.append(f"{key!r}: {converted.execution}")
        return ConvertedNode("".join(initialization), "{" + ", ".join(items) + "}")

    def _convert_helper(self, node: HelperNode) -> ConvertedNode:
        helper_class = self.compiler.get_rendering_context().helper_resolver.resolve(node.namespace, node.name)
        if not getattr(helper_class, "compilable", True):
            self.compiler.disable()

        arguments = self.variable_name("arguments")
        initialization = [f"{arguments} = {{}}\n"]
        for name, value in node.arguments.items():
            if isinstance(value, TemplateNode):
                closure = self.compiler.wrap_helper_argument_in_closure(node, name)
                initialization.append(closure.initialization)
                initialization.append(f"{arguments}[{name!r}] = LazyArgument({closure.execution})\n")
            else:
                converted = self.convert_value(value)
                initialization.append(f"{arguments}[{name!r}] = {converted.execution}\n")

        children = self.compiler.wrap_child_nodes_in_closure(node)
        initialization.append(children.initialization)
        execution = (
            "rendering_context.helper_invoker.invoke("
            f"rendering_context.helper_resolver.create_helper({node.namespace!r}, {node.name!r}), "
            f"{arguments}, rendering_context, {children.execution})"
        )
        return ConvertedNode("".join(initialization), execution)


__all__ = ["ConvertedNode", "NodeConverter"]
