"""
Управляющие хелперы: if, for, cycle, variable.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Dict, List

from ...errors import HelperError
from ...rendering.output import to_output_string
from ..base import AbstractHelper
from ..registry import BUILTIN_ROOT, register_helper


@register_helper(BUILTIN_ROOT, "if")
class IfHelper(AbstractHelper):
    """
    Условный вывод.

    При выполненном условии возвращает аргумент then (или дочерние узлы),
    иначе - аргумент else.
    """

    def initialize_arguments(self) -> None:
        self.register_argument("condition", bool, "Condition expression conforming to boolean grammar", default=False)
        self.register_argument("then", object, "Value to be returned if the condition is met")
        self.register_argument("else", object, "Value to be returned if the condition is not met")

    def render(self) -> Any:
        if self.arguments["condition"]:
            then = self.arguments["then"]
            return then if then is not None else self.render_children()
        return self.arguments["else"]


@register_helper(BUILTIN_ROOT, "for")
class ForHelper(AbstractHelper):
    """Повторяет дочерние узлы для каждого элемента коллекции."""

    def initialize_arguments(self) -> None:
        self.register_argument("each", object, "The collection to iterate over", required=True)
        self.register_argument("as", str, "The name of the iteration variable", required=True)
        self.register_argument("key", str, "Variable to assign array key to")
        self.register_argument("reverse", bool, "If true, iterates in reverse", default=False)
        self.register_argument("iteration", str, "The name of the variable to store iteration information")

    def render(self) -> str:
        each = self.arguments["each"]
        if each is None:
            return ""
        if isinstance(each, (str, bytes)) or not isinstance(each, Iterable):
            raise HelperError(
                f'ForHelper only supports iterables, "{type(each).__name__}" given'
            )

        pairs = list(each.items()) if isinstance(each, Mapping) else list(enumerate(each))
        if self.arguments["reverse"]:
            pairs.reverse()

        variables = self.rendering_context.variable_provider
        name = self.arguments["as"]
        key_name = self.arguments["key"]
        iteration_name = self.arguments["iteration"]
        total = len(pairs)

        output: List[str] = []
        for index, (key, value) in enumerate(pairs):
            variables.add(name, value)
            if key_name:
                variables.add(key_name, key)
            if iteration_name:
                variables.add(iteration_name, self._iteration(index, total))
            output.append(to_output_string(self.render_children()))
            variables.remove(name)
            if key_name:
                variables.remove(key_name)
            if iteration_name:
                variables.remove(iteration_name)
        return "".join(output)

    @staticmethod
    def _iteration(index: int, total: int) -> Dict[str, Any]:
        cycle = index + 1
        return {
            "index": index,
            "cycle": cycle,
            "total": total,
            "is_first": index == 0,
            "is_last": cycle == total,
            "is_even": cycle % 2 == 0,
            "is_odd": cycle % 2 == 1,
        }


@register_helper(BUILTIN_ROOT, "cycle")
class CycleHelper(AbstractHelper):
    """
    Циклически перебирает значения между вызовами.

    Позиция хранится в HelperVariableContainer под именем переменной,
    так что каждый следующий вызов с тем же as получает следующее значение.
    """

    def initialize_arguments(self) -> None:
        self.register_argument("values", object, "The array or object implementing iterable to iterated over")
        self.register_argument("as", str, "The name of the iteration variable", required=True)

    def render(self) -> Any:
        values = self.arguments["values"]
        name = self.arguments["as"]
        if values is None:
            return self.render_children()

        items = self._initialize_values(values)
        container = self.rendering_context.helper_variable_container
        index = container.get(CycleHelper, name, 0)

        variables = self.rendering_context.variable_provider
        variables.add(name, items[index] if index < len(items) else None)
        output = self.render_children()
        variables.remove(name)

        index += 1
        if index >= len(items):
            index = 0
        container.add(CycleHelper, name, index)
        return output

    @staticmethod
    def _initialize_values(values: Any) -> List[Any]:
        if isinstance(values, Mapping):
            return list(values.values())
        if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            raise HelperError(
                f'CycleHelper only supports iterables, "{type(values).__name__}" given'
            )
        return list(values)


@register_helper(BUILTIN_ROOT, "variable")
class VariableHelper(AbstractHelper):
    """Присваивает переменной значение аргумента value или дочерних узлов."""

    def initialize_arguments(self) -> None:
        self.register_argument("value", object, "Value to assign. If not in arguments then taken from tag content")
        self.register_argument("name", str, "Name of variable to create", required=True)

    def render(self) -> None:
        value = self.arguments["value"]
        if value is None:
            value = self.render_children()
        self.rendering_context.variable_provider.add(self.arguments["name"], value)
        return None


__all__ = ["IfHelper", "ForHelper", "CycleHelper", "VariableHelper"]
