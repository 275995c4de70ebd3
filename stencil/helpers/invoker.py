"""
Вызов хелпера с проверкой аргументов.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, Union

from ..errors import HelperError
from .arguments import HelperArguments
from .base import AbstractHelper

if TYPE_CHECKING:
    from ..rendering.context import RenderingContext


class HelperInvoker:
    """
    Проверяет аргументы по объявлениям хелпера и вызывает его.

    Обязательные аргументы должны быть переданы, отсутствующие
    необязательные получают значения по умолчанию, необъявленные
    передаются в handle_additional_arguments(). Исключения хелпера
    пробрасываются без изменений.
    """

    def invoke(
        self,
        helper: Union[AbstractHelper, type],
        arguments: Mapping[str, Any],
        rendering_context: RenderingContext,
        render_children_closure: Optional[Callable[[], Any]] = None,
    ) -> Any:
        if isinstance(helper, type):
            helper = helper()

        resolver = rendering_context.helper_resolver
        definitions = resolver.get_argument_definitions(helper)
        helper_name = type(helper).__name__

        declared: Dict[str, Any] = {}
        undeclared: Dict[str, Any] = {}
        for name, value in arguments.items():
            if name in definitions:
                declared[name] = value
            else:
                undeclared[name] = value

        for name, definition in definitions.items():
            if name in declared:
                continue
            if definition.required:
                raise HelperError(f'Required argument "{name}" was not supplied to helper "{helper_name}".')
            declared[name] = definition.default

        helper.set_arguments(HelperArguments(declared, definitions, helper_name))
        helper.handle_additional_arguments(undeclared)
        helper.set_rendering_context(rendering_context)
        helper.set_render_children_closure(render_children_closure)
        return helper.initialize_arguments_and_render()


__all__ = ["HelperInvoker"]
