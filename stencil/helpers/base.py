"""
Базовый класс хелперов.

Хелпер объявляет свои аргументы в initialize_arguments(), получает
проверенные значения через self.arguments и выводит результат в render().
Дочерние узлы вызова доступны через render_children().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional

from ..errors import HelperError
from .arguments import ArgumentDefinition, ArgumentType, HelperArguments

if TYPE_CHECKING:
    from ..rendering.context import RenderingContext


class AbstractHelper:
    """
    Базовый класс для всех хелперов.

    Attributes:
        compilable: Можно ли компилировать вызовы этого хелпера;
            если нет, компиляция всего шаблона останавливается
    """

    compilable: bool = True

    def __init__(self):
        self.argument_definitions: Dict[str, ArgumentDefinition] = {}
        self.arguments: Mapping[str, Any] = HelperArguments({})
        self.rendering_context: Optional[RenderingContext] = None
        self.render_children_closure: Optional[Callable[[], Any]] = None
        self._arguments_initialized = False

    def initialize_arguments(self) -> None:
        """Объявляет аргументы хелпера. Переопределяется наследниками."""
        pass

    def register_argument(
        self,
        name: str,
        type_: ArgumentType = object,
        description: str = "",
        required: bool = False,
        default: Any = None,
    ) -> "AbstractHelper":
        if name in self.argument_definitions:
            raise HelperError(
                f'Argument "{name}" has already been defined, thus it should not be defined again.'
            )
        self.argument_definitions[name] = ArgumentDefinition(name, type_, description, required, default)
        return self

    def override_argument(
        self,
        name: str,
        type_: ArgumentType = object,
        description: str = "",
        required: bool = False,
        default: Any = None,
    ) -> "AbstractHelper":
        if name not in self.argument_definitions:
            raise HelperError(
                f'Argument "{name}" has not been defined, thus it can\'t be overridden.'
            )
        self.argument_definitions[name] = ArgumentDefinition(name, type_, description, required, default)
        return self

    def prepare_arguments(self) -> Dict[str, ArgumentDefinition]:
        if not self._arguments_initialized:
            self.initialize_arguments()
            self._arguments_initialized = True
        return self.argument_definitions

    def set_arguments(self, arguments: Mapping[str, Any]) -> None:
        self.arguments = arguments

    def set_rendering_context(self, rendering_context: RenderingContext) -> None:
        self.rendering_context = rendering_context

    def set_render_children_closure(self, closure: Optional[Callable[[], Any]]) -> None:
        self.render_children_closure = closure

    def render_children(self) -> Any:
        if self.render_children_closure is None:
            return None
        return self.render_children_closure()

    def handle_additional_arguments(self, arguments: Mapping[str, Any]) -> None:
        """Обрабатывает необъявленные аргументы. По умолчанию - ошибка."""
        self.validate_additional_arguments(arguments)

    def validate_additional_arguments(self, arguments: Mapping[str, Any]) -> None:
        if arguments:
            raise HelperError(
                f"Undeclared arguments passed to helper {type(self).__name__}: "
                f"{', '.join(sorted(arguments))}. "
                f"Valid arguments are: {', '.join(self.argument_definitions) or 'none'}"
            )

    def validate_arguments(self) -> None:
        if isinstance(self.arguments, HelperArguments):
            self.arguments.validate_eager()

    def initialize_arguments_and_render(self) -> Any:
        self.validate_arguments()
        return self.render()

    def render(self) -> Any:
        return self.render_children()


__all__ = ["AbstractHelper"]
