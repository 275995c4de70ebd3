"""
Описание и передача аргументов хелперов.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, Type, Union

from ..errors import HelperError
from ..expression.runtime import convert_node_to_boolean

ArgumentType = Union[Type, Tuple[Type, ...]]


@dataclass(frozen=True)
class ArgumentDefinition:
    """
    Объявление аргумента хелпера.

    Attributes:
        name: Имя аргумента
        type: Ожидаемый тип (или кортеж типов); object принимает всё
        description: Описание для диагностики
        required: Обязателен ли аргумент
        default: Значение по умолчанию для необязательного аргумента
    """
    name: str
    type: ArgumentType = object
    description: str = ""
    required: bool = False
    default: Any = None

    def type_name(self) -> str:
        if isinstance(self.type, tuple):
            return " | ".join(t.__name__ for t in self.type)
        return self.type.__name__

    def coerce(self, value: Any, helper_name: str) -> Any:
        """
        Проверяет значение на соответствие типу.

        Для bool значение приводится к булеву, None пропускается всегда.
        """
        if value is None or self.type is object:
            return value
        if self.type is bool:
            return bool(convert_node_to_boolean(value))
        if isinstance(value, self.type):
            return value
        raise HelperError(
            f'The argument "{self.name}" was registered with type "{self.type_name()}", '
            f'but is of type "{type(value).__name__}" in helper "{helper_name}".'
        )


class LazyArgument:
    """Отложенное значение аргумента: вычисляется при первом обращении."""

    __slots__ = ("_closure",)

    def __init__(self, closure: Callable[[], Any]):
        self._closure = closure

    def __call__(self) -> Any:
        return self._closure()


class HelperArguments(Mapping):
    """
    Аргументы, переданные хелперу.

    Ленивые значения вычисляются и проверяются при первом обращении,
    после чего кэшируются.
    """

    def __init__(
        self,
        values: Mapping[str, Any],
        definitions: Optional[Mapping[str, ArgumentDefinition]] = None,
        helper_name: str = "",
    ):
        self._values: Dict[str, Any] = dict(values)
        self._definitions = dict(definitions or {})
        self._helper_name = helper_name
        self._resolved: Dict[str, Any] = {}

    def __getitem__(self, name: str) -> Any:
        if name not in self._resolved:
            value = self._values[name]
            if isinstance(value, LazyArgument):
                value = value()
            definition = self._definitions.get(name)
            if definition is not None:
                value = definition.coerce(value, self._helper_name)
            self._resolved[name] = value
        return self._resolved[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def is_lazy(self, name: str) -> bool:
        return name not in self._resolved and isinstance(self._values.get(name), LazyArgument)

    def validate_eager(self) -> None:
        """Проверяет все неленивые значения сразу."""
        for name, value in self._values.items():
            if not isinstance(value, LazyArgument):
                self[name]


__all__ = ["ArgumentDefinition", "LazyArgument", "HelperArguments"]
