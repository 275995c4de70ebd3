"""
Объекты для проверки видов доступа VariableExtractor.
"""

from __future__ import annotations

from typing import Any, Dict


class UserWithoutToString:
    """Пользователь с геттером, предикатами и без __str__."""

    def __init__(self, name: str):
        self._name = name

    def get_name(self) -> str:
        return self._name

    def is_named(self) -> bool:
        return bool(self._name)

    def has_accessor(self) -> bool:
        return True

    def is_accessor(self) -> bool:
        return False


class UserWithToString(UserWithoutToString):

    def __str__(self) -> str:
        return self._name


class MagicGetter:
    """Атрибуты отдаются только через __getattr__."""

    def __init__(self, values: Dict[str, Any]):
        self._values = values

    def __getattr__(self, name: str) -> Any:
        try:
            return self.__dict__["_values"][name]
        except KeyError:
            raise AttributeError(name) from None


class ProtectedGetter:
    """Геттер есть, но он защищённый - снаружи недоступен."""

    def _get_secret(self) -> str:
        return "hidden"

    @property
    def _token(self) -> str:
        return "hidden"


class ArrayAccessDummy:
    """Индексный доступ без Mapping, плюс обычный геттер."""

    def __init__(self, items: Dict[str, Any]):
        self._items = items

    def __getitem__(self, key: str) -> Any:
        return self._items[key]

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def get_property(self) -> str:
        return "from getter"


class PlainObject:
    """Публичные атрибуты и свойство."""

    def __init__(self, **attributes: Any):
        for key, value in attributes.items():
            setattr(self, key, value)

    @property
    def computed(self) -> str:
        return "computed value"

    def method(self) -> str:
        return "not a property"
