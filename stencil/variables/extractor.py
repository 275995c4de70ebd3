"""
Извлечение значений по точечным путям.

Разрешает пути вида ``user.address.city`` против разнородных значений:
словарей, последовательностей, объектов с геттерами, предикатами
и публичными атрибутами. Для каждого сегмента пути перебирает виды
доступа в фиксированном порядке и останавливается на первом подходящем.

Недоступные члены дают None, а не ошибку.
"""

from __future__ import annotations

import functools
import inspect
import logging
import re
from typing import Any, Callable, List, Optional, Sequence

logger = logging.getLogger(__name__)

ACCESSOR_ARRAY = "array"
ACCESSOR_ASSERTER = "asserter"
ACCESSOR_GETTER = "getter"
ACCESSOR_PUBLICPROPERTY = "public"

# Порядок перебора видов доступа для объектов (после индексного)
_OBJECT_ACCESSORS = (ACCESSOR_ASSERTER, ACCESSOR_GETTER, ACCESSOR_PUBLICPROPERTY)

# Самая внутренняя подстановка {...} без вложенных скобок
_SUB_PATH_RE = re.compile(r"\{([^{}]*)\}")

_SCALARS = (str, bytes, bytearray, int, float, complex, bool)
_PROPERTY_TYPES = (property, functools.cached_property)
_MISSING = object()

Thunk = Callable[[], Any]


def _upper_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def _as_index(name: str) -> Optional[int]:
    """Преобразует сегмент пути в целочисленный индекс, если это возможно."""
    stripped = name[1:] if name.startswith("-") else name
    if stripped.isdigit():
        return int(name)
    return None


class VariableExtractor:
    """
    Извлекатель значений по пути.

    Поддерживаемые виды доступа (в порядке приоритета):
    - ACCESSOR_ARRAY: словари, списки/кортежи, объекты с __getitem__ и __contains__
    - ACCESSOR_ASSERTER: методы-предикаты is_x()/has_x() (и camelCase-варианты)
    - ACCESSOR_GETTER: методы get_x()/getX(), свойства и динамический __getattr__
    - ACCESSOR_PUBLICPROPERTY: публичные не вызываемые атрибуты
    """

    ACCESSOR_ARRAY = ACCESSOR_ARRAY
    ACCESSOR_ASSERTER = ACCESSOR_ASSERTER
    ACCESSOR_GETTER = ACCESSOR_GETTER
    ACCESSOR_PUBLICPROPERTY = ACCESSOR_PUBLICPROPERTY

    @classmethod
    def extract(cls, subject: Any, path: str, accessors: Optional[Sequence[Optional[str]]] = None) -> Any:
        """
        Извлекает значение по пути.

        Args:
            subject: Корневое значение (обычно словарь переменных)
            path: Путь через точку, сегменты могут содержать {вложенные.пути}
            accessors: Подсказки видов доступа по сегментам (могут быть неверными)

        Returns:
            Найденное значение или None
        """
        return cls().get_by_path(subject, path, accessors or [])

    @classmethod
    def extract_accessors(cls, subject: Any, path: str) -> List[str]:
        """Возвращает список видов доступа, определённых для каждого сегмента пути."""
        return cls().get_accessors_for_path(subject, path)

    def get_by_path(self, subject: Any, path: str, accessors: Sequence[Optional[str]] = ()) -> Any:
        path = self._resolve_sub_paths(subject, path)
        current = subject
        for index, segment in enumerate(path.split(".")):
            accessor = accessors[index] if index < len(accessors) else None
            current = self._extract_single_value(current, segment, accessor)
            if current is None:
                break
        return current

    def get_accessors_for_path(self, subject: Any, path: str) -> List[str]:
        path = self._resolve_sub_paths(subject, path)
        accessors: List[str] = []
        current = subject
        for segment in path.split("."):
            accessor = self._detect_accessor(current, segment)
            if accessor is None:
                break
            accessors.append(accessor)
            current = self._extract_single_value(current, segment, accessor)
        return accessors

    def _resolve_sub_paths(self, subject: Any, path: str) -> str:
        """
        Подставляет значения вложенных путей {a.b} в путь.

        Вложенные пути разрешаются против исходного корневого значения,
        начиная с самых внутренних. Число проходов ограничено числом
        открывающих скобок в исходном пути.
        """
        if "{" not in path:
            return path

        def substitute(match: re.Match) -> str:
            value = self.get_by_path(subject, match.group(1))
            return "" if value is None else str(value)

        resolved = path
        for _ in range(path.count("{")):
            updated = _SUB_PATH_RE.sub(substitute, resolved, count=1)
            if updated == resolved:
                break
            resolved = updated
        return resolved

    def _extract_single_value(self, subject: Any, name: str, accessor: Optional[str] = None) -> Any:
        thunk = self._locate(subject, name, accessor) if accessor else None
        if thunk is None:
            # Подсказка не подошла (или её нет) - определяем заново
            accessor = self._detect_accessor(subject, name)
            thunk = self._locate(subject, name, accessor) if accessor else None
        if thunk is None:
            return None
        return thunk()

    def _detect_accessor(self, subject: Any, name: str) -> Optional[str]:
        if subject is None or isinstance(subject, _SCALARS):
            return None
        if self._locate(subject, name, ACCESSOR_ARRAY) is not None:
            return ACCESSOR_ARRAY
        for accessor in _OBJECT_ACCESSORS:
            if self._locate(subject, name, accessor) is not None:
                return accessor
        # Как и для любого объекта: публичный атрибут, который может отсутствовать
        return ACCESSOR_PUBLICPROPERTY

    def _locate(self, subject: Any, name: str, accessor: str) -> Optional[Thunk]:
        """Возвращает отложенный вызов для извлечения значения, если вид доступа применим."""
        if subject is None or isinstance(subject, _SCALARS):
            return None
        if accessor == ACCESSOR_ARRAY:
            return self._locate_item(subject, name)
        if not name or name.startswith("_"):
            return None
        if accessor == ACCESSOR_ASSERTER:
            return self._locate_method(subject, self._asserter_names(name))
        if accessor == ACCESSOR_GETTER:
            method = self._locate_method(subject, [f"get_{name}", f"get{_upper_first(name)}"])
            if method is not None:
                return method
            return self._locate_dynamic(subject, name)
        if accessor == ACCESSOR_PUBLICPROPERTY:
            return self._locate_attribute(subject, name)
        return None

    @staticmethod
    def _asserter_names(name: str) -> List[str]:
        upper = _upper_first(name)
        names = [f"is_{name}", f"has_{name}", f"is{upper}", f"has{upper}"]
        if name.startswith(("is", "has")):
            names.append(name)
        return names

    @staticmethod
    def _locate_item(subject: Any, name: str) -> Optional[Thunk]:
        if isinstance(subject, dict):
            if name not in subject:
                index = _as_index(name)
                if index is not None and index in subject:
                    return lambda: subject[index]
            return lambda: subject.get(name)
        if isinstance(subject, (list, tuple)):
            index = _as_index(name)
            if index is not None and -len(subject) <= index < len(subject):
                return lambda: subject[index]
            return None
        if hasattr(subject, "__getitem__") and hasattr(subject, "__contains__"):
            try:
                present = name in subject
            except TypeError:
                return None
            if present:
                return lambda: subject[name]
        return None

    @staticmethod
    def _locate_method(subject: Any, names: Sequence[str]) -> Optional[Thunk]:
        for attr in names:
            try:
                inspect.getattr_static(subject, attr)
            except AttributeError:
                continue
            bound = getattr(subject, attr, None)
            if callable(bound):
                return bound
        return None

    @staticmethod
    def _locate_dynamic(subject: Any, name: str) -> Optional[Thunk]:
        """Свойства класса и магический __getattr__."""
        static = inspect.getattr_static(subject, name, _MISSING)
        if static is not _MISSING:
            if isinstance(static, _PROPERTY_TYPES):
                return lambda: getattr(subject, name, None)
            return None
        if hasattr(type(subject), "__getattr__"):
            return lambda: getattr(subject, name, None)
        return None

    @staticmethod
    def _locate_attribute(subject: Any, name: str) -> Optional[Thunk]:
        if inspect.getattr_static(subject, name, _MISSING) is _MISSING:
            return None
        try:
            value = getattr(subject, name)
        except AttributeError:
            return None
        if inspect.isroutine(value):
            return None
        return lambda: value


__all__ = [
    "VariableExtractor",
    "ACCESSOR_ARRAY",
    "ACCESSOR_ASSERTER",
    "ACCESSOR_GETTER",
    "ACCESSOR_PUBLICPROPERTY",
]
