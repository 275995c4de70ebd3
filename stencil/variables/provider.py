"""
Контейнер переменных шаблона.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional, Sequence

from .extractor import VariableExtractor


class VariableProvider:
    """
    Хранилище переменных, доступных шаблону во время рендеринга.

    Пути через точку разрешаются VariableExtractor'ом; специальный путь
    ``_all`` возвращает все переменные разом.
    """

    def __init__(self, variables: Optional[Mapping[str, Any]] = None):
        self._variables: Dict[str, Any] = dict(variables or {})

    def get(self, identifier: str) -> Any:
        return self.get_by_path(identifier)

    def get_by_path(self, path: str, accessors: Optional[Sequence[Optional[str]]] = None) -> Any:
        if path == "_all":
            return self._variables
        return VariableExtractor.extract(self._variables, path, accessors)

    def get_accessors_for_path(self, path: str) -> List[str]:
        return VariableExtractor.extract_accessors(self._variables, path)

    def add(self, identifier: str, value: Any) -> None:
        self._variables[identifier] = value

    def remove(self, identifier: str) -> None:
        self._variables.pop(identifier, None)

    def exists(self, identifier: str) -> bool:
        return identifier in self._variables

    def get_all(self) -> Dict[str, Any]:
        return self._variables

    def get_all_identifiers(self) -> List[str]:
        return list(self._variables.keys())

    def get_scope_copy(self, variables: Mapping[str, Any]) -> "VariableProvider":
        """Новый провайдер с копией текущих переменных, дополненной переданными."""
        scoped = dict(self._variables)
        scoped.update(variables)
        return VariableProvider(scoped)


class PathContext(Mapping):
    """
    Контекст выражений только для чтения.

    Ключами служат пути через точку; значение None считается отсутствием ключа.
    """

    def __init__(self, provider: VariableProvider):
        self._provider = provider

    def __getitem__(self, key: str) -> Any:
        value = self._provider.get_by_path(key)
        if value is None:
            raise KeyError(key)
        return value

    def __iter__(self) -> Iterator[str]:
        return iter(self._provider.get_all())

    def __len__(self) -> int:
        return len(self._provider.get_all())


__all__ = ["VariableProvider", "PathContext"]
