"""
Состояние хелперов, живущее между их вызовами в рамках одного рендеринга.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple


class HelperVariableContainer:
    """Хранилище значений, адресуемых парой (ключ хелпера, имя)."""

    def __init__(self):
        self._objects: Dict[Tuple[str, str], Any] = {}

    @staticmethod
    def _key(helper_key: Any, name: str) -> Tuple[str, str]:
        if isinstance(helper_key, type):
            helper_key = f"{helper_key.__module__}.{helper_key.__qualname__}"
        return str(helper_key), name

    def add(self, helper_key: Any, name: str, value: Any) -> None:
        self._objects[self._key(helper_key, name)] = value

    def get(self, helper_key: Any, name: str, default: Any = None) -> Any:
        return self._objects.get(self._key(helper_key, name), default)

    def exists(self, helper_key: Any, name: str) -> bool:
        return self._key(helper_key, name) in self._objects

    def remove(self, helper_key: Any, name: str) -> None:
        self._objects.pop(self._key(helper_key, name), None)


__all__ = ["HelperVariableContainer"]
