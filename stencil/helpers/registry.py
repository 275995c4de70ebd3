"""
Реестр классов хелперов.

Корень (root) - точечное имя модуля, в котором хелперы регистрируются
декоратором. Модуль корня импортируется один раз при первом обращении,
чтобы отработали регистрации уровня модуля.
"""

from __future__ import annotations

import importlib
import logging
from typing import Callable, Dict, List, Optional, Set, Type, TypeVar

logger = logging.getLogger(__name__)

BUILTIN_ROOT = "stencil.helpers.builtin"
HELPER_SUFFIX = "Helper"

T = TypeVar("T", bound=type)


def candidate_name(identifier: str) -> str:
    """
    Имя класса-кандидата для идентификатора хелпера.

    Каждый сегмент через точку начинается с заглавной буквы,
    в конце добавляется суффикс Helper: ``format.cdata`` → ``Format.CdataHelper``.
    """
    segments = identifier.split(".")
    return ".".join(segment[:1].upper() + segment[1:] for segment in segments) + HELPER_SUFFIX


class HelperRegistry:
    """
    Отображение корень → {имя кандидата → класс хелпера}.
    """

    def __init__(self):
        self._helpers: Dict[str, Dict[str, type]] = {}
        self._loaded_roots: Set[str] = set()

    def register(self, root: str, identifier: str) -> Callable[[T], T]:
        """
        Декоратор регистрации класса хелпера.

        Args:
            root: Корень, под которым хелпер будет доступен
            identifier: Идентификатор хелпера в шаблоне (например, ``format.cdata``)
        """
        def decorator(helper_class: T) -> T:
            self.add(root, candidate_name(identifier), helper_class)
            return helper_class
        return decorator

    def add(self, root: str, candidate: str, helper_class: type) -> None:
        helpers = self._helpers.setdefault(root, {})
        if candidate in helpers and helpers[candidate] is not helper_class:
            logger.warning(f"Helper '{root}.{candidate}' overwrites existing registration")
        helpers[candidate] = helper_class
        logger.debug(f"Registered helper: {root}.{candidate}")

    def lookup(self, root: str, candidate: str) -> Optional[type]:
        self._ensure_loaded(root)
        return self._helpers.get(root, {}).get(candidate)

    def roots(self) -> List[str]:
        return list(self._helpers.keys())

    def helpers(self, root: str) -> Dict[str, type]:
        self._ensure_loaded(root)
        return dict(self._helpers.get(root, {}))

    def _ensure_loaded(self, root: str) -> None:
        if root in self._loaded_roots:
            return
        self._loaded_roots.add(root)
        try:
            importlib.import_module(root)
        except ModuleNotFoundError as e:
            # Корень может существовать только в реестре, без модуля
            if e.name and (root == e.name or root.startswith(e.name + ".")):
                logger.debug(f"Helper root '{root}' has no importable module")
                return
            raise


helper_registry = HelperRegistry()
register_helper = helper_registry.register


__all__ = [
    "BUILTIN_ROOT",
    "HELPER_SUFFIX",
    "candidate_name",
    "HelperRegistry",
    "helper_registry",
    "register_helper",
]
