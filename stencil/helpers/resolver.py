"""
Разрешение имён хелперов в классы.

Пространство имён - алиас (например, ``f``), за которым стоит
упорядоченный список корней. Корни просматриваются от последнего
добавленного к первому, так что поздние корни переопределяют ранние.
Алиас со значением None известен, но игнорируется.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..errors import ResolutionError
from .arguments import ArgumentDefinition
from .base import AbstractHelper
from .registry import BUILTIN_ROOT, HelperRegistry, candidate_name, helper_registry

logger = logging.getLogger(__name__)

Roots = Optional[List[str]]
RootsInput = Union[None, str, Iterable[str]]


def _wildcard_pattern(alias: str) -> "re.Pattern[str]":
    return re.compile(re.escape(alias).replace(r"\*", "[a-zA-Z0-9.]*"))


class HelperResolver:
    """
    Таблица пространств имён, алиасов хелперов и кэш разрешённых классов.
    """

    def __init__(self, registry: Optional[HelperRegistry] = None):
        self._registry = registry or helper_registry
        self._namespaces: Dict[str, Roots] = {"f": [BUILTIN_ROOT]}
        self._aliases: Dict[str, Tuple[str, str]] = {}
        self._resolved: Dict[Tuple[Optional[str], str], type] = {}

    # ---- пространства имён ----

    def get_namespaces(self) -> Dict[str, Roots]:
        return {alias: (list(roots) if roots is not None else None) for alias, roots in self._namespaces.items()}

    def add_namespace(self, alias: str, roots: RootsInput) -> None:
        """
        Добавляет корни к алиасу.

        Новые корни дописываются в конец (без повторов). None помечает
        новый алиас как игнорируемый; для существующего списка корней
        None ничего не меняет.
        """
        if roots is None:
            if alias not in self._namespaces:
                self._namespaces[alias] = None
            else:
                logger.debug(f"Namespace '{alias}' already known; ignoring null roots")
        else:
            incoming = [roots] if isinstance(roots, str) else list(roots)
            existing = self._namespaces.get(alias) or []
            merged = list(existing)
            for root in incoming:
                if root not in merged:
                    merged.append(root)
            self._namespaces[alias] = merged
            logger.debug(f"Namespace '{alias}' roots: {merged}")
        self._resolved.clear()

    def add_namespaces(self, namespaces: Mapping[str, RootsInput]) -> None:
        for alias, roots in namespaces.items():
            self.add_namespace(alias, roots)

    def set_namespaces(self, namespaces: Mapping[str, RootsInput]) -> None:
        """Заменяет всю таблицу, включая пространство имён по умолчанию."""
        self._namespaces = {}
        self._resolved.clear()
        self.add_namespaces(namespaces)

    def is_namespace_valid(self, alias: str) -> bool:
        return alias in self._namespaces and self._namespaces[alias] is not None

    def is_namespace_valid_or_ignored(self, alias: str) -> bool:
        return self.is_namespace_valid(alias) or self.is_namespace_ignored(alias)

    def is_namespace_ignored(self, alias: str) -> bool:
        if alias in self._namespaces and self._namespaces[alias] is None:
            return True
        for known in self._namespaces:
            if "*" in known and _wildcard_pattern(known).fullmatch(alias):
                return True
        return False

    # ---- алиасы хелперов ----

    def add_alias(self, alias: str, namespace: str, identifier: str) -> None:
        self._aliases[alias] = (namespace, identifier)
        self._resolved.clear()

    def is_alias_registered(self, alias: str) -> bool:
        return alias in self._aliases

    # ---- разрешение ----

    def resolve(self, namespace: Optional[str], identifier: str) -> type:
        """
        Возвращает класс хелпера.

        Raises:
            ResolutionError: Если ни один корень не содержит кандидата
        """
        if not namespace and identifier in self._aliases:
            namespace, identifier = self._aliases[identifier]

        key = (namespace, identifier)
        cached = self._resolved.get(key)
        if cached is not None:
            return cached

        candidate = candidate_name(identifier)
        roots = list(self._namespaces.get(namespace) or []) if namespace is not None else []
        for root in reversed(roots):
            helper_class = self._registry.lookup(root, candidate)
            if helper_class is not None:
                logger.debug(f"Resolved helper {namespace}:{identifier} -> {root}.{candidate}")
                self._resolved[key] = helper_class
                return helper_class

        qualified = f"{roots[0]}.{candidate}" if roots else candidate
        raise ResolutionError(namespace, identifier, qualified, roots)

    def create_helper(self, namespace: Optional[str], identifier: str) -> AbstractHelper:
        return self.resolve(namespace, identifier)()

    def get_argument_definitions(self, helper: AbstractHelper) -> Dict[str, ArgumentDefinition]:
        return helper.prepare_arguments()


__all__ = ["HelperResolver"]
