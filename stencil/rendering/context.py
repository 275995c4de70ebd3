"""
Контекст рендеринга: всё, что нужно шаблону во время вывода.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..compiler.compiler import TemplateCompiler
from ..helpers.invoker import HelperInvoker
from ..helpers.resolver import HelperResolver
from ..helpers.variable_container import HelperVariableContainer
from ..protocols import TemplateCache
from ..variables.provider import PathContext, VariableProvider


class RenderingContext:
    """
    Связка провайдера переменных, резолвера и вызывающего хелперов,
    состояния хелперов, кэша и компилятора шаблонов.

    Args:
        variables: Начальные переменные шаблона
        helper_resolver: Резолвер хелперов (по умолчанию - новый)
        cache: Бэкенд кэша скомпилированных шаблонов
        cache_enabled: Разрешено ли использовать кэш
        strict_identifiers: Обнаруживать ли коллизии ключей кэша
    """

    def __init__(
        self,
        variables: Optional[Mapping[str, Any]] = None,
        *,
        helper_resolver: Optional[HelperResolver] = None,
        cache: Optional[TemplateCache] = None,
        cache_enabled: bool = True,
        strict_identifiers: bool = False,
    ):
        self.variable_provider = VariableProvider(variables)
        self.helper_resolver = helper_resolver or HelperResolver()
        self.helper_invoker = HelperInvoker()
        self.helper_variable_container = HelperVariableContainer()
        self._cache = cache
        self._cache_enabled = cache_enabled
        self.template_compiler = TemplateCompiler(strict_identifiers=strict_identifiers)
        self.template_compiler.set_rendering_context(self)

    def get_cache(self) -> Optional[TemplateCache]:
        return self._cache

    def set_cache(self, cache: Optional[TemplateCache]) -> None:
        self._cache = cache

    def is_cache_enabled(self) -> bool:
        return self._cache is not None and self._cache_enabled

    def set_cache_enabled(self, enabled: bool) -> None:
        self._cache_enabled = enabled

    def expression_context(self) -> PathContext:
        """Контекст для булевых выражений: ключи разрешаются как пути."""
        return PathContext(self.variable_provider)


__all__ = ["RenderingContext"]
