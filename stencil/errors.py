"""
Base exceptions of the stencil template engine.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from StencilUserError.

StopCompiling is deliberately NOT a user error: it is an intentional
signal that aborts code generation for the current template.
"""

from __future__ import annotations

from typing import List, Optional


class StencilUserError(Exception):
    """
    Базовый класс для всех пользовательских ошибок шаблонизатора.

    Ошибки этого типа указывают на проблемы, которые пользователь может
    исправить: опечатки в именах хелперов, неверные выражения, битая конфигурация.
    """
    pass


class ParserError(StencilUserError):
    """Структурная ошибка шаблона."""
    pass


class ResolutionError(ParserError):
    """
    Хелпер не найден ни в одном из корней пространства имён.

    Хранит всё, что нужно для диагностики: алиас пространства имён,
    идентификатор хелпера, вычисленное имя кандидата и список
    просмотренных корней.
    """

    def __init__(
        self,
        namespace: Optional[str],
        identifier: str,
        candidate: str,
        searched_roots: List[str],
    ):
        self.namespace = namespace
        self.identifier = identifier
        self.candidate = candidate
        self.searched_roots = list(searched_roots)
        roots = ", ".join(self.searched_roots) if self.searched_roots else "none"
        super().__init__(
            f'The helper "<{namespace}:{identifier}>" could not be resolved.\n'
            f'Based on your spelling, the system would load "{candidate}", '
            f"however it does not exist. "
            f"We looked in the following roots: {roots}."
        )


class ExpressionError(ParserError):
    """Некорректная структура выражения (тернарного или арифметического)."""
    pass


class HelperError(StencilUserError):
    """Ошибка валидации аргументов или выполнения хелпера."""
    pass


class CacheKeyCollisionError(StencilUserError):
    """Два разных идентификатора шаблонов дали один и тот же ключ кэша."""

    def __init__(self, key: str, existing: str, incoming: str):
        self.key = key
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Template identifiers '{existing}' and '{incoming}' "
            f"both sanitize to cache key '{key}'"
        )


class ConfigLoadError(StencilUserError, ValueError):
    """Ошибка загрузки конфигурации с указанием пути поля."""
    pass


class StopCompiling(Exception):
    """
    Намеренная остановка компиляции текущего шаблона.

    Поднимается TemplateCompiler.disable(). Частично сгенерированный код
    отбрасывается целиком.
    """
    pass


__all__ = [
    "StencilUserError",
    "ParserError",
    "ResolutionError",
    "ExpressionError",
    "HelperError",
    "CacheKeyCollisionError",
    "ConfigLoadError",
    "StopCompiling",
]
