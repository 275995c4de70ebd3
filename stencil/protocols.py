"""
Интерфейсы внешних участников: бэкенды кэша, парсер и препроцессоры шаблонов.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .rendering.context import RenderingContext
    from .syntax.state import ParsingState


@runtime_checkable
class TemplateCache(Protocol):
    """
    Хранилище скомпилированного кода.

    get/set/has по одному ключу должны быть атомарны.
    """

    def has(self, key: str) -> bool: ...

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, payload: str) -> None: ...


@runtime_checkable
class TemplateParser(Protocol):
    """Превращает исходник шаблона в ParsingState."""

    def parse(self, source: str, identifier: str) -> ParsingState: ...


@runtime_checkable
class TemplateProcessor(Protocol):
    """Препроцессор исходника шаблона перед разбором."""

    def set_rendering_context(self, rendering_context: RenderingContext) -> None: ...

    def pre_process_source(self, source: str) -> str: ...


@runtime_checkable
class ParsedTemplate(Protocol):
    """Общий интерфейс ParsingState и скомпилированных шаблонов."""

    def get_identifier(self) -> str: ...

    def is_compiled(self) -> bool: ...

    def is_compilable(self) -> bool: ...

    def has_layout(self) -> bool: ...

    def get_layout_name(self, rendering_context: RenderingContext) -> str: ...

    def add_compiled_namespaces(self, rendering_context: RenderingContext) -> None: ...

    def render(self, rendering_context: RenderingContext) -> Any: ...

    def render_section(self, name: str, rendering_context: RenderingContext) -> Any: ...


__all__ = ["TemplateCache", "TemplateParser", "TemplateProcessor", "ParsedTemplate"]
