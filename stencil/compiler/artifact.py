"""
Базовые классы скомпилированных шаблонов и загрузка сгенерированного кода.
"""

from __future__ import annotations

import hashlib
import keyword
import logging
import re
from typing import TYPE_CHECKING, Any

from ..errors import ParserError

if TYPE_CHECKING:
    from ..rendering.context import RenderingContext

logger = logging.getLogger(__name__)

_NON_ASCII_WORD_RE = re.compile(r"[^A-Za-z0-9_]")


def section_method_name(section_name: str) -> str:
    """Имя метода секции: section_ + sha1 от имени секции."""
    return "section_" + hashlib.sha1(str(section_name).encode("utf-8")).hexdigest()


def class_name_for(key: str) -> str:
    """
    Имя класса для очищенного ключа кэша.

    Символы \\x7f-\\xff, допустимые в ключе, не всегда допустимы
    в идентификаторах Python, поэтому имя строится только из ASCII;
    если что-то заменено, добавляется суффикс из sha1 ключа.
    """
    name = _NON_ASCII_WORD_RE.sub("_", key) or "_"
    if name != key:
        name += "_" + hashlib.sha1(key.encode("utf-8")).hexdigest()[:8]
    if name[0].isdigit() or keyword.iskeyword(name):
        name = "_" + name
    return name


class CompiledTemplate:
    """Базовый класс скомпилированного шаблона."""

    identifier: str = ""

    def get_identifier(self) -> str:
        return self.identifier

    def is_compiled(self) -> bool:
        return True

    def is_compilable(self) -> bool:
        return True

    def has_layout(self) -> bool:
        return False

    def get_layout_name(self, rendering_context: RenderingContext) -> str:
        return ""

    def add_compiled_namespaces(self, rendering_context: RenderingContext) -> None:
        pass

    def render(self, rendering_context: RenderingContext) -> Any:
        return None

    def has_section(self, name: str) -> bool:
        return callable(getattr(self, section_method_name(name), None))

    def render_section(self, name: str, rendering_context: RenderingContext) -> Any:
        method = getattr(self, section_method_name(name), None)
        if method is None:
            raise ParserError(f'Section "{name}" does not exist in template "{self.identifier}"')
        return method(rendering_context)


class UncompilableTemplate(CompiledTemplate):
    """
    Заглушка для шаблона, который нельзя скомпилировать.

    Сохраняется в кэш, чтобы не пытаться компилировать шаблон повторно;
    рендеринг выполняется интерпретатором.
    """

    def is_compilable(self) -> bool:
        return False


def load_template_class(code: str, key: str) -> type:
    """
    Исполняет сгенерированный модуль и возвращает класс шаблона.

    Raises:
        ParserError: Если модуль не определяет ожидаемый класс
    """
    class_name = class_name_for(key)
    namespace: dict = {"__name__": f"stencil.compiled.{class_name}"}
    exec(compile(code, f"<stencil:{key}>", "exec"), namespace)
    template_class = namespace.get(class_name)
    if not (isinstance(template_class, type) and issubclass(template_class, CompiledTemplate)):
        raise ParserError(f'Compiled code for "{key}" does not define template class "{class_name}"')
    logger.debug(f"Loaded compiled template class {class_name}")
    return template_class


__all__ = [
    "CompiledTemplate",
    "UncompilableTemplate",
    "section_method_name",
    "class_name_for",
    "load_template_class",
]
