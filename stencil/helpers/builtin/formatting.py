"""
Форматирующие хелперы.
"""

from __future__ import annotations

from ...rendering.output import to_output_string
from ..base import AbstractHelper
from ..registry import BUILTIN_ROOT, register_helper


@register_helper(BUILTIN_ROOT, "format.cdata")
class CdataHelper(AbstractHelper):
    """Оборачивает значение (или дочерние узлы) в секцию CDATA."""

    def initialize_arguments(self) -> None:
        self.register_argument("value", object, "The value to output")

    def render(self) -> str:
        value = self.arguments["value"]
        if value is None:
            value = self.render_children()
        return f"<![CDATA[{to_output_string(value)}]]>"


@register_helper(BUILTIN_ROOT, "format.trim")
class TrimHelper(AbstractHelper):
    """Убирает пробелы по краям значения."""

    def initialize_arguments(self) -> None:
        self.register_argument("value", object, "The value to trim")
        self.register_argument("characters", str, "Characters to strip, whitespace by default")

    def render(self) -> str:
        value = self.arguments["value"]
        if value is None:
            value = self.render_children()
        return to_output_string(value).strip(self.arguments["characters"])


__all__ = ["CdataHelper", "TrimHelper"]
