"""
Результат разбора шаблона.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

from ..errors import ParserError
from ..rendering.output import to_output_string
from .nodes import RootNode, TemplateNode

if TYPE_CHECKING:
    from ..rendering.context import RenderingContext

LayoutName = Union[None, str, TemplateNode]


def _evaluator(rendering_context: RenderingContext) -> Any:
    # интерпретатор импортирует узлы этого пакета
    from ..rendering.interpreter import NodeEvaluator
    return NodeEvaluator(rendering_context)


class ParsingState:
    """
    Разобранный, но не скомпилированный шаблон.

    Attributes:
        root_node: Корень шаблона
        sections: Секции в порядке объявления: имя → поддерево
        layout_name: Имя лэйаута (строка или узел, вычисляемый при рендеринге)
        variables: Таблица символов на время разбора
        identifier: Идентификатор шаблона
    """

    def __init__(
        self,
        root_node: Optional[RootNode] = None,
        *,
        sections: Optional[Mapping[str, RootNode]] = None,
        layout_name: LayoutName = None,
        identifier: str = "",
        compilable: bool = True,
    ):
        self.root_node = root_node or RootNode()
        self.sections: Dict[str, RootNode] = dict(sections or {})
        self.layout_name = layout_name
        self.variables: Dict[str, Any] = {}
        self.identifier = identifier
        self._compilable = compilable

    def get_identifier(self) -> str:
        return self.identifier

    def set_compilable(self, compilable: bool) -> None:
        self._compilable = compilable

    def is_compilable(self) -> bool:
        return self._compilable

    def is_compiled(self) -> bool:
        return False

    def has_layout(self) -> bool:
        return self.layout_name is not None

    def get_layout_name(self, rendering_context: RenderingContext) -> str:
        if isinstance(self.layout_name, TemplateNode):
            return to_output_string(_evaluator(rendering_context).evaluate(self.layout_name))
        return self.layout_name or ""

    def add_compiled_namespaces(self, rendering_context: RenderingContext) -> None:
        pass

    def has_section(self, name: str) -> bool:
        return name in self.sections

    def render(self, rendering_context: RenderingContext) -> Any:
        return _evaluator(rendering_context).evaluate(self.root_node)

    def render_section(self, name: str, rendering_context: RenderingContext) -> Any:
        section = self.sections.get(name)
        if section is None:
            raise ParserError(f'Section "{name}" does not exist in template "{self.identifier}"')
        return _evaluator(rendering_context).evaluate(section)


__all__ = ["ParsingState"]
