"""
Компилятор шаблонов.

Превращает ParsingState в исходный код Python-модуля с одним классом:
метод render для корня, по методу на секцию, доступ к имени лэйаута
и регистрация пространств имён, известных на момент компиляции.
Код сохраняется в кэш под очищенным идентификатором шаблона.
"""

from __future__ import annotations

import logging
import re
import textwrap
from typing import TYPE_CHECKING, Dict, List, Optional

from ..errors import CacheKeyCollisionError, ParserError, StopCompiling
from ..syntax.nodes import HelperNode, TemplateNode, child_nodes
from ..syntax.state import LayoutName, ParsingState
from .artifact import (
    CompiledTemplate,
    UncompilableTemplate,
    class_name_for,
    load_template_class,
    section_method_name,
)
from .converter import ConvertedNode, NodeConverter

if TYPE_CHECKING:
    from ..rendering.context import RenderingContext

logger = logging.getLogger(__name__)

MODE_NORMAL = "normal"
MODE_WARMUP = "warmup"

_IDENTIFIER_SANITIZER = re.compile(r"[^a-zA-Z0-9_\x7f-\xff]")

_METHOD_INDENT = " " * 8

_MODULE_TEMPLATE = """\
# Compiled template {key}
from stencil.compiler.artifact import CompiledTemplate
from stencil.expression.arithmetic import evaluate_math
from stencil.expression.runtime import compare, convert_node_to_boolean, resolve_term
from stencil.expression.ternary import resolve_ternary_part
from stencil.helpers.arguments import LazyArgument
from stencil.rendering.output import concatenate, to_output_string


class {class_name}(CompiledTemplate):

    identifier = {key!r}

    def get_layout_name(self, rendering_context):
{layout_name}
    def has_layout(self):
        return {has_layout}

    def add_compiled_namespaces(self, rendering_context):
        rendering_context.helper_resolver.add_namespaces({namespaces})
{functions}"""

_UNCOMPILABLE_TEMPLATE = """\
# Compiled template {key}
from stencil.compiler.artifact import UncompilableTemplate


class {class_name}(UncompilableTemplate):

    identifier = {key!r}
"""

_FUNCTION_TEMPLATE = """
    def {name}(self, rendering_context):
        # {comment}
{body}"""


def _indent(code: str) -> str:
    return textwrap.indent(code, _METHOD_INDENT)


class TemplateCompiler:
    """
    Компилятор шаблонов с кэшем загруженных экземпляров.

    Args:
        strict_identifiers: Бросать CacheKeyCollisionError, если два разных
            идентификатора дают один ключ кэша (иначе - предупреждение в лог)
    """

    def __init__(self, *, strict_identifiers: bool = False):
        self.node_converter = NodeConverter(self)
        self.rendering_context: Optional[RenderingContext] = None
        self.mode = MODE_NORMAL
        self.currently_processing_state: Optional[ParsingState] = None
        self.strict_identifiers = strict_identifiers
        self._instances: Dict[str, CompiledTemplate] = {}
        self._classes: Dict[str, type] = {}
        self._raw_identifiers: Dict[str, str] = {}

    # ---- режимы и окружение ----

    def enter_warmup_mode(self) -> None:
        """Включает режим прогрева. Выйти из него нельзя."""
        self.mode = MODE_WARMUP

    def is_warmup_mode(self) -> bool:
        return self.mode == MODE_WARMUP

    def set_rendering_context(self, rendering_context: RenderingContext) -> None:
        self.rendering_context = rendering_context

    def get_rendering_context(self) -> RenderingContext:
        return self.rendering_context

    def set_node_converter(self, node_converter: NodeConverter) -> None:
        self.node_converter = node_converter

    def get_node_converter(self) -> NodeConverter:
        return self.node_converter

    def get_currently_processing_state(self) -> Optional[ParsingState]:
        return self.currently_processing_state

    def disable(self) -> None:
        """
        Останавливает компиляцию текущего шаблона.

        Raises:
            StopCompiling: Всегда
        """
        raise StopCompiling("Compiling stopped")

    def is_disabled(self) -> bool:
        return not self.rendering_context.is_cache_enabled()

    def reset(self) -> None:
        self.currently_processing_state = None

    # ---- идентификаторы ----

    @staticmethod
    def sanitize_identifier(identifier: str) -> str:
        return _IDENTIFIER_SANITIZER.sub("_", identifier)

    def _check_identifier_collision(self, identifier: str, key: str) -> None:
        existing = self._raw_identifiers.get(key)
        if existing is not None and existing != identifier:
            if self.strict_identifiers:
                raise CacheKeyCollisionError(key, existing, identifier)
            logger.warning(
                f"Template identifiers '{existing}' and '{identifier}' share cache key '{key}'; "
                f"the later one wins"
            )
        self._raw_identifiers[key] = identifier

    # ---- кэш ----

    def has(self, identifier: str) -> bool:
        key = self.sanitize_identifier(identifier)
        if not key:
            return False
        if key in self._instances or key in self._classes:
            return True
        if not self.rendering_context.is_cache_enabled():
            return False
        return self.rendering_context.get_cache().has(key)

    def get(self, identifier: str) -> CompiledTemplate:
        """
        Возвращает экземпляр скомпилированного шаблона.

        Скомпилированные экземпляры кэшируются, заглушки - нет.

        Raises:
            ParserError: Если в кэше нет кода для идентификатора
        """
        key = self.sanitize_identifier(identifier)
        instance = self._instances.get(key)
        if instance is not None:
            return instance

        template_class = self._classes.get(key)
        if template_class is None:
            cache = self.rendering_context.get_cache()
            code = cache.get(key) if cache is not None else None
            if not code:
                raise ParserError(f'Compiled template "{key}" is not available in the cache')
            template_class = load_template_class(code, key)
            self._classes[key] = template_class

        instance = template_class()
        if not instance.is_compilable():
            return instance
        self._instances[key] = instance
        return instance

    def store(self, identifier: str, parsing_state: ParsingState) -> Optional[str]:
        """
        Компилирует состояние и сохраняет код в кэш.

        Returns:
            Сгенерированный код или None, если компиляция выключена

        Raises:
            StopCompiling: Если какой-то узел нельзя скомпилировать
            CacheKeyCollisionError: В строгом режиме при коллизии ключей
        """
        if self.is_disabled():
            parsing_state.set_compilable(False)
            return None

        key = self.sanitize_identifier(identifier)
        self._check_identifier_collision(identifier, key)
        cache = self.rendering_context.get_cache()

        if not parsing_state.is_compilable():
            code = _UNCOMPILABLE_TEMPLATE.format(key=key, class_name=class_name_for(key))
            cache.set(key, code)
            self._forget(key)
            logger.debug(f"Stored uncompilable stub for template '{identifier}'")
            return code

        self.currently_processing_state = parsing_state
        self.node_converter.set_variable_counter(0)

        functions = self._generate_section_code(parsing_state)
        functions += self._generate_code_for_section(
            self.node_converter.convert_list(parsing_state.root_node.children),
            "render",
            "Main render function",
        )
        code = _MODULE_TEMPLATE.format(
            key=key,
            class_name=class_name_for(key),
            layout_name=_indent(self._generate_code_for_layout_name(parsing_state.layout_name)),
            has_layout=parsing_state.has_layout(),
            namespaces=repr(self.rendering_context.helper_resolver.get_namespaces()),
            functions=functions,
        )
        cache.set(key, code)
        self._forget(key)
        logger.debug(f"Compiled template '{identifier}' as '{key}' ({len(code)} chars)")
        return code

    def _forget(self, key: str) -> None:
        self._instances.pop(key, None)
        self._classes.pop(key, None)

    # ---- генерация ----

    def _generate_section_code(self, parsing_state: ParsingState) -> str:
        functions = ""
        for name, section in parsing_state.sections.items():
            functions += self._generate_code_for_section(
                self.node_converter.convert_list(section.children),
                section_method_name(name),
                f"Section {name}",
            )
        return functions

    def _generate_code_for_section(self, converted: ConvertedNode, name: str, comment: str) -> str:
        body = converted.initialization + f"return {converted.execution}\n"
        return _FUNCTION_TEMPLATE.format(name=name, comment=" ".join(comment.splitlines()), body=_indent(body))

    def _generate_code_for_layout_name(self, layout_name: LayoutName) -> str:
        if isinstance(layout_name, TemplateNode):
            converted = self.node_converter.convert(layout_name)
            return converted.initialization + f"return to_output_string({converted.execution})\n"
        return f"return {str(layout_name or '')!r}\n"

    # ---- замыкания ----

    def variable_name(self, prefix: str) -> str:
        return self.node_converter.variable_name(prefix)

    def wrap_child_nodes_in_closure(self, node: TemplateNode) -> ConvertedNode:
        """Замыкание, которое вычисляет все дочерние узлы при вызове."""
        name = self.variable_name("render_children")
        converted = self.node_converter.convert_list(child_nodes(node))
        return ConvertedNode(self._closure_definition(name, converted), name)

    def wrap_helper_argument_in_closure(self, node: HelperNode, argument_name: str) -> ConvertedNode:
        """Замыкание, которое вычисляет один аргумент хелпера при вызове."""
        name = self.variable_name("argument")
        converted = self.node_converter.convert_value(node.arguments.get(argument_name))
        return ConvertedNode(self._closure_definition(name, converted), name)

    @staticmethod
    def _closure_definition(name: str, converted: ConvertedNode) -> str:
        body = converted.initialization + f"return {converted.execution}\n"
        return f"def {name}():\n" + textwrap.indent(body, "    ")


__all__ = ["TemplateCompiler", "MODE_NORMAL", "MODE_WARMUP"]
