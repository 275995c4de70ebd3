"""
Точка входа для рендеринга: скомпилированный шаблон из кэша
или разбор, компиляция и интерпретация.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from .cache.fs_cache import FileCache
from .config import CONFIG_FILE_NAME, StencilConfig, apply_config, load_config
from .errors import StopCompiling
from .protocols import ParsedTemplate
from .rendering.context import RenderingContext
from .syntax.state import ParsingState
from .version import tool_version

logger = logging.getLogger(__name__)

ParseFn = Callable[[], ParsingState]


class TemplateEngine:
    """
    Рендеринг шаблонов с кэшем компиляции.

    Шаблоны приходят как функции разбора: движок вызывает их только
    если в кэше нет пригодного скомпилированного варианта.
    """

    def __init__(self, rendering_context: Optional[RenderingContext] = None):
        self.rendering_context = rendering_context or RenderingContext()

    def get_parsed(self, identifier: str, parse: ParseFn) -> ParsedTemplate:
        compiler = self.rendering_context.template_compiler
        if compiler.has(identifier):
            parsed = compiler.get(identifier)
            if parsed.is_compilable():
                logger.debug(f"Cache hit for template '{identifier}'")
                return parsed
        logger.debug(f"Cache miss for template '{identifier}'")

        state = parse()
        if not state.identifier:
            state.identifier = identifier
        self._store(identifier, state)
        if state.is_compilable() and compiler.has(identifier):
            return compiler.get(identifier)
        return state

    def _store(self, identifier: str, state: ParsingState) -> None:
        compiler = self.rendering_context.template_compiler
        try:
            compiler.store(identifier, state)
        except StopCompiling:
            logger.debug(f"Template '{identifier}' is not compilable; rendering uncompiled")
            state.set_compilable(False)
            compiler.store(identifier, state)
        finally:
            compiler.reset()

    def render(self, identifier: str, parse: ParseFn, section: Optional[str] = None) -> Any:
        parsed = self.get_parsed(identifier, parse)
        parsed.add_compiled_namespaces(self.rendering_context)
        if section is not None:
            return parsed.render_section(section, self.rendering_context)
        return parsed.render(self.rendering_context)


def create_rendering_context(
    root: Path,
    config: Optional[StencilConfig] = None,
    variables: Optional[Mapping[str, Any]] = None,
) -> RenderingContext:
    """
    Контекст рендеринга для проекта: конфигурация из <root>/stencil.yaml
    (если не передана явно) и файловый кэш.
    """
    if config is None:
        config = load_config(root / CONFIG_FILE_NAME)
    cache = FileCache(
        root,
        enabled=config.cache.enabled,
        directory=config.cache.directory,
        tool_version=tool_version(),
    )
    context = RenderingContext(
        variables,
        cache=cache,
        cache_enabled=cache.enabled,
        strict_identifiers=config.cache.strict_identifiers,
    )
    apply_config(config, context.helper_resolver)
    return context


__all__ = ["TemplateEngine", "create_rendering_context"]
