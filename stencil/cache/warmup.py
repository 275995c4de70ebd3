"""
Прогрев кэша скомпилированных шаблонов.

Компилирует набор шаблонов заранее и собирает отчёт: что удалось
скомпилировать, что нет и почему.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Sequence

from ..errors import ExpressionError, ResolutionError, StencilUserError, StopCompiling
from ..syntax.state import ParsingState

if TYPE_CHECKING:
    from ..rendering.context import RenderingContext

logger = logging.getLogger(__name__)

RESULT_COMPILABLE = "compilable"
RESULT_COMPILED = "compiled"
RESULT_HASLAYOUT = "has_layout"
RESULT_COMPILEDCLASS = "compiled_class"
RESULT_FAILURE = "failure"
RESULT_MITIGATIONS = "mitigations"


class FailedCompilingState(ParsingState):
    """
    Состояние шаблона, компиляция которого завершилась ошибкой.

    Несёт причину неудачи и подсказки, как её устранить.
    """

    def __init__(self, identifier: str = "", failure_reason: str = "", mitigations: Sequence[str] = ()):
        super().__init__(identifier=identifier, compilable=False)
        self.failure_reason = failure_reason
        self.mitigations: List[str] = list(mitigations)

    def get_failure_reason(self) -> str:
        return self.failure_reason

    def set_failure_reason(self, failure_reason: str) -> None:
        self.failure_reason = failure_reason

    def get_mitigations(self) -> List[str]:
        return self.mitigations

    def set_mitigations(self, mitigations: Sequence[str]) -> None:
        self.mitigations = list(mitigations)

    def add_mitigation(self, mitigation: str) -> None:
        self.mitigations.append(mitigation)


class CacheWarmupResult:
    """Отчёт о прогреве: идентификатор шаблона → сведения о компиляции."""

    RESULT_COMPILABLE = RESULT_COMPILABLE
    RESULT_COMPILED = RESULT_COMPILED
    RESULT_HASLAYOUT = RESULT_HASLAYOUT
    RESULT_COMPILEDCLASS = RESULT_COMPILEDCLASS
    RESULT_FAILURE = RESULT_FAILURE
    RESULT_MITIGATIONS = RESULT_MITIGATIONS

    def __init__(self, results: Optional[Mapping[str, Dict[str, Any]]] = None):
        self.results: Dict[str, Dict[str, Any]] = dict(results or {})

    def merge(self, *others: "CacheWarmupResult") -> "CacheWarmupResult":
        """Вливает другие отчёты; при совпадении ключей остаются собственные значения."""
        for other in others:
            merged = dict(other.get_results())
            merged.update(self.results)
            self.results = merged
        return self

    def get_results(self) -> Dict[str, Dict[str, Any]]:
        return self.results

    def add(self, state: Any, template_path: str) -> "CacheWarmupResult":
        compiled = state.is_compiled()
        entry: Dict[str, Any] = {
            RESULT_COMPILABLE: compiled or state.is_compilable(),
            RESULT_COMPILED: compiled,
            RESULT_HASLAYOUT: state.has_layout(),
            RESULT_COMPILEDCLASS: state.get_identifier(),
        }
        if isinstance(state, FailedCompilingState):
            entry[RESULT_FAILURE] = state.get_failure_reason()
            entry[RESULT_MITIGATIONS] = state.get_mitigations()
        self.results[template_path] = entry
        return self


def _mitigations_for(error: Exception) -> List[str]:
    if isinstance(error, ResolutionError):
        return [
            f"Register a helper root for namespace '{error.namespace}' that provides '{error.candidate}'",
            "Check the helper name for typos",
        ]
    if isinstance(error, ExpressionError):
        return ["Check the syntax of ternary and math expressions in the template"]
    return ["Fix the template so it can be parsed and compiled"]


class CacheWarmer:
    """
    Компилирует шаблоны в кэш заранее.

    Переводит компилятор в режим прогрева (необратимо). Шаблон,
    компиляция которого остановлена, сохраняется как заглушка;
    шаблон, разбор или компиляция которого падает с пользовательской
    ошибкой, попадает в отчёт как FailedCompilingState.
    """

    def __init__(self, rendering_context: RenderingContext):
        self.rendering_context = rendering_context

    def warm(self, templates: Mapping[str, Callable[[], ParsingState]]) -> CacheWarmupResult:
        """
        Args:
            templates: Идентификатор шаблона → функция, возвращающая ParsingState
        """
        compiler = self.rendering_context.template_compiler
        compiler.enter_warmup_mode()
        result = CacheWarmupResult()
        for identifier, parse in templates.items():
            result.add(self._warm_single(identifier, parse), identifier)
        logger.debug(f"Cache warmup finished for {len(templates)} template(s)")
        return result

    def _warm_single(self, identifier: str, parse: Callable[[], ParsingState]) -> Any:
        compiler = self.rendering_context.template_compiler
        try:
            state = parse()
            if not state.identifier:
                state.identifier = identifier
            try:
                compiler.store(identifier, state)
            except StopCompiling:
                logger.debug(f"Template '{identifier}' is not compilable; storing stub")
                state.set_compilable(False)
                compiler.store(identifier, state)
            finally:
                compiler.reset()
            if state.is_compilable() and compiler.has(identifier):
                return compiler.get(identifier)
            return state
        except StencilUserError as e:
            logger.warning(f"Failed to warm up template '{identifier}': {e}")
            return FailedCompilingState(identifier, str(e), _mitigations_for(e))


__all__ = [
    "CacheWarmer",
    "CacheWarmupResult",
    "FailedCompilingState",
    "RESULT_COMPILABLE",
    "RESULT_COMPILED",
    "RESULT_HASLAYOUT",
    "RESULT_COMPILEDCLASS",
    "RESULT_FAILURE",
    "RESULT_MITIGATIONS",
]
