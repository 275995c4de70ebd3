"""
Встроенные хелперы пространства имён ``f``.

Импорт модулей регистрирует хелперы в общем реестре.
"""

from . import control, formatting  # noqa: F401
from .control import CycleHelper, ForHelper, IfHelper, VariableHelper
from .formatting import CdataHelper, TrimHelper

__all__ = [
    "IfHelper",
    "ForHelper",
    "CycleHelper",
    "VariableHelper",
    "CdataHelper",
    "TrimHelper",
]
