from .extractor import (
    VariableExtractor,
    ACCESSOR_ARRAY,
    ACCESSOR_ASSERTER,
    ACCESSOR_GETTER,
    ACCESSOR_PUBLICPROPERTY,
)
from .provider import VariableProvider, PathContext

__all__ = [
    "VariableExtractor",
    "VariableProvider",
    "PathContext",
    "ACCESSOR_ARRAY",
    "ACCESSOR_ASSERTER",
    "ACCESSOR_GETTER",
    "ACCESSOR_PUBLICPROPERTY",
]
