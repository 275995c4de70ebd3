from .arguments import ArgumentDefinition, HelperArguments, LazyArgument
from .base import AbstractHelper
from .invoker import HelperInvoker
from .registry import BUILTIN_ROOT, HelperRegistry, candidate_name, helper_registry, register_helper
from .resolver import HelperResolver
from .variable_container import HelperVariableContainer

__all__ = [
    "AbstractHelper",
    "ArgumentDefinition",
    "HelperArguments",
    "LazyArgument",
    "HelperInvoker",
    "HelperRegistry",
    "HelperResolver",
    "HelperVariableContainer",
    "BUILTIN_ROOT",
    "candidate_name",
    "helper_registry",
    "register_helper",
]
