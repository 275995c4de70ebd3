"""
Unified test infrastructure for stencil.

Modules:
- file_utils: Utilities for creating files and directories
- node_builders: Short builders for template AST and parsing states
- subjects: Objects exercising the variable extractor accessor kinds
- helper_stubs: Helper classes and an isolated helper registry
- cli_utils: Running the CLI in a subprocess
"""

from .file_utils import write
from .node_builders import text, var, helper, root, boolean, ternary, math_expr, sequence, make_state
from .subjects import (
    UserWithoutToString,
    UserWithToString,
    MagicGetter,
    ProtectedGetter,
    ArrayAccessDummy,
    PlainObject,
)
from .helper_stubs import TEST_ROOT, make_registry, EchoHelper, OpenArgumentsHelper, UncompilableHelper, ExplodingHelper
from .cli_utils import run_cli, jload

__all__ = [
    # File utilities
    "write",

    # AST builders
    "text", "var", "helper", "root", "boolean", "ternary", "math_expr", "sequence", "make_state",

    # Extractor subjects
    "UserWithoutToString", "UserWithToString", "MagicGetter", "ProtectedGetter",
    "ArrayAccessDummy", "PlainObject",

    # Helpers
    "TEST_ROOT", "make_registry", "EchoHelper", "OpenArgumentsHelper", "UncompilableHelper", "ExplodingHelper",

    # CLI utilities
    "run_cli", "jload",
]
