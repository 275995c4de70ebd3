from .artifact import CompiledTemplate, UncompilableTemplate, load_template_class, section_method_name
from .compiler import MODE_NORMAL, MODE_WARMUP, TemplateCompiler
from .converter import ConvertedNode, NodeConverter

__all__ = [
    "TemplateCompiler",
    "MODE_NORMAL",
    "MODE_WARMUP",
    "NodeConverter",
    "ConvertedNode",
    "CompiledTemplate",
    "UncompilableTemplate",
    "load_template_class",
    "section_method_name",
]
