from .nodes import (
    BooleanNode,
    ExpressionNode,
    HelperNode,
    MathExpressionNode,
    ObjectAccessorNode,
    RootNode,
    SequenceNode,
    TemplateNode,
    TernaryExpressionNode,
    TextNode,
    child_nodes,
)
from .state import ParsingState

__all__ = [
    "TemplateNode",
    "TextNode",
    "ObjectAccessorNode",
    "ExpressionNode",
    "BooleanNode",
    "TernaryExpressionNode",
    "MathExpressionNode",
    "HelperNode",
    "SequenceNode",
    "RootNode",
    "child_nodes",
    "ParsingState",
]
