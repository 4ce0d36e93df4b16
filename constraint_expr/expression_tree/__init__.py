"""Expression Tree Module

Expression trees over solver parameters: construction, evaluation,
symbolic differentiation and printing.
"""

from .expression import Expression
from .core.node import (
    Node,
    ParamNode,
    ParamDirectNode,
    ConstantNode,
    BinaryOpNode,
    UnaryOpNode,
    from_param,
    from_param_direct,
    from_constant
)
from .core.operators import (
    NodeType,
    OpType,
    BINARY_OP_MAP,
    UNARY_OP_MAP,
    evaluate_binary_op,
    evaluate_unary_op
)
from .optimization import NodeArena, get_global_arena, free_global_arena, reset_global_arena
from .utils import ExpressionValidator

__all__ = [
    "Expression",
    "Node", "ParamNode", "ParamDirectNode", "ConstantNode", "BinaryOpNode", "UnaryOpNode",
    "from_param", "from_param_direct", "from_constant",
    "NodeType", "OpType",
    "BINARY_OP_MAP", "UNARY_OP_MAP",
    "evaluate_binary_op", "evaluate_unary_op",
    "NodeArena", "get_global_arena", "free_global_arena", "reset_global_arena",
    "ExpressionValidator"
]
