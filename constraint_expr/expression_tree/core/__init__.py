"""Core expression tree components."""

from .node import (
    Node, ParamNode, ParamDirectNode, ConstantNode, BinaryOpNode, UnaryOpNode,
    from_param, from_param_direct, from_constant
)
from .operators import (
    NodeType, OpType, BINARY_OPS, UNARY_OPS, BINARY_OP_MAP, UNARY_OP_MAP, OP_SYMBOLS,
    evaluate_binary_op, evaluate_unary_op
)

__all__ = [
    'Node', 'ParamNode', 'ParamDirectNode', 'ConstantNode', 'BinaryOpNode', 'UnaryOpNode',
    'from_param', 'from_param_direct', 'from_constant',
    'NodeType', 'OpType', 'BINARY_OPS', 'UNARY_OPS', 'BINARY_OP_MAP', 'UNARY_OP_MAP', 'OP_SYMBOLS',
    'evaluate_binary_op', 'evaluate_unary_op'
]
