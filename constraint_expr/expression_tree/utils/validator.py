import numpy as np
from typing import Optional

from ..core.node import Node, ParamNode, ParamDirectNode, ConstantNode, BinaryOpNode, UnaryOpNode
from ..core.operators import BINARY_OPS, UNARY_OPS
from ..optimization.memory_pool import NodeArena
from .tree_utils import get_unique_nodes


class ExpressionValidator:

  @staticmethod
  def is_valid_expression(node: Node, arena: Optional[NodeArena] = None,
                          allow_resolved_params: bool = True) -> bool:
    """Structural check of a finished tree.

    Only the five expression variants may appear, operator nodes need
    well-formed children, and with an arena given no node may come from a
    generation that has already been freed.
    """
    if not isinstance(node, Node):
      return False

    for current in get_unique_nodes(node):
      if not ExpressionValidator._is_node_valid(current, allow_resolved_params):
        return False
      if arena is not None and not arena.owns(current):
        return False

    return True

  @staticmethod
  def _is_node_valid(node: Node, allow_resolved_params: bool) -> bool:
    if isinstance(node, ConstantNode):
      return isinstance(node.value, float)

    elif isinstance(node, ParamNode):
      return isinstance(node.handle, (int, np.integer))

    elif isinstance(node, ParamDirectNode):
      return allow_resolved_params and node.param is not None

    elif isinstance(node, BinaryOpNode):
      return (node.operator in BINARY_OPS and
              isinstance(node.left, Node) and isinstance(node.right, Node))

    elif isinstance(node, UnaryOpNode):
      return node.operator in UNARY_OPS and isinstance(node.operand, Node)

    return False
