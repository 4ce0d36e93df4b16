from collections import Counter
from typing import List, TYPE_CHECKING, Optional
import threading

from ...logging_system import log_debug

if TYPE_CHECKING:
  from ..core.node import Node, ParamNode, ParamDirectNode, ConstantNode, BinaryOpNode, UnaryOpNode
  from ..core.operators import OpType
  from ...params import Param, ParamHandle


class NodeArena:
  """Generation-scoped node allocator.

  Every node handed out belongs to the current generation and stays alive
  until free_generation() reclaims the whole generation at once; there is no
  way to release a single node.
  """

  def __init__(self):
    self.generation = 0
    self._live: List['Node'] = []

  def _adopt(self, node: 'Node') -> 'Node':
    node._generation = self.generation
    self._live.append(node)
    return node

  def get_param_node(self, handle: 'ParamHandle') -> 'ParamNode':
    from ..core.node import ParamNode
    return self._adopt(ParamNode(handle))

  def get_param_direct_node(self, param: 'Param') -> 'ParamDirectNode':
    from ..core.node import ParamDirectNode
    return self._adopt(ParamDirectNode(param))

  def get_constant_node(self, value: float) -> 'ConstantNode':
    from ..core.node import ConstantNode
    return self._adopt(ConstantNode(value))

  def get_binary_node(self, operator: 'OpType', left: 'Node', right: 'Node') -> 'BinaryOpNode':
    from ..core.node import BinaryOpNode
    return self._adopt(BinaryOpNode(operator, left, right))

  def get_unary_node(self, operator: 'OpType', operand: 'Node') -> 'UnaryOpNode':
    from ..core.node import UnaryOpNode
    return self._adopt(UnaryOpNode(operator, operand))

  def owns(self, node: 'Node') -> bool:
    """True if node was allocated in the current, not yet freed, generation"""
    return node.generation == self.generation

  def free_generation(self):
    """Reclaim every node of the current generation and start a new one"""
    freed = len(self._live)
    self._live.clear()
    self.generation += 1
    log_debug(f"arena: freed {freed} nodes, now at generation {self.generation}")

  def get_stats(self) -> dict:
    """Get arena statistics"""
    kinds = Counter(type(node).__name__ for node in self._live)
    return {
      'generation': self.generation,
      'live_nodes': len(self._live),
      'param_nodes': kinds['ParamNode'],
      'param_direct_nodes': kinds['ParamDirectNode'],
      'constant_nodes': kinds['ConstantNode'],
      'binary_nodes': kinds['BinaryOpNode'],
      'unary_nodes': kinds['UnaryOpNode']
    }


# Global instance - lazily created, lock held only during initialization
_GLOBAL_ARENA: Optional[NodeArena] = None
_ARENA_LOCK = threading.Lock()


def get_global_arena() -> NodeArena:
  """Get the process-wide default arena"""
  global _GLOBAL_ARENA

  if _GLOBAL_ARENA is not None:
    return _GLOBAL_ARENA

  with _ARENA_LOCK:
    if _GLOBAL_ARENA is None:
      _GLOBAL_ARENA = NodeArena()

  return _GLOBAL_ARENA


def free_global_arena():
  """Free the current generation of the global arena"""
  get_global_arena().free_generation()


def reset_global_arena():
  """Drop the global arena entirely; the next access creates a fresh one"""
  global _GLOBAL_ARENA
  with _ARENA_LOCK:
    _GLOBAL_ARENA = None
