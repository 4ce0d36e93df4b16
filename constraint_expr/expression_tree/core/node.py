import io
import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional

from .operators import (
  NodeType, OpType, BINARY_OPS, UNARY_OPS, OP_SYMBOLS,
  evaluate_binary_op, evaluate_unary_op
)
from ..optimization.memory_pool import get_global_arena
from ...errors import oops
from ...params import Param, ParamHandle, ParameterStore


class Node(ABC):
  """Base node class.

  Nodes are immutable once built and may be shared between several parents
  (derivatives reuse the operands of the expression they came from), so every
  transform below reads its children and allocates fresh nodes, never
  rewriting an existing one.
  """

  __slots__ = ('_generation',)
  node_type: NodeType

  def __init__(self):
    self._generation: Optional[int] = None

  @property
  def generation(self) -> Optional[int]:
    """Arena generation this node was allocated in, None if built outside an arena"""
    return self._generation

  @abstractmethod
  def evaluate(self, params: ParameterStore) -> float:
    pass

  @abstractmethod
  def partial_wrt(self, handle: ParamHandle) -> 'Node':
    pass

  @abstractmethod
  def write_to(self, out: io.StringIO):
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  def children(self) -> tuple:
    return ()

  def to_string(self) -> str:
    out = io.StringIO()
    self.write_to(out)
    return out.getvalue()

  def size(self) -> int:
    """Node count, counting shared subtrees once per occurrence"""
    return 1 + sum(child.size() for child in self.children())

  # Combinators

  def any_op(self, op: OpType, other: 'Node') -> 'BinaryOpNode':
    if op not in BINARY_OPS:
      oops(f"not a binary operator: {op!r}")
    return get_global_arena().get_binary_node(op, self, other)

  def unary_op(self, op: OpType) -> 'UnaryOpNode':
    if op not in UNARY_OPS:
      oops(f"not a unary operator: {op!r}")
    return get_global_arena().get_unary_node(op, self)

  def plus(self, other: 'Node') -> 'BinaryOpNode':
    return self.any_op(OpType.PLUS, other)

  def minus(self, other: 'Node') -> 'BinaryOpNode':
    return self.any_op(OpType.MINUS, other)

  def times(self, other: 'Node') -> 'BinaryOpNode':
    return self.any_op(OpType.TIMES, other)

  def div(self, other: 'Node') -> 'BinaryOpNode':
    return self.any_op(OpType.DIV, other)

  def negate(self) -> 'UnaryOpNode':
    return self.unary_op(OpType.NEGATE)

  def sqrt(self) -> 'UnaryOpNode':
    return self.unary_op(OpType.SQRT)

  def square(self) -> 'UnaryOpNode':
    return self.unary_op(OpType.SQUARE)

  def sin(self) -> 'UnaryOpNode':
    return self.unary_op(OpType.SIN)

  def cos(self) -> 'UnaryOpNode':
    return self.unary_op(OpType.COS)


def from_param(handle: ParamHandle) -> 'ParamNode':
  return get_global_arena().get_param_node(handle)


def from_param_direct(param: Param) -> 'ParamDirectNode':
  return get_global_arena().get_param_direct_node(param)


def from_constant(value: float) -> 'ConstantNode':
  return get_global_arena().get_constant_node(value)


class ParamNode(Node):
  __slots__ = ('handle',)
  node_type = NodeType.PARAM

  def __init__(self, handle: ParamHandle):
    super().__init__()
    self.handle = handle

  def evaluate(self, params: ParameterStore) -> float:
    return params.lookup(self.handle)

  def partial_wrt(self, handle: ParamHandle) -> 'ConstantNode':
    return from_constant(1.0 if handle == self.handle else 0.0)

  def write_to(self, out: io.StringIO):
    out.write(f"param({self.handle:08x})")

  def to_sympy(self) -> sp.Symbol:
    return sp.Symbol(f"p{self.handle:08x}")

  def __repr__(self) -> str:
    return f"ParamNode({self.handle:#x})"


class ParamDirectNode(Node):
  """A parameter already resolved to its record; read directly, never differentiated"""

  __slots__ = ('param',)
  node_type = NodeType.PARAM_PTR

  def __init__(self, param: Param):
    super().__init__()
    self.param = param

  def evaluate(self, params: ParameterStore) -> float:
    return self.param.val

  def partial_wrt(self, handle: ParamHandle) -> Node:
    oops(f"cannot differentiate resolved parameter p{self.param.h:08x}")

  def write_to(self, out: io.StringIO):
    out.write(f"param(p{self.param.h:08x})")

  def to_sympy(self) -> sp.Float:
    return sp.Float(self.param.val)

  def __repr__(self) -> str:
    return f"ParamDirectNode({self.param.h:#x})"


class ConstantNode(Node):
  __slots__ = ('value',)
  node_type = NodeType.CONSTANT

  def __init__(self, value: float):
    super().__init__()
    self.value = float(value)

  def evaluate(self, params: ParameterStore) -> float:
    return self.value

  def partial_wrt(self, handle: ParamHandle) -> 'ConstantNode':
    return from_constant(0.0)

  def write_to(self, out: io.StringIO):
    # Three decimals only; the printed form does not round-trip exactly
    out.write(f"{self.value:.3f}")

  def to_sympy(self) -> sp.Float:
    return sp.Float(self.value)

  def __repr__(self) -> str:
    return f"ConstantNode({self.value!r})"


class BinaryOpNode(Node):
  __slots__ = ('operator', 'left', 'right')
  node_type = NodeType.BINARY_OP

  def __init__(self, operator: OpType, left: Node, right: Node):
    super().__init__()
    self.operator = operator
    self.left = left
    self.right = right

  def children(self) -> tuple:
    return (self.left, self.right)

  def evaluate(self, params: ParameterStore) -> float:
    left_val = self.left.evaluate(params)
    right_val = self.right.evaluate(params)
    return evaluate_binary_op(left_val, right_val, self.operator)

  def partial_wrt(self, handle: ParamHandle) -> Node:
    a, b = self.left, self.right

    if self.operator == OpType.PLUS:
      return a.partial_wrt(handle).plus(b.partial_wrt(handle))
    elif self.operator == OpType.MINUS:
      return a.partial_wrt(handle).minus(b.partial_wrt(handle))
    elif self.operator == OpType.TIMES:
      da = a.partial_wrt(handle)
      db = b.partial_wrt(handle)
      return a.times(db).plus(b.times(da))
    elif self.operator == OpType.DIV:
      da = a.partial_wrt(handle)
      db = b.partial_wrt(handle)
      return da.times(b).minus(a.times(db)).div(b.square())
    oops(f"cannot differentiate binary operator {self.operator!r}")

  def write_to(self, out: io.StringIO):
    if self.operator not in BINARY_OPS:
      oops(f"cannot print binary operator {self.operator!r}")
    out.write("(")
    self.left.write_to(out)
    out.write(f" {OP_SYMBOLS[self.operator]} ")
    self.right.write_to(out)
    out.write(")")

  def to_sympy(self) -> sp.Expr:
    left, right = self.left.to_sympy(), self.right.to_sympy()
    if self.operator == OpType.PLUS:
      return sp.Add(left, right)
    elif self.operator == OpType.MINUS:
      return sp.Add(left, sp.Mul(-1, right))
    elif self.operator == OpType.TIMES:
      return sp.Mul(left, right)
    elif self.operator == OpType.DIV:
      return sp.Mul(left, sp.Pow(right, -1))
    oops(f"to_sympy reached unexpected binary operator {self.operator!r}")

  def __repr__(self) -> str:
    return f"BinaryOpNode({self.operator.name}, {self.left!r}, {self.right!r})"


class UnaryOpNode(Node):
  __slots__ = ('operator', 'operand')
  node_type = NodeType.UNARY_OP

  def __init__(self, operator: OpType, operand: Node):
    super().__init__()
    self.operator = operator
    self.operand = operand

  def children(self) -> tuple:
    return (self.operand,)

  def evaluate(self, params: ParameterStore) -> float:
    return evaluate_unary_op(self.operand.evaluate(params), self.operator)

  def partial_wrt(self, handle: ParamHandle) -> Node:
    a = self.operand

    if self.operator == OpType.NEGATE:
      return a.partial_wrt(handle).negate()
    elif self.operator == OpType.SQRT:
      return from_constant(0.5).div(a.sqrt()).times(a.partial_wrt(handle))
    elif self.operator == OpType.SQUARE:
      return from_constant(2.0).times(a).times(a.partial_wrt(handle))
    elif self.operator == OpType.SIN:
      return a.cos().times(a.partial_wrt(handle))
    elif self.operator == OpType.COS:
      return a.sin().times(a.partial_wrt(handle)).negate()
    oops(f"cannot differentiate unary operator {self.operator!r}")

  def write_to(self, out: io.StringIO):
    if self.operator not in UNARY_OPS:
      oops(f"cannot print unary operator {self.operator!r}")
    out.write(f"({OP_SYMBOLS[self.operator]} ")
    self.operand.write_to(out)
    out.write(")")

  def to_sympy(self) -> sp.Expr:
    operand = self.operand.to_sympy()
    if self.operator == OpType.NEGATE:
      return -operand
    elif self.operator == OpType.SQRT:
      return sp.sqrt(operand)
    elif self.operator == OpType.SQUARE:
      return operand**2
    elif self.operator == OpType.SIN:
      return sp.sin(operand)
    elif self.operator == OpType.COS:
      return sp.cos(operand)
    oops(f"to_sympy reached unexpected unary operator {self.operator!r}")

  def __repr__(self) -> str:
    return f"UnaryOpNode({self.operator.name}, {self.operand!r})"
