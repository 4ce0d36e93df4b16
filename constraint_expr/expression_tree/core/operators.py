import numpy as np
from enum import IntEnum

from ...errors import oops


class NodeType(IntEnum):
  PARAM = 0
  PARAM_PTR = 1
  CONSTANT = 2
  BINARY_OP = 3
  UNARY_OP = 4


class OpType(IntEnum):
  # Binary ops
  PLUS = 0
  MINUS = 1
  TIMES = 2
  DIV = 3
  # Unary ops
  NEGATE = 4
  SQRT = 5
  SQUARE = 6
  SIN = 7
  COS = 8


BINARY_OPS = frozenset({OpType.PLUS, OpType.MINUS, OpType.TIMES, OpType.DIV})
UNARY_OPS = frozenset({OpType.NEGATE, OpType.SQRT, OpType.SQUARE, OpType.SIN, OpType.COS})

# Mapping dictionaries
BINARY_OP_MAP = {'+': OpType.PLUS, '-': OpType.MINUS, '*': OpType.TIMES, '/': OpType.DIV}
UNARY_OP_MAP = {
    '-': OpType.NEGATE, 'sqrt': OpType.SQRT, 'square': OpType.SQUARE,
    'sin': OpType.SIN, 'cos': OpType.COS
}

# Printed form of each operator
OP_SYMBOLS = {op: sym for sym, op in BINARY_OP_MAP.items()}
OP_SYMBOLS.update({op: name for name, op in UNARY_OP_MAP.items()})


def evaluate_binary_op(left_val: float, right_val: float, op_type: OpType) -> float:
  # IEEE-754 semantics: x/0 is +-inf, 0/0 is nan
  a = np.float64(left_val)
  b = np.float64(right_val)
  with np.errstate(all='ignore'):
    if op_type == OpType.PLUS:
      return float(a + b)
    elif op_type == OpType.MINUS:
      return float(a - b)
    elif op_type == OpType.TIMES:
      return float(a * b)
    elif op_type == OpType.DIV:
      return float(a / b)
  oops(f"unexpected binary operator {op_type!r}")


def evaluate_unary_op(operand_val: float, op_type: OpType) -> float:
  # No domain checks: sqrt of a negative is nan
  a = np.float64(operand_val)
  with np.errstate(all='ignore'):
    if op_type == OpType.NEGATE:
      return float(-a)
    elif op_type == OpType.SQRT:
      return float(np.sqrt(a))
    elif op_type == OpType.SQUARE:
      return float(a * a)
    elif op_type == OpType.SIN:
      return float(np.sin(a))
    elif op_type == OpType.COS:
      return float(np.cos(a))
  oops(f"unexpected unary operator {op_type!r}")
