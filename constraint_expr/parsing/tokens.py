from enum import Enum, auto

from ..expression_tree.core.operators import OpType


class TokenType(Enum):
  NUMBER = auto()
  UNARY_OP = auto()
  BINARY_OP = auto()
  PAREN = auto()
  ALL_RESOLVED = auto()   # parser-only marker for the bottom of one nesting level


class Token:
  __slots__ = ('type', 'value')

  def __init__(self, type_: TokenType, value=None):
    self.type = type_
    self.value = value

  def is_paren(self, char: str) -> bool:
    return self.type == TokenType.PAREN and self.value == char

  def __repr__(self):
    return f"Token({self.type.name}, {self.value!r})"


# Unary operator tokens carry a one-letter code: 's' for sqrt, 'n' for negate
NEGATE = 'n'
SQRT = 's'

TOKEN_BINARY_OPS = {'+': OpType.PLUS, '-': OpType.MINUS, '*': OpType.TIMES, '/': OpType.DIV}
TOKEN_UNARY_OPS = {NEGATE: OpType.NEGATE, SQRT: OpType.SQRT}

PRECEDENCE = {
    SQRT: 30, NEGATE: 30,
    '*': 20, '/': 20,
    '+': 10, '-': 10,
}

# Identifiers the lexer turns into unary operator tokens
FUNCTION_NAMES = {'sqrt': SQRT}
