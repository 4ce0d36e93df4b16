"""
Shunting-yard parser.

Builds one expression tree from a token list using an operand stack and an
operator stack. Parenthesized groups are parsed by recursing into parse(),
which shares both stacks with its caller; each level pushes an ALL_RESOLVED
marker first, so reductions inside a group never reach past it. All of this
state lives on the parser instance, one instance per top-level call.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .lexer import lex
from .tokens import Token, TokenType, NEGATE, PRECEDENCE, TOKEN_BINARY_OPS, TOKEN_UNARY_OPS
from ..config import ParserLimits, get_parser_limits
from ..errors import ExpressionSyntaxError, ParseError, oops
from ..expression_tree.core.node import Node, from_constant
from ..expression_tree.expression import Expression
from ..logging_system import log_debug


class ShuntingYardParser:

  def __init__(self, tokens: List[Token], limits: Optional[ParserLimits] = None):
    self.tokens = tokens
    self.limits = limits or get_parser_limits()
    self.index = 0
    self.depth = 0
    self.operands: List[Node] = []
    self.operand_depths: List[int] = []
    self.operators: List[Token] = []

  # Stacks and cursor

  def push_operator(self, token: Token):
    if len(self.operators) >= self.limits.max_stack_depth:
      raise ParseError("operator stack full")
    self.operators.append(token)

  def top_operator(self) -> Token:
    if not self.operators:
      raise ParseError("operator stack empty (get top)")
    return self.operators[-1]

  def pop_operator(self) -> Token:
    if not self.operators:
      raise ParseError("operator stack empty (pop)")
    return self.operators.pop()

  def push_operand(self, node: Node, depth: int = 1):
    if len(self.operands) >= self.limits.max_stack_depth:
      raise ParseError("operand stack full")
    self.operands.append(node)
    self.operand_depths.append(depth)

  def pop_operand_with_depth(self) -> Tuple[Node, int]:
    if not self.operands:
      raise ParseError("operand stack empty")
    return self.operands.pop(), self.operand_depths.pop()

  def pop_operand(self) -> Node:
    return self.pop_operand_with_depth()[0]

  def next(self) -> Optional[Token]:
    if self.index >= len(self.tokens):
      return None
    return self.tokens[self.index]

  def consume(self):
    if self.index >= len(self.tokens):
      raise ParseError("no token to consume")
    self.index += 1

  # Reduction

  @staticmethod
  def precedence(token: Token) -> int:
    if token.type == TokenType.ALL_RESOLVED:
      return -1
    if token.type not in (TokenType.BINARY_OP, TokenType.UNARY_OP) or token.value not in PRECEDENCE:
      oops(f"no precedence for {token!r}")
    return PRECEDENCE[token.value]

  def reduce(self):
    """Pop one operator and its operands, push the combined node.

    Each operand carries the depth of its tree, so a result deeper than
    max_tree_depth is rejected here rather than when it is later walked.
    """
    op = self.pop_operator()

    if op.type == TokenType.BINARY_OP and op.value in TOKEN_BINARY_OPS:
      b, b_depth = self.pop_operand_with_depth()
      a, a_depth = self.pop_operand_with_depth()
      depth = max(a_depth, b_depth) + 1
      if depth > self.limits.max_tree_depth:
        raise ParseError("expression nested too deeply")
      node = a.any_op(TOKEN_BINARY_OPS[op.value], b)
    elif op.type == TokenType.UNARY_OP and op.value in TOKEN_UNARY_OPS:
      a, depth = self.pop_operand_with_depth()
      depth += 1
      if depth > self.limits.max_tree_depth:
        raise ParseError("expression nested too deeply")
      node = a.unary_op(TOKEN_UNARY_OPS[op.value])
    else:
      oops(f"cannot reduce {op!r}")

    self.push_operand(node, depth)

  def reduce_and_push(self, token: Token):
    while self.precedence(token) <= self.precedence(self.top_operator()):
      self.reduce()
    self.push_operator(token)

  # Parsing

  def parse(self):
    """Parse one nesting level, leaving its result on the operand stack"""
    self.push_operator(Token(TokenType.ALL_RESOLVED))

    while True:
      token = self.next()
      if token is None:
        raise ParseError("end of expression unexpected")

      if token.type == TokenType.NUMBER:
        self.push_operand(from_constant(token.value))
        self.consume()
      elif token.is_paren('('):
        self.consume()
        self.parse_group()
        token = self.next()
        if token is None or not token.is_paren(')'):
          raise ParseError("expected: )")
        self.consume()
      elif token.type == TokenType.UNARY_OP:
        self.push_operator(token)
        self.consume()
        continue
      elif token.type == TokenType.BINARY_OP and token.value == '-':
        # A minus where an operand is expected is a negation
        self.push_operator(Token(TokenType.UNARY_OP, NEGATE))
        self.consume()
        continue
      else:
        raise ParseError(f"expected expression, got {token!r}")

      token = self.next()
      if token is not None and token.type == TokenType.BINARY_OP:
        self.reduce_and_push(token)
        self.consume()
      else:
        break

    while self.top_operator().type != TokenType.ALL_RESOLVED:
      self.reduce()
    self.pop_operator()

  def parse_group(self):
    self.depth += 1
    if self.depth > self.limits.max_nesting_depth:
      raise ParseError("parentheses nested too deeply")
    self.parse()
    self.depth -= 1

  def parse_all(self) -> Node:
    """Parse the whole token list into exactly one tree.

    Tokens left over once the expression is complete are an error, so
    "2 3" fails with "unexpected token" instead of yielding 2 with the
    rest of the text silently dropped.
    """
    self.parse()
    root = self.pop_operand()
    token = self.next()
    if token is not None:
      raise ParseError(f"unexpected token {token!r} after expression")
    return root


@dataclass(frozen=True)
class ParseResult:
  """Outcome of turning text into a tree: an expression, or the reason there is none"""
  expression: Optional[Expression] = None
  error: Optional[ExpressionSyntaxError] = None

  @property
  def ok(self) -> bool:
    return self.expression is not None


def parse_tokens(tokens: List[Token], limits: Optional[ParserLimits] = None) -> Node:
  """Parse a token list; raises ParseError on malformed input"""
  return ShuntingYardParser(tokens, limits).parse_all()


def parse_expression(text: str, limits: Optional[ParserLimits] = None) -> ParseResult:
  """Lex and parse text. Never returns a partial tree."""
  try:
    tokens = lex(text, limits)
    root = parse_tokens(tokens, limits)
  except ExpressionSyntaxError as e:
    log_debug(f"exception: parse/lex error: {e}")
    return ParseResult(error=e)
  return ParseResult(expression=Expression(root))
