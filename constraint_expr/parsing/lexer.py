import re
from typing import List, Optional

from .tokens import Token, TokenType, FUNCTION_NAMES
from ..config import ParserLimits, get_parser_limits
from ..errors import LexError

# Longest prefix of a digit/dot run that reads as a number
_NUMBER_PREFIX = re.compile(r'\d*(?:\.\d*)?')


def _is_digit(c: str) -> bool:
  return '0' <= c <= '9'


def _is_name_start(c: str) -> bool:
  return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'


def _is_name_char(c: str) -> bool:
  return _is_name_start(c) or _is_digit(c)


def parse_number(literal: str) -> float:
  """atof-style conversion: read the longest numeric prefix, 0.0 if there is none"""
  prefix = _NUMBER_PREFIX.match(literal).group()
  if not any(_is_digit(c) for c in prefix):
    return 0.0
  return float(prefix)


class Lexer:
  """Single left-to-right scan of expression text into a flat token list"""

  def __init__(self, text: str, limits: Optional[ParserLimits] = None):
    self.text = text
    self.limits = limits or get_parser_limits()
    self.pos = 0
    self.current = text[0] if text else None

  def advance(self):
    self.pos += 1
    self.current = self.text[self.pos] if self.pos < len(self.text) else None

  def run(self, accept, max_len: int) -> str:
    """Consume characters while accept(c) holds, at most max_len of them"""
    start = self.pos
    while self.current is not None and accept(self.current) and self.pos - start < max_len:
      self.advance()
    return self.text[start:self.pos]

  def number(self) -> Token:
    literal = self.run(lambda c: _is_digit(c) or c == '.', self.limits.max_name_length)
    return Token(TokenType.NUMBER, parse_number(literal))

  def name(self) -> Token:
    name = self.run(_is_name_char, self.limits.max_name_length)
    if name not in FUNCTION_NAMES:
      raise LexError(f"unknown name '{name}'")
    return Token(TokenType.UNARY_OP, FUNCTION_NAMES[name])

  def generate_tokens(self) -> List[Token]:
    tokens = []
    while self.current is not None:
      if len(tokens) >= self.limits.max_tokens:
        raise LexError("too long")

      c = self.current
      if _is_digit(c) or c == '.':
        tokens.append(self.number())
      elif _is_name_start(c):
        tokens.append(self.name())
      elif c in '+-*/':
        tokens.append(Token(TokenType.BINARY_OP, c))
        self.advance()
      elif c in '()':
        tokens.append(Token(TokenType.PAREN, c))
        self.advance()
      elif c.isspace():
        self.advance()
      else:
        raise LexError(f"unexpected characters at position {self.pos}: {c!r}")

    return tokens


def lex(text: str, limits: Optional[ParserLimits] = None) -> List[Token]:
  return Lexer(text, limits).generate_tokens()
