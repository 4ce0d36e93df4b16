"""Expression lexing, parsing and invariant errors."""

from .logging_system import log_critical


class ExpressionError(Exception):
  """Base class for recoverable expression errors."""
  pass


class ExpressionSyntaxError(ExpressionError):
  """Malformed expression text."""
  pass


class LexError(ExpressionSyntaxError):
  """Input text could not be split into tokens."""
  pass


class ParseError(ExpressionSyntaxError):
  """Token sequence does not form an expression."""
  pass


class InternalInvariantError(RuntimeError):
  """A node or token reached code that cannot handle it.

  Raised for bugs in tree construction, never for user input. Not an
  ExpressionError, so handlers for malformed text never see it.
  """
  pass


def oops(message: str = "internal invariant violated"):
  log_critical(message)
  raise InternalInvariantError(message)
