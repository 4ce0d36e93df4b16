"""Constraint Expression Engine

Expression trees over solver parameters: evaluation, symbolic partial
derivatives for the Jacobian, printing, and parsing of typed arithmetic.
"""

from .expression_tree import (
  Expression, Node, ParamNode, ParamDirectNode, ConstantNode,
  BinaryOpNode, UnaryOpNode, OpType,
  from_param, from_param_direct, from_constant,
  NodeArena, get_global_arena, free_global_arena, reset_global_arena,
  ExpressionValidator
)
from .parsing import ParseResult, lex, parse_expression
from .params import Param, ParamHandle, ParameterStore, ParamTable
from .errors import (
  ExpressionError, ExpressionSyntaxError, LexError, ParseError,
  InternalInvariantError
)
from .config import ParserLimits, get_parser_limits, set_parser_limits
from .jacobian import build_jacobian, evaluate_jacobian, evaluate_residuals, numeric_jacobian
from .logging_system import LogLevel, configure_logging, set_log_level

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "ParamNode", "ParamDirectNode", "ConstantNode",
  "BinaryOpNode", "UnaryOpNode", "OpType",
  "from_param", "from_param_direct", "from_constant",
  "NodeArena", "get_global_arena", "free_global_arena", "reset_global_arena",
  "ExpressionValidator",
  "ParseResult", "lex", "parse_expression",
  "Param", "ParamHandle", "ParameterStore", "ParamTable",
  "ExpressionError", "ExpressionSyntaxError", "LexError", "ParseError",
  "InternalInvariantError",
  "ParserLimits", "get_parser_limits", "set_parser_limits",
  "build_jacobian", "evaluate_jacobian", "evaluate_residuals", "numeric_jacobian",
  "LogLevel", "configure_logging", "set_log_level"
]
