from dataclasses import dataclass, fields, replace
from typing import Optional

from .logging_system import log_info, log_warning


@dataclass(frozen=True)
class ParserLimits:
  """Capacity limits applied to a single lex/parse call"""
  max_tokens: int = 1024
  max_stack_depth: int = 1024
  max_name_length: int = 30
  max_nesting_depth: int = 200
  # Tree walks recurse once per level; keep well under the interpreter's recursion limit
  max_tree_depth: int = 200


DEFAULT_LIMITS = ParserLimits()

_parser_limits: ParserLimits = DEFAULT_LIMITS


def get_parser_limits() -> ParserLimits:
  return _parser_limits


def set_parser_limits(limits: Optional[ParserLimits] = None, **overrides) -> ParserLimits:
  """Replace the module-wide limits, or override individual fields of the current ones"""
  global _parser_limits
  base = limits if limits is not None else _parser_limits
  _parser_limits = replace(base, **overrides) if overrides else base

  log_info(f"parser limits set to {_parser_limits}")
  for field in fields(ParserLimits):
    value = getattr(_parser_limits, field.name)
    default = getattr(DEFAULT_LIMITS, field.name)
    if value > default:
      log_warning(f"{field.name}={value} is above the default {default}; "
                  "deep input may exhaust the interpreter stack")
  return _parser_limits


def reset_parser_limits():
  global _parser_limits
  _parser_limits = DEFAULT_LIMITS
