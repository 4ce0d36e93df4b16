import io
import sympy as sp
from typing import Optional

from .core.node import Node
from ..params import ParamHandle, ParameterStore


class Expression:
  """A finished expression tree: the unit the solver evaluates and differentiates"""

  __slots__ = ('root', '_string_cache')

  def __init__(self, root: Node):
    self.root = root
    self._string_cache: Optional[str] = None

  def evaluate(self, params: ParameterStore) -> float:
    return self.root.evaluate(params)

  def partial_wrt(self, handle: ParamHandle) -> 'Expression':
    return Expression(self.root.partial_wrt(handle))

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def write_to(self, out: io.StringIO):
    """Append the printed form to a caller-owned buffer"""
    self.root.write_to(out)

  def size(self) -> int:
    return self.root.size()

  def depends_on(self, handle: ParamHandle) -> bool:
    from .utils.tree_utils import depends_on
    return depends_on(self.root, handle)

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()})"

  @classmethod
  def from_string(cls, expr_str: str) -> Optional['Expression']:
    """Parse user text; None if the text is not a valid expression"""
    from ..parsing.parser import parse_expression
    return parse_expression(expr_str).expression
