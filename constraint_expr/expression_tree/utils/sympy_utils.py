import sympy as sp
from typing import Dict

from ..core.node import Node
from .tree_utils import get_param_handles
from ...params import ParamHandle, ParameterStore


def param_symbol(handle: ParamHandle) -> sp.Symbol:
  """Symbol used for a ParamNode in SymPy form"""
  return sp.Symbol(f"p{handle:08x}")


def sympy_partial(node: Node, handle: ParamHandle) -> sp.Expr:
  """Reference derivative computed by SymPy rather than by partial_wrt"""
  return sp.diff(node.to_sympy(), param_symbol(handle))


def sympy_substitutions(node: Node, params: ParameterStore) -> Dict[sp.Symbol, float]:
  return {param_symbol(h): params.lookup(h) for h in get_param_handles(node)}


def sympy_evaluate(expr: sp.Expr, node: Node, params: ParameterStore) -> float:
  """Numerically evaluate a SymPy expression derived from node at the current parameter values"""
  return float(expr.evalf(subs=sympy_substitutions(node, params)))
