"""
Jacobian assembly for the nonlinear solver.

Rows are equations, columns are the free parameters being solved for. Each
entry is a derivative tree built once per equation generation and then
evaluated at every Newton step.
"""

import numpy as np
from typing import List, Sequence

from scipy.optimize import approx_fprime

from .expression_tree.expression import Expression
from .params import ParamHandle, ParamTable, ParameterStore

Jacobian = List[List[Expression]]


def build_jacobian(equations: Sequence[Expression], handles: Sequence[ParamHandle]) -> Jacobian:
  return [[eq.partial_wrt(h) for h in handles] for eq in equations]


def evaluate_jacobian(jacobian: Jacobian, params: ParameterStore) -> np.ndarray:
  n_rows = len(jacobian)
  n_cols = len(jacobian[0]) if n_rows else 0
  values = np.empty((n_rows, n_cols), dtype=np.float64)
  for i, row in enumerate(jacobian):
    for j, entry in enumerate(row):
      values[i, j] = entry.evaluate(params)
  return values


def evaluate_residuals(equations: Sequence[Expression], params: ParameterStore) -> np.ndarray:
  return np.array([eq.evaluate(params) for eq in equations], dtype=np.float64)


def numeric_jacobian(equations: Sequence[Expression], handles: Sequence[ParamHandle],
                     params: ParamTable, epsilon: float = 1e-7) -> np.ndarray:
  """Forward-difference Jacobian, used to check the symbolic one.

  Parameter values are perturbed in place and restored before returning.
  """
  x0 = np.array([params.lookup(h) for h in handles], dtype=np.float64)

  def residual(i: int):
    def f(x: np.ndarray) -> float:
      for h, v in zip(handles, x):
        params.set(h, v)
      return equations[i].evaluate(params)
    return f

  try:
    rows = [approx_fprime(x0, residual(i), epsilon) for i in range(len(equations))]
  finally:
    for h, v in zip(handles, x0):
      params.set(h, v)

  if not rows:
    return np.empty((0, len(handles)), dtype=np.float64)
  return np.vstack(rows)
