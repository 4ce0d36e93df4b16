"""Utilities for expression trees."""

from .sympy_utils import param_symbol, sympy_partial, sympy_substitutions, sympy_evaluate
from .tree_utils import (
    get_all_nodes, get_unique_nodes, calculate_tree_depth,
    count_nodes, count_unique_nodes, find_nodes_by_operator,
    get_constants, get_param_handles, has_resolved_params, depends_on
)
from .validator import ExpressionValidator

__all__ = [
    'param_symbol', 'sympy_partial', 'sympy_substitutions', 'sympy_evaluate',
    'get_all_nodes', 'get_unique_nodes', 'calculate_tree_depth',
    'count_nodes', 'count_unique_nodes', 'find_nodes_by_operator',
    'get_constants', 'get_param_handles', 'has_resolved_params', 'depends_on',
    'ExpressionValidator'
]
