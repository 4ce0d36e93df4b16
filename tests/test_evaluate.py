import math

import numpy as np
import pytest

from constraint_expr import (
    BinaryOpNode, ConstantNode, Expression, InternalInvariantError, OpType, UnaryOpNode,
    from_constant, from_param, from_param_direct
)


def test_leaves(params):
    x, y, _ = list(params.handles())
    assert from_constant(4.5).evaluate(params) == 4.5
    assert from_param(x).evaluate(params) == 1.5
    assert from_param_direct(params.resolve_direct(y)).evaluate(params) == -0.7


def test_param_lookup_follows_store_updates(params):
    x = list(params.handles())[0]
    direct = from_param_direct(params.resolve_direct(x))
    ref = from_param(x)

    params.set(x, 10.0)
    assert ref.evaluate(params) == 10.0
    assert direct.evaluate(params) == 10.0


@pytest.mark.parametrize("method,expected", [
    ('plus', 3.0 + 4.0),
    ('minus', 3.0 - 4.0),
    ('times', 3.0 * 4.0),
    ('div', 3.0 / 4.0),
])
def test_binary_operators(method, expected):
    node = getattr(from_constant(3.0), method)(from_constant(4.0))
    assert node.evaluate(None) == pytest.approx(expected)


@pytest.mark.parametrize("method,expected", [
    ('negate', -0.8),
    ('sqrt', math.sqrt(0.8)),
    ('square', 0.64),
    ('sin', math.sin(0.8)),
    ('cos', math.cos(0.8)),
])
def test_unary_operators(method, expected):
    node = getattr(from_constant(0.8), method)()
    assert node.evaluate(None) == pytest.approx(expected)


def test_ieee_semantics_without_domain_checks():
    assert math.isnan(from_constant(-1.0).sqrt().evaluate(None))
    assert from_constant(1.0).div(from_constant(0.0)).evaluate(None) == math.inf
    assert from_constant(-1.0).div(from_constant(0.0)).evaluate(None) == -math.inf
    assert math.isnan(from_constant(0.0).div(from_constant(0.0)).evaluate(None))


def test_nested_expression(params):
    x, y, z = list(params.handles())
    # sqrt(x^2 + y^2) * cos(z) - z / x
    tree = (from_param(x).square().plus(from_param(y).square())).sqrt() \
        .times(from_param(z).cos()) \
        .minus(from_param(z).div(from_param(x)))
    expected = np.hypot(1.5, -0.7) * np.cos(2.25) - 2.25 / 1.5
    assert Expression(tree).evaluate(params) == pytest.approx(expected)


def test_shared_subtree_is_evaluated_per_occurrence(params):
    x = list(params.handles())[0]
    shared = from_param(x).plus(from_constant(1.0))
    tree = shared.times(shared).minus(shared)
    assert tree.evaluate(params) == pytest.approx(2.5 * 2.5 - 2.5)
    # evaluation leaves the tree untouched
    assert tree.left.left is shared and tree.right is shared


def test_unknown_operator_is_fatal():
    with pytest.raises(InternalInvariantError):
        BinaryOpNode(OpType.COS, ConstantNode(1.0), ConstantNode(2.0)).evaluate(None)
    with pytest.raises(InternalInvariantError):
        UnaryOpNode(OpType.DIV, ConstantNode(1.0)).evaluate(None)


def test_unknown_param_is_the_stores_concern(params):
    with pytest.raises(KeyError):
        from_param(999).evaluate(params)


def test_expression_requires_a_parameter_store(params):
    x = list(params.handles())[0]
    expr = Expression(from_param(x).plus(from_constant(1.0)))
    with pytest.raises(TypeError):
        expr.evaluate()
    assert expr.evaluate(params) == 2.5
