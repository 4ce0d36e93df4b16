import io

import pytest

from constraint_expr import (
    BinaryOpNode, ConstantNode, Expression, InternalInvariantError, OpType, UnaryOpNode,
    ParamTable, from_constant, from_param, from_param_direct, parse_expression
)


def test_constants_use_three_decimals():
    assert from_constant(2.0).to_string() == "2.000"
    assert from_constant(-0.5).to_string() == "-0.500"
    # lossy: the printed value is rounded
    assert from_constant(1.23456).to_string() == "1.235"


def test_params_print_as_hex(params):
    x = list(params.handles())[0]
    assert from_param(x).to_string() == "param(00000001)"
    assert from_param(0xabc).to_string() == "param(00000abc)"
    assert from_param_direct(params.resolve_direct(x)).to_string() == "param(p00000001)"


def test_binary_operators_are_infix_and_parenthesized():
    a, b = from_constant(1.0), from_constant(2.0)
    assert a.plus(b).to_string() == "(1.000 + 2.000)"
    assert a.minus(b).to_string() == "(1.000 - 2.000)"
    assert a.times(b).to_string() == "(1.000 * 2.000)"
    assert a.div(b).to_string() == "(1.000 / 2.000)"


def test_unary_operators_are_prefix():
    a = from_constant(4.0)
    assert a.negate().to_string() == "(- 4.000)"
    assert a.sqrt().to_string() == "(sqrt 4.000)"
    assert a.square().to_string() == "(square 4.000)"
    assert a.sin().to_string() == "(sin 4.000)"
    assert a.cos().to_string() == "(cos 4.000)"


def test_nested(params):
    x = list(params.handles())[0]
    tree = from_param(x).times(from_constant(2.0)).plus(from_constant(1.0).sqrt()).negate()
    assert tree.to_string() == "(- ((param(00000001) * 2.000) + (sqrt 1.000)))"


def test_writes_into_caller_buffer():
    out = io.StringIO()
    out.write("value = ")
    from_constant(3.0).times(from_constant(4.0)).write_to(out)
    assert out.getvalue() == "value = (3.000 * 4.000)"

    # independent calls do not share output
    assert from_constant(1.0).to_string() == "1.000"
    assert from_constant(2.0).to_string() == "2.000"


def test_expression_string_forms():
    expr = Expression(from_constant(1.0).plus(from_constant(2.0)))
    assert expr.to_string() == "(1.000 + 2.000)"
    assert str(expr) == expr.to_string()
    assert repr(expr) == "Expression((1.000 + 2.000))"


def test_unknown_operator_is_fatal():
    with pytest.raises(InternalInvariantError):
        BinaryOpNode(OpType.NEGATE, ConstantNode(1.0), ConstantNode(2.0)).to_string()
    with pytest.raises(InternalInvariantError):
        UnaryOpNode(OpType.MINUS, ConstantNode(1.0)).to_string()


@pytest.mark.parametrize("text", [
    "2+3*4",
    "(2+3)*4",
    "-2+3",
    "3*-2",
    "sqrt(2)/2",
    "1/3 + 2/7",
    "-(1.25 - 4) * sqrt(0.5)",
    "10 - 2 - 3 - 4",
])
def test_print_then_parse_round_trip(text):
    expr = parse_expression(text).expression
    printed = expr.to_string()
    reparsed = parse_expression(printed)
    assert reparsed.ok, printed
    params = ParamTable()
    # constants lose everything past the third decimal
    assert reparsed.expression.evaluate(params) == pytest.approx(expr.evaluate(params), abs=5e-3)
