import pytest

from constraint_expr import (
    BinaryOpNode, ConstantNode, InternalInvariantError, NodeArena, OpType,
    ParamDirectNode, ParamNode, UnaryOpNode, ExpressionValidator,
    free_global_arena, from_constant, from_param, from_param_direct, get_global_arena
)
from constraint_expr.expression_tree.utils import (
    calculate_tree_depth, count_nodes, count_unique_nodes, depends_on,
    find_nodes_by_operator, get_all_nodes, get_param_handles, has_resolved_params
)


def test_leaf_constructors(params):
    x, y, _ = list(params.handles())

    p = from_param(x)
    assert isinstance(p, ParamNode)
    assert p.handle == x

    c = from_constant(3)
    assert isinstance(c, ConstantNode)
    assert c.value == 3.0 and isinstance(c.value, float)

    d = from_param_direct(params.resolve_direct(y))
    assert isinstance(d, ParamDirectNode)
    assert d.param is params.get(y)


def test_combinators_build_expected_nodes():
    a = from_constant(1.0)
    b = from_constant(2.0)

    for method, op in [('plus', OpType.PLUS), ('minus', OpType.MINUS),
                       ('times', OpType.TIMES), ('div', OpType.DIV)]:
        node = getattr(a, method)(b)
        assert isinstance(node, BinaryOpNode)
        assert node.operator == op
        assert node.left is a and node.right is b

    for method, op in [('negate', OpType.NEGATE), ('sqrt', OpType.SQRT),
                       ('square', OpType.SQUARE), ('sin', OpType.SIN), ('cos', OpType.COS)]:
        node = getattr(a, method)()
        assert isinstance(node, UnaryOpNode)
        assert node.operator == op
        assert node.operand is a


def test_combinators_reject_wrong_arity_operator():
    a = from_constant(1.0)
    with pytest.raises(InternalInvariantError):
        a.any_op(OpType.SIN, a)
    with pytest.raises(InternalInvariantError):
        a.unary_op(OpType.PLUS)


def test_nodes_come_from_current_generation():
    arena = get_global_arena()
    node = from_constant(1.0).plus(from_constant(2.0))
    assert node.generation == arena.generation
    assert arena.get_stats()['live_nodes'] == 3

    free_global_arena()
    assert not arena.owns(node)
    assert arena.get_stats()['live_nodes'] == 0


def test_arena_generation_lifecycle():
    arena = NodeArena()
    a = arena.get_constant_node(1.0)
    b = arena.get_param_node(7)
    arena.get_binary_node(OpType.TIMES, a, b)
    arena.get_unary_node(OpType.SQRT, a)

    stats = arena.get_stats()
    assert stats['generation'] == 0
    assert stats['live_nodes'] == 4
    assert stats['constant_nodes'] == 1
    assert stats['param_nodes'] == 1
    assert stats['binary_nodes'] == 1
    assert stats['unary_nodes'] == 1

    arena.free_generation()
    assert arena.generation == 1
    assert not arena.owns(a)
    assert arena.owns(arena.get_constant_node(2.0))


def test_validator_accepts_finished_trees(params):
    x = list(params.handles())[0]
    tree = from_param(x).times(from_constant(2.0)).sqrt().plus(from_constant(1.0).cos())
    assert ExpressionValidator.is_valid_expression(tree)
    assert ExpressionValidator.is_valid_expression(tree, arena=get_global_arena())


def test_validator_rejects_foreign_and_stale_nodes():
    bad = BinaryOpNode(OpType.SIN, ConstantNode(1.0), ConstantNode(2.0))
    assert not ExpressionValidator.is_valid_expression(bad)
    assert not ExpressionValidator.is_valid_expression(UnaryOpNode(OpType.TIMES, ConstantNode(1.0)))
    assert not ExpressionValidator.is_valid_expression("1 + 2")

    tree = from_constant(1.0).plus(from_constant(2.0))
    free_global_arena()
    assert ExpressionValidator.is_valid_expression(tree)
    assert not ExpressionValidator.is_valid_expression(tree, arena=get_global_arena())


def test_validator_can_forbid_resolved_params(params):
    y = list(params.handles())[1]
    tree = from_param_direct(params.resolve_direct(y)).plus(from_constant(1.0))
    assert ExpressionValidator.is_valid_expression(tree)
    assert not ExpressionValidator.is_valid_expression(tree, allow_resolved_params=False)
    assert has_resolved_params(tree)


def test_tree_utils_on_shared_subtrees(params):
    x, y, z = list(params.handles())
    shared = from_param(x).plus(from_param(y))
    tree = shared.times(shared)

    # each occurrence counts, but the shared subtree is allocated once
    assert count_nodes(tree) == 7
    assert count_unique_nodes(tree) == 4
    assert tree.size() == 7
    assert calculate_tree_depth(tree) == 3
    assert len(get_all_nodes(tree, 'depth_first')) == 7
    assert get_all_nodes(tree)[0] is tree

    assert get_param_handles(tree) == {x, y}
    assert depends_on(tree, x)
    assert not depends_on(tree, z)
    assert find_nodes_by_operator(tree, OpType.PLUS) == [shared]

    with pytest.raises(ValueError):
        get_all_nodes(tree, 'sideways')
