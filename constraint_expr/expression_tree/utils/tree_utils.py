"""
Tree Utility Functions

Traversal and analysis helpers for expression trees. Derivative trees share
subtrees, so the helpers that count or collect distinguish between visiting
every occurrence and visiting every distinct node.
"""

from typing import List, Set

from ..core.node import Node, BinaryOpNode, UnaryOpNode, ConstantNode, ParamNode, ParamDirectNode
from ..core.operators import OpType
from ...params import ParamHandle


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all node occurrences in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of nodes; a shared subtree appears once per parent
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    """Breadth-first traversal (iterative, non-recursive)"""
    nodes_to_visit = [node]
    all_nodes = []
    position = 0

    while position < len(nodes_to_visit):
        current_node = nodes_to_visit[position]
        position += 1
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Depth-first pre-order traversal (iterative)"""
    stack = [node]
    all_nodes = []

    while stack:
        current_node = stack.pop()
        all_nodes.append(current_node)
        stack.extend(reversed(current_node.children()))

    return all_nodes


def get_unique_nodes(node: Node) -> List[Node]:
    """Distinct nodes reachable from node, by identity, in depth-first order"""
    seen: Set[int] = set()
    stack = [node]
    unique = []

    while stack:
        current_node = stack.pop()
        if id(current_node) in seen:
            continue
        seen.add(id(current_node))
        unique.append(current_node)
        stack.extend(reversed(current_node.children()))

    return unique


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    if isinstance(node, UnaryOpNode):
        return 1 + calculate_tree_depth(node.operand)
    elif isinstance(node, BinaryOpNode):
        return 1 + max(calculate_tree_depth(node.left), calculate_tree_depth(node.right))
    else:
        return 1


def count_nodes(node: Node) -> int:
    """Node occurrences, i.e. the size the tree would have with no sharing"""
    return len(get_all_nodes(node))


def count_unique_nodes(node: Node) -> int:
    """Distinct nodes actually allocated for this tree"""
    return len(get_unique_nodes(node))


def find_nodes_by_operator(node: Node, operator: OpType) -> List[Node]:
    """Distinct operator nodes using the given operator"""
    return [n for n in get_unique_nodes(node)
            if isinstance(n, (BinaryOpNode, UnaryOpNode)) and n.operator == operator]


def get_constants(node: Node) -> List[ConstantNode]:
    """Distinct constant nodes"""
    return [n for n in get_unique_nodes(node) if isinstance(n, ConstantNode)]


def get_param_handles(node: Node) -> Set[ParamHandle]:
    """Handles referenced by ParamNode leaves; resolved parameters are not free"""
    return {n.handle for n in get_unique_nodes(node) if isinstance(n, ParamNode)}


def has_resolved_params(node: Node) -> bool:
    """True if the tree reads any parameter directly and so cannot be differentiated"""
    return any(isinstance(n, ParamDirectNode) for n in get_unique_nodes(node))


def depends_on(node: Node, handle: ParamHandle) -> bool:
    """True if the tree references the parameter through a ParamNode"""
    return handle in get_param_handles(node)
