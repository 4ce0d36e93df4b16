import pytest

from constraint_expr import ParamTable, reset_global_arena
from constraint_expr.config import reset_parser_limits


@pytest.fixture(autouse=True)
def fresh_arena():
    reset_global_arena()
    reset_parser_limits()
    yield
    reset_global_arena()
    reset_parser_limits()


@pytest.fixture
def params():
    """Three parameters x=1.5, y=-0.7, z=2.25"""
    table = ParamTable()
    table.add(1.5)
    table.add(-0.7)
    table.add(2.25)
    return table
