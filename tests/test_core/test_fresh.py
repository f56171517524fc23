"""Tests for fresh variable allocation."""

from setsugar.core.ast import Variable
from setsugar.core.fresh import FreshVariables
from setsugar.surface.parser import parse_formula


def test_smallest_unused_first_returned_descending():
    fresh = FreshVariables([0, 1, 3])
    assert fresh.indices(2) == [4, 2]


def test_allocations_are_recorded():
    fresh = FreshVariables()
    assert fresh.indices(3) == [2, 1, 0]
    assert fresh.variable() == Variable(3)
    assert fresh.used == frozenset({0, 1, 2, 3})


def test_for_tree_avoids_every_variable_in_the_tree():
    fresh = FreshVariables.for_tree(parse_formula("∀v0 (v0 ∈ v2)"))
    assert fresh.variable() == Variable(1)
    assert fresh.variable() == Variable(3)


def test_reset_forgets_previous_allocations():
    fresh = FreshVariables()
    fresh.indices(5)
    fresh.reset(parse_formula("v1 ∈ v1"))
    assert fresh.used == frozenset({1})
    assert fresh.variable() == Variable(0)
