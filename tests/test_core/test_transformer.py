"""Tests for the desugaring passes."""

import pytest

from setsugar.config.settings import TransformConfig
from setsugar.core.ast import (
    BinaryOperator,
    Comprehension,
    Connective,
    Constant,
    Negation,
    Quantifier,
    Relation,
    UnaryOperator,
    Variable,
    collect_indices,
    is_primitive,
    walk,
)
from setsugar.core.printer import render
from setsugar.core.transformer import Transformer, transform
from setsugar.surface.parser import parse_formula


def desugar(source: str, *switches: str) -> str:
    config = TransformConfig.only(*switches) if switches else TransformConfig()
    return render(transform(parse_formula(source), config))


class TestVariables:
    """Letters are renamed to the lowest unused indices."""

    def test_letters_in_code_point_order(self):
        assert desugar("∀x (x ∈ y)", "variables") == "∀v₀ (v₀ ∈ v₁)"

    def test_upper_case_before_lower_case(self):
        assert desugar("a ∈ A", "variables") == "v₁ ∈ v₀"

    def test_indexed_variables_keep_their_numbers(self):
        assert desugar("x ∈ v0", "variables") == "v₁ ∈ v₀"

    def test_switched_off(self):
        assert desugar("x ∈ y", "subset") == "x ∈ y"


class TestRelations:
    """Negated relations and subset."""

    def test_negated_membership(self):
        tree = transform(parse_formula("v0 ∉ v1"), TransformConfig.only("negated_relations"))
        assert tree == Negation(parse_formula("v0 ∈ v1"))
        assert render(tree) == "¬(v₀ ∈ v₁)"

    def test_not_equal(self):
        assert desugar("v0 ≠ v1", "negated_relations") == "¬(v₀ = v₁)"

    def test_subset(self):
        assert desugar("v0 ⊆ v1", "subset") == "∀v₂ (v₂ ∈ v₀ → v₂ ∈ v₁)"

    def test_not_subset_needs_both_switches(self):
        assert desugar("v0 ⊈ v1", "negated_relations", "subset") == "¬∀v₂ (v₂ ∈ v₀ → v₂ ∈ v₁)"
        assert desugar("v0 ⊈ v1", "subset") == "v₀ ⊈ v₁"


class TestOperators:
    """Membership and equality rules for each operator."""

    @pytest.mark.parametrize(
        ("source", "switch", "expected"),
        [
            ("v0 ∈ v1 ∪ v2", "union", "(v₀ ∈ v₁ ∨ v₀ ∈ v₂)"),
            ("v0 ∈ v1 ∩ v2", "intersection", "(v₀ ∈ v₁ ∧ v₀ ∈ v₂)"),
            ("v0 ∈ v1 \\ v2", "difference", "(v₀ ∈ v₁ ∧ ¬(v₀ ∈ v₂))"),
            ("v0 ∈ {v1, v2}", "pair_set", "(v₀ = v₁ ∨ v₀ = v₂)"),
            ("v0 ∈ ⋃(v1)", "big_union", "∃v₂ (v₂ ∈ v₁ ∧ v₀ ∈ v₂)"),
            ("v0 ∈ ⋂(v1)", "big_intersection", "(¬(v₁ = ∅) ∧ ∀v₂ (v₂ ∈ v₁ → v₀ ∈ v₂))"),
            ("v0 = Pot(v1)", "power_set", "∀v₂ (v₂ ∈ v₀ ↔ v₂ ⊆ v₁)"),
        ],
    )
    def test_single_rule(self, source, switch, expected):
        assert desugar(source, switch) == expected

    def test_power_set_definition_uses_subset_pass(self):
        assert desugar("v0 = Pot(v1)", "power_set", "subset") == (
            "∀v₂ (v₂ ∈ v₀ ↔ ∀v₃ (v₃ ∈ v₂ → v₃ ∈ v₁))"
        )

    def test_membership_in_power_set_names_the_set(self):
        assert desugar("v0 ∈ Pot(v1)", "power_set") == (
            "∃v₂ (∀v₃ (v₃ ∈ v₂ ↔ v₃ ⊆ v₁) ∧ v₀ ∈ v₂)"
        )

    def test_big_intersection_with_empty_set(self):
        assert desugar("v0 ∈ ⋂(v1)", "big_intersection", "empty_set") == (
            "(¬¬∃v₃ (v₃ ∈ v₁) ∧ ∀v₂ (v₂ ∈ v₁ → v₀ ∈ v₂))"
        )

    def test_operator_on_the_left_is_named(self):
        assert desugar("v1 ∪ v2 ∈ v0", "union") == (
            "∃v₃ (∀v₄ ((v₄ ∈ v₁ ∨ v₄ ∈ v₂) ↔ v₄ ∈ v₃) ∧ v₃ ∈ v₀)"
        )

    def test_disabled_operator_is_left_alone(self):
        assert desugar("v0 ∈ v1 ∪ v2", "intersection") == "v₀ ∈ v₁ ∪ v₂"


class TestComprehension:
    """Singletons and set-builder terms."""

    def test_equality(self):
        assert desugar("v0 = {v1 ∈ v2 | v1 = v1}", "comprehension") == (
            "∀v₁ (v₁ ∈ v₀ ↔ (v₁ ∈ v₂ ∧ v₁ = v₁))"
        )

    def test_bound_variable_is_renamed_on_clash(self):
        assert desugar("v1 = {v1 ∈ v2 | v1 = v1}", "comprehension") == (
            "∀v₀ (v₀ ∈ v₁ ↔ (v₀ ∈ v₂ ∧ v₀ = v₀))"
        )

    def test_membership(self):
        assert desugar("v0 ∈ {v1 ∈ v2 | v1 = v1}", "comprehension") == (
            "∃v₃ (∀v₁ (v₁ ∈ v₃ ↔ (v₁ ∈ v₂ ∧ v₁ = v₁)) ∧ v₀ ∈ v₃)"
        )

    def test_singleton_becomes_comprehension(self):
        assert desugar("v0 = {v1}", "singleton") == "v₀ = {v₂ ∈ Pot(v₁) | v₂ = v₁}"

    def test_constant_inside_kept_comprehension(self):
        assert desugar("v0 = {v1 ∈ ∅ | v1 ∈ ∅}", "empty_set") == (
            "v₀ = {v₁ ∈ ∅ | ∃v₂ (¬∃v₃ (v₃ ∈ v₂) ∧ v₁ ∈ v₂)}"
        )


class TestConstants:
    """Empty set and ω."""

    def test_empty_set(self):
        assert desugar("v0 = ∅", "empty_set") == "¬∃v₁ (v₁ ∈ v₀)"

    def test_empty_set_on_the_left(self):
        assert desugar("∅ = v0", "empty_set") == "¬∃v₁ (v₁ ∈ v₀)"

    def test_membership_in_empty_set(self):
        assert desugar("v0 ∈ ∅", "empty_set") == "∃v₁ (¬∃v₂ (v₂ ∈ v₁) ∧ v₀ ∈ v₁)"

    def test_omega_is_inductive(self):
        assert desugar("v0 = ω", "omega") == "(∅ ∈ v₀ ∧ ∀v₁ (v₁ ∈ v₀ → v₁ ∪ {v₁} ∈ v₀))"

    def test_omega_on_the_left_of_membership(self):
        assert desugar("ω ∈ v0", "omega") == (
            "∃v₁ ((∅ ∈ v₁ ∧ ∀v₂ (v₂ ∈ v₁ → v₂ ∪ {v₂} ∈ v₁)) ∧ v₁ ∈ v₀)"
        )


SAMPLES = [
    "x ⊆ y",
    "x ∉ y ∪ z",
    "x = {y}",
    "x ∈ {y}",
    "{x, y} = Pot(z)",
    "x ∈ ⋂(Pot(y))",
    "∀x (x ⊆ y ∪ z)",
    "x ∉ {y ∈ z | y ≠ y}",
    "A ∪ B ∈ C ∩ D",
    "x = ⋃({y, z})",
    "x ≠ y \\ z",
    "∅ = ∅",
    "x = ω",
    "x ∈ ω",
    "ω ∈ x",
    "(x ∈ ∅ → ∃y (y ∈ ⋃(x)))",
]

ARITY = {
    Constant: 0,
    Variable: 0,
    Relation: 2,
    Negation: 1,
    Connective: 2,
    Quantifier: 2,
    UnaryOperator: 1,
    BinaryOperator: 2,
    Comprehension: 2,
}


class TestFullDesugaring:
    """Properties of the output with every switch on."""

    @pytest.mark.parametrize("source", SAMPLES)
    def test_output_is_primitive(self, source):
        assert is_primitive(transform(parse_formula(source)))

    @pytest.mark.parametrize("source", SAMPLES)
    def test_idempotent(self, source):
        once = transform(parse_formula(source))
        assert transform(once) == once

    @pytest.mark.parametrize("source", SAMPLES)
    def test_arity(self, source):
        for node in walk(transform(parse_formula(source))):
            assert len(node.children) == ARITY[type(node)]

    @pytest.mark.parametrize("source", SAMPLES)
    def test_output_parses_back(self, source):
        tree = transform(parse_formula(source))
        assert parse_formula(render(tree)) == tree

    @pytest.mark.parametrize("source", ["v0 ⊆ v1", "v0 ∈ ⋃(v1) ∩ v2", "v0 = Pot(v1)", "v0 = ω"])
    def test_new_binders_avoid_existing_variables(self, source):
        tree = parse_formula(source)
        bound = {n.var.index for n in walk(transform(tree)) if isinstance(n, Quantifier)}
        assert not bound & collect_indices(tree)

    def test_renamed_letters_then_subset(self):
        assert desugar("x ⊆ y") == "∀v₂ (v₂ ∈ v₀ → v₂ ∈ v₁)"

    def test_union_membership(self):
        assert desugar("v0 ∈ v1 ∪ v2") == "(v₀ ∈ v₁ ∨ v₀ ∈ v₂)"


def test_no_switches_is_identity():
    tree = parse_formula("x ⊈ {y ∈ ω | y ∈ ⋃(Pot(∅))}")
    assert transform(tree, TransformConfig.none()) == tree


def test_transformer_defaults_to_all_switches():
    assert Transformer().config == TransformConfig()
