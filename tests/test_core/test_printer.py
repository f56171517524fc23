"""Tests for rendering syntax trees."""

import pytest

from setsugar.core.ast import Negation, Variable, disjunction, element, exists, forall, implication
from setsugar.core.printer import render, render_variable
from setsugar.surface.parser import parse_formula


class TestVariables:
    def test_indexed(self):
        assert render_variable(0) == "v₀"
        assert render_variable(12) == "v₁₂"

    def test_letters(self):
        assert render(Variable.named("x")) == "x"
        assert render(Variable.named("A")) == "A"


class TestFormulas:
    """Parentheses around relations under ¬ and quantifiers, and around connectives."""

    def test_quantified_implication(self):
        v0, v1, v2 = Variable(0), Variable(1), Variable(2)
        tree = forall(v2, implication(element(v2, v0), element(v2, v1)))
        assert render(tree) == "∀v₂ (v₂ ∈ v₀ → v₂ ∈ v₁)"

    def test_negated_quantifier(self):
        v0, v1 = Variable(0), Variable(1)
        assert render(Negation(exists(v1, element(v1, v0)))) == "¬∃v₁ (v₁ ∈ v₀)"

    def test_str_uses_render(self):
        assert str(parse_formula("x ∈ y")) == "x ∈ y"


class TestSetTerms:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("x ∈ \\bigcup(y)", "x ∈ ⋃(y)"),
            ("x ∈ Durchschnitt(y)", "x ∈ ⋂(y)"),
            ("x ∈ \\powerset(y)", "x ∈ Pot(y)"),
            ("x ∈ y ∪ z ∩ w", "x ∈ (y ∪ z) ∩ w"),
            ("x ∈ y \\setminus z", "x ∈ y \\ z"),
            ("x ∈ {y, z}", "x ∈ {y, z}"),
            ("x = {y}", "x = {y}"),
            ("x = {y ∈ z | y != y}", "x = {y ∈ z | y ≠ y}"),
            ("x = {y ∈ z | ¬y = y}", "x = {y ∈ z | ¬(y = y)}"),
            ("0 ∈ \\omega", "∅ ∈ ω"),
        ],
    )
    def test_notation(self, source, expected):
        assert render(parse_formula(source)) == expected


@pytest.mark.parametrize(
    "source",
    [
        "∀v₂ (v₂ ∈ v₀ → v₂ ∈ v₁)",
        "¬∃v₁ (v₁ ∈ v₀)",
        "((x ∈ y ∨ x = z) ↔ ¬(x ∈ Pot(z)))",
        "x ∈ y ∪ (z ∩ w)",
        "{x, y} ⊆ {z ∈ ⋃(w) | ∃v₃ (v₃ ∈ z)}",
    ],
)
def test_printed_form_parses_back(source):
    tree = parse_formula(source)
    assert parse_formula(render(tree)) == tree


class TestLongChains:
    """Chains are rendered without one call per link."""

    def test_union_chain(self):
        tree = parse_formula("v0 ∈ " + " ∪ ".join(f"v{i}" for i in range(1, 3000)))
        text = render(tree)
        assert text.startswith("v₀ ∈ " + "(" * 2997 + "v₁ ∪ v₂) ∪ v₃)")
        assert text.endswith(") ∪ v₂₉₉₉")

    def test_disjunction_chain(self):
        tree = element(Variable(0), Variable(1))
        for index in range(2, 3000):
            tree = disjunction(tree, element(Variable(0), Variable(index)))
        text = render(tree)
        assert text.startswith("(" * 2998 + "v₀ ∈ v₁ ∨ v₀ ∈ v₂)")
        assert text.endswith("∨ v₀ ∈ v₂₉₉₉)")


def test_indexed_variables_print_as_the_lexer_reads_them():
    tree = parse_formula(f"{render_variable(1234567890)} ∈ v0")
    assert tree == element(Variable(1234567890), Variable(0))
