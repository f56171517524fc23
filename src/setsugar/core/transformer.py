"""Desugaring passes.

Rewrites a formula into the primitive vocabulary of set theory (∈, =,
connectives, quantifiers, variables). The passes run in a fixed order:

    variables -> negated relations -> subset -> operators -> constants

Every rule builds new nodes; nothing is modified in place. Variables bound
by a rule come from a FreshVariables allocator that is created for the call
and passed to every rule, so a new binder never captures a variable of the
formula.
"""

from __future__ import annotations

from typing import Callable

from loguru import logger

from setsugar.config.settings import TransformConfig
from setsugar.core.ast import (
    EMPTY_SET,
    BinaryOperator,
    BinaryOperatorKind,
    Comprehension,
    Constant,
    ConstantKind,
    Negation,
    Node,
    Relation,
    RelationKind,
    UnaryOperator,
    UnaryOperatorKind,
    biconditional,
    collect_indices,
    conjunction,
    disjunction,
    element,
    equality,
    exists,
    forall,
    implication,
    is_letter_index,
    substitute,
    substitute_free,
)
from setsugar.core.fresh import FreshVariables

# Switch guarding each operator kind.
OPERATOR_SWITCHES: dict[UnaryOperatorKind | BinaryOperatorKind, str] = {
    UnaryOperatorKind.SINGLETON: "singleton",
    UnaryOperatorKind.POWER_SET: "power_set",
    UnaryOperatorKind.BIG_UNION: "big_union",
    UnaryOperatorKind.BIG_INTERSECTION: "big_intersection",
    BinaryOperatorKind.UNION: "union",
    BinaryOperatorKind.INTERSECTION: "intersection",
    BinaryOperatorKind.DIFFERENCE: "difference",
    BinaryOperatorKind.PAIR_SET: "pair_set",
}

CONSTANT_SWITCHES: dict[ConstantKind, str] = {
    ConstantKind.EMPTY_SET: "empty_set",
    ConstantKind.OMEGA: "omega",
}


def _map_children(node: Node, fn: Callable[[Node], Node]) -> Node:
    if not node.children:
        return node
    return node.with_children(*(fn(child) for child in node.children))


class Transformer:
    """Eliminates the sugared constructs switched on in the configuration."""

    def __init__(self, config: TransformConfig | None = None) -> None:
        self.config = config if config is not None else TransformConfig()
        self._rewrites_operators = self.config.comprehension or any(
            getattr(self.config, name) for name in OPERATOR_SWITCHES.values()
        )
        self._rewrites_constants = any(getattr(self.config, name) for name in CONSTANT_SWITCHES.values())

    def transform(self, node: Node) -> Node:
        """Run the whole pipeline on one formula."""
        fresh = FreshVariables.for_tree(node)
        logger.debug("transform.start formula={} enabled={}", node, self.config.enabled())

        passes: tuple[tuple[str, Callable[[Node], Node]], ...] = (
            ("variables", lambda n: self.variables(n, fresh)),
            ("negated_relations", self.negated_relations),
            ("subset", lambda n: self.subsets(n, fresh)),
            ("operators", lambda n: self.operators(n, fresh)),
            ("constants", lambda n: self.constants(n, fresh)),
        )
        for name, run_pass in passes:
            node = run_pass(node)
            logger.debug("transform.pass name={} formula={}", name, node)

        logger.debug("transform.done formula={}", node)
        return node

    # =====================================================================
    # Variables
    # =====================================================================

    def variables(self, node: Node, fresh: FreshVariables) -> Node:
        """Rename letter variables to the lowest unused indices.

        Letters are numbered in code point order (A..Z before a..z);
        indexed variables keep their numbers.
        """
        if not self.config.variables:
            return node
        letters = sorted(i for i in fresh.used if is_letter_index(i))
        if not letters:
            return node
        mapping = dict(zip(letters, fresh.indices(len(letters))))
        node = substitute(node, mapping)
        fresh.reset(node)
        return node

    # =====================================================================
    # Negated relations and subset
    # =====================================================================

    def negated_relations(self, node: Node) -> Node:
        """A ≠ B becomes ¬A = B; likewise ∉ and ⊈."""
        if not self.config.negated_relations:
            return node
        match node:
            case Relation(kind, left, right) if kind.is_negated:
                node = Negation(Relation(kind.positive, left, right))
        return _map_children(node, self.negated_relations)

    def subsets(self, node: Node, fresh: FreshVariables) -> Node:
        """A ⊆ B becomes ∀y (y ∈ A → y ∈ B)."""
        if not self.config.subset:
            return node
        match node:
            case Relation(RelationKind.SUBSET, left, right):
                var = fresh.variable()
                node = forall(var, implication(element(var, left), element(var, right)))
        return _map_children(node, lambda child: self.subsets(child, fresh))

    # =====================================================================
    # Operators and comprehensions
    # =====================================================================

    def operators(self, node: Node, fresh: FreshVariables) -> Node:
        """Eliminate operators, singletons and comprehensions.

        The rule for a node runs before its children are visited, so the
        subformulas a rule introduces are examined as well. Inside a
        comprehension only the predicate is visited.
        """
        if not self._rewrites_operators:
            return node
        node = self._rewrite_operator(node, fresh)
        match node:
            case Comprehension(membership, predicate):
                return Comprehension(membership, self.operators(predicate, fresh))
        return _map_children(node, lambda child: self.operators(child, fresh))

    def _rewrite_operator(self, node: Node, fresh: FreshVariables) -> Node:
        match node:
            case UnaryOperator(UnaryOperatorKind.SINGLETON, operand) if self.config.singleton:
                return self._singleton(operand, fresh)
            case Relation(RelationKind.EQUALITY, left, right):
                return self._equality(
                    self._expand_singleton(left, fresh), self._expand_singleton(right, fresh), fresh
                )
            case Relation(RelationKind.ELEMENT, left, right):
                return self._element(
                    self._expand_singleton(left, fresh), self._expand_singleton(right, fresh), fresh
                )
        return node

    def _eliminable(self, node: Node) -> bool:
        match node:
            case UnaryOperator(kind) | BinaryOperator(kind):
                return getattr(self.config, OPERATOR_SWITCHES[kind])
            case Comprehension():
                return self.config.comprehension
        return False

    def _expand_singleton(self, node: Node, fresh: FreshVariables) -> Node:
        match node:
            case UnaryOperator(UnaryOperatorKind.SINGLETON, operand) if self.config.singleton:
                return self._singleton(operand, fresh)
        return node

    def _singleton(self, operand: Node, fresh: FreshVariables) -> Node:
        """{A} becomes {y ∈ Pot(A) | y = A}."""
        var = fresh.variable()
        power_set = UnaryOperator(UnaryOperatorKind.POWER_SET, operand)
        return Comprehension(element(var, power_set), equality(var, operand))

    def _equality(self, left: Node, right: Node, fresh: FreshVariables) -> Node:
        for term, other in ((left, right), (right, left)):
            if not self._eliminable(term):
                continue
            match term:
                case UnaryOperator(UnaryOperatorKind.POWER_SET, operand):
                    # A = Pot(B): ∀y (y ∈ A ↔ y ⊆ B)
                    var = fresh.variable()
                    definition = forall(
                        var, biconditional(element(var, other), Relation(RelationKind.SUBSET, var, operand))
                    )
                    return self.subsets(definition, fresh)
                case Comprehension():
                    return self._comprehension(term, other, fresh)
                case _:
                    return self._extensionality(left, right, fresh)
        return equality(left, right)

    def _extensionality(self, left: Node, right: Node, fresh: FreshVariables) -> Node:
        """A = B becomes ∀y (y ∈ A ↔ y ∈ B)."""
        var = fresh.variable()
        return forall(var, biconditional(element(var, left), element(var, right)))

    def _comprehension(self, term: Comprehension, other: Node, fresh: FreshVariables) -> Node:
        """B = {y ∈ S | φ} becomes ∀y (y ∈ B ↔ (y ∈ S ∧ φ)).

        The comprehension variable is renamed when it occurs in B or S.
        """
        var, domain, predicate = term.var, term.domain, term.predicate
        if var.index in collect_indices(other) | collect_indices(domain):
            renamed = fresh.variable()
            predicate = substitute_free(predicate, var.index, renamed)
            var = renamed
        return forall(
            var, biconditional(element(var, other), conjunction(element(var, domain), predicate))
        )

    def _element(self, left: Node, right: Node, fresh: FreshVariables) -> Node:
        if self._eliminable(right):
            match right:
                case UnaryOperator(UnaryOperatorKind.BIG_INTERSECTION, family):
                    # x ∈ ⋂A: ¬A = ∅ ∧ ∀y (y ∈ A → x ∈ y)
                    var = fresh.variable()
                    return conjunction(
                        Negation(equality(family, EMPTY_SET)),
                        forall(var, implication(element(var, family), element(left, var))),
                    )
                case UnaryOperator(UnaryOperatorKind.BIG_UNION, family):
                    # x ∈ ⋃A: ∃y (y ∈ A ∧ x ∈ y)
                    var = fresh.variable()
                    return exists(var, conjunction(element(var, family), element(left, var)))
                case BinaryOperator(BinaryOperatorKind.INTERSECTION, a, b):
                    return conjunction(element(left, a), element(left, b))
                case BinaryOperator(BinaryOperatorKind.DIFFERENCE, a, b):
                    return conjunction(element(left, a), Negation(element(left, b)))
                case BinaryOperator(BinaryOperatorKind.UNION, a, b):
                    return disjunction(element(left, a), element(left, b))
                case BinaryOperator(BinaryOperatorKind.PAIR_SET, a, b):
                    return disjunction(equality(left, a), equality(left, b))
                case _:
                    return self._name_right(left, right, fresh)
        if self._eliminable(left):
            return self._name_left(left, right, fresh)
        return element(left, right)

    def _name_right(self, left: Node, right: Node, fresh: FreshVariables) -> Node:
        """x ∈ E becomes ∃y (E = y ∧ x ∈ y)."""
        var = fresh.variable()
        return exists(var, conjunction(equality(right, var), element(left, var)))

    def _name_left(self, left: Node, right: Node, fresh: FreshVariables) -> Node:
        """E ∈ B becomes ∃y (E = y ∧ y ∈ B)."""
        var = fresh.variable()
        return exists(var, conjunction(equality(left, var), element(var, right)))

    # =====================================================================
    # Constants
    # =====================================================================

    def constants(self, node: Node, fresh: FreshVariables) -> Node:
        """Eliminate ∅ and ω from equalities and memberships."""
        if not self._rewrites_constants:
            return node
        match node:
            case Relation(RelationKind.EQUALITY, left, right):
                if self._constant_enabled(right):
                    left, right = right, left
                match left:
                    case Constant(ConstantKind.EMPTY_SET) if self.config.empty_set:
                        node = self._empty_set(right, fresh)
                    case Constant(ConstantKind.OMEGA) if self.config.omega:
                        node = self.operators(self._omega(right, fresh), fresh)
            case Relation(RelationKind.ELEMENT, left, right):
                if self._constant_enabled(right):
                    node = self._name_right(left, right, fresh)
                elif self._constant_enabled(left):
                    node = self._name_left(left, right, fresh)
            case Comprehension(membership, predicate):
                return Comprehension(membership, self.constants(predicate, fresh))
        return _map_children(node, lambda child: self.constants(child, fresh))

    def _constant_enabled(self, node: Node) -> bool:
        match node:
            case Constant(kind):
                return getattr(self.config, CONSTANT_SWITCHES[kind])
        return False

    def _empty_set(self, term: Node, fresh: FreshVariables) -> Node:
        """x = ∅ becomes ¬∃y (y ∈ x)."""
        var = fresh.variable()
        return Negation(exists(var, element(var, term)))

    def _omega(self, term: Node, fresh: FreshVariables) -> Node:
        """x = ω becomes (∅ ∈ x ∧ ∀y (y ∈ x → y ∪ {y} ∈ x)).

        This states that x is inductive, not that it is the least such set.
        """
        var = fresh.variable()
        successor = BinaryOperator(
            BinaryOperatorKind.UNION, var, UnaryOperator(UnaryOperatorKind.SINGLETON, var)
        )
        return conjunction(
            element(EMPTY_SET, term),
            forall(var, implication(element(var, term), element(successor, term))),
        )


# =============================================================================
# Convenience Functions
# =============================================================================


def transform(node: Node, config: TransformConfig | None = None) -> Node:
    """Desugar a formula with the given switches (all on by default).

    Args:
        node: Parsed formula
        config: Which constructs to eliminate

    Returns:
        Formula with every enabled construct eliminated
    """
    return Transformer(config).transform(node)
