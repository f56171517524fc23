"""Syntax tree for set-theoretic formulas.

Every node is an immutable dataclass with a fixed number of children, so a
tree can only be rewritten by building new nodes. Sugared constructs
(operators, comprehensions, subset and negated relations, constants) live in
the same tree as the primitive vocabulary until the transformer removes them.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

# =============================================================================
# Variable identifier space
# =============================================================================

MAX_INDEX = 2**32 - 1

# Letters occupy the top of the index space: MAX_INDEX - ord(letter).
LETTERS = string.ascii_letters
LETTER_RANGE_START = MAX_INDEX - max(ord(c) for c in LETTERS)

# Indexed variables are spelled v0, v17 or v₁₇.
INDEXED_VARIABLE_LETTER = "v"
DIGITS = "0123456789"
SUBSCRIPT_DIGITS = "₀₁₂₃₄₅₆₇₈₉"


def letter_index(letter: str) -> int:
    """Identifier of the variable written as a single ASCII letter."""
    if len(letter) != 1 or letter not in LETTERS:
        raise ValueError(f"Not a variable letter: {letter!r}")
    return MAX_INDEX - ord(letter)


def is_letter_index(index: int) -> bool:
    """True if the identifier encodes a letter-named variable."""
    code = MAX_INDEX - index
    return 0 <= code < 128 and chr(code) in LETTERS


def index_letter(index: int) -> str:
    """Letter encoded by a high-range identifier."""
    if not is_letter_index(index):
        raise ValueError(f"Index {index} does not encode a letter")
    return chr(MAX_INDEX - index)


# =============================================================================
# Kinds
# =============================================================================


class ConstantKind(Enum):
    EMPTY_SET = "EmptySet"
    OMEGA = "Omega"


class RelationKind(Enum):
    EQUALITY = "Equality"
    ELEMENT = "Element"
    SUBSET = "Subset"
    NOT_EQUAL = "NotEqual"
    NOT_ELEMENT = "NotElement"
    NOT_SUBSET = "NotSubset"

    @property
    def positive(self) -> RelationKind:
        """Relation negated by this one (identity for positive relations)."""
        return _POSITIVE_RELATION.get(self, self)

    @property
    def is_negated(self) -> bool:
        return self in _POSITIVE_RELATION


_POSITIVE_RELATION = {
    RelationKind.NOT_EQUAL: RelationKind.EQUALITY,
    RelationKind.NOT_ELEMENT: RelationKind.ELEMENT,
    RelationKind.NOT_SUBSET: RelationKind.SUBSET,
}


class ConnectiveKind(Enum):
    """Binary connectives. Negation is its own node class."""

    CONJUNCTION = "Conjunction"
    DISJUNCTION = "Disjunction"
    IMPLICATION = "Implication"
    BICONDITIONAL = "Biconditional"


class QuantifierKind(Enum):
    UNIVERSAL = "Universal"
    EXISTENTIAL = "Existential"


class UnaryOperatorKind(Enum):
    SINGLETON = "Singleton"
    POWER_SET = "PowerSet"
    BIG_UNION = "BigUnion"
    BIG_INTERSECTION = "BigIntersection"


class BinaryOperatorKind(Enum):
    UNION = "Union"
    INTERSECTION = "Intersection"
    DIFFERENCE = "Difference"
    PAIR_SET = "PairSet"


# =============================================================================
# Nodes
# =============================================================================


class Node:
    """Base class for syntax nodes."""

    @property
    def tag(self) -> str:
        """Display name of the node kind, used in error messages."""
        raise NotImplementedError

    @property
    def children(self) -> tuple[Node, ...]:
        return ()

    def with_children(self, *children: Node) -> Node:
        """Rebuild this node with new children of the same arity."""
        if children:
            raise AssertionError(f"{self.tag} takes no children, got {len(children)}")
        return self

    def __str__(self) -> str:
        from setsugar.core.printer import render

        return render(self)


@dataclass(frozen=True)
class Constant(Node):
    """Named constant: ∅ or ω."""

    kind: ConstantKind

    @property
    def tag(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class Variable(Node):
    """Variable identified by a number.

    Low indices are the indexed variables v0, v1, ...; the top of the
    range encodes single-letter names (see letter_index).
    """

    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index <= MAX_INDEX:
            raise AssertionError(f"Variable index out of range: {self.index}")

    @property
    def tag(self) -> str:
        return "Variable"

    @classmethod
    def named(cls, letter: str) -> Variable:
        return cls(letter_index(letter))


@dataclass(frozen=True)
class Relation(Node):
    """Binary relation between two set terms: A ∈ B."""

    kind: RelationKind
    left: Node
    right: Node

    @property
    def tag(self) -> str:
        return self.kind.value

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.left, self.right)

    def with_children(self, *children: Node) -> Node:
        left, right = children
        return Relation(self.kind, left, right)


@dataclass(frozen=True)
class Negation(Node):
    """Negation: ¬φ."""

    operand: Node

    @property
    def tag(self) -> str:
        return "Negation"

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.operand,)

    def with_children(self, *children: Node) -> Node:
        (operand,) = children
        return Negation(operand)


@dataclass(frozen=True)
class Connective(Node):
    """Binary connective: (φ ∧ ψ)."""

    kind: ConnectiveKind
    left: Node
    right: Node

    @property
    def tag(self) -> str:
        return self.kind.value

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.left, self.right)

    def with_children(self, *children: Node) -> Node:
        left, right = children
        return Connective(self.kind, left, right)


@dataclass(frozen=True)
class Quantifier(Node):
    """Quantified formula: ∀x φ."""

    kind: QuantifierKind
    var: Variable
    body: Node

    def __post_init__(self) -> None:
        if not isinstance(self.var, Variable):
            raise AssertionError(f"Quantifier must bind a Variable, got {self.var.tag}")

    @property
    def tag(self) -> str:
        return self.kind.value

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.var, self.body)

    def with_children(self, *children: Node) -> Node:
        var, body = children
        return Quantifier(self.kind, var, body)  # type: ignore[arg-type]


@dataclass(frozen=True)
class UnaryOperator(Node):
    """Operator with one set operand: Pot(A), ⋃(A), ⋂(A), {A}."""

    kind: UnaryOperatorKind
    operand: Node

    @property
    def tag(self) -> str:
        return self.kind.value

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.operand,)

    def with_children(self, *children: Node) -> Node:
        (operand,) = children
        return UnaryOperator(self.kind, operand)


@dataclass(frozen=True)
class BinaryOperator(Node):
    """Operator with two set operands: A ∪ B, A ∩ B, A \\ B, {A, B}."""

    kind: BinaryOperatorKind
    left: Node
    right: Node

    @property
    def tag(self) -> str:
        return self.kind.value

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.left, self.right)

    def with_children(self, *children: Node) -> Node:
        left, right = children
        return BinaryOperator(self.kind, left, right)


@dataclass(frozen=True)
class Comprehension(Node):
    """Set-builder term: {y ∈ S | φ}.

    The membership is an Element relation whose left side is the variable
    bound by the comprehension.
    """

    membership: Relation
    predicate: Node

    def __post_init__(self) -> None:
        membership = self.membership
        if not (
            isinstance(membership, Relation)
            and membership.kind is RelationKind.ELEMENT
            and isinstance(membership.left, Variable)
        ):
            raise AssertionError(f"Malformed comprehension membership: {membership!r}")

    @property
    def tag(self) -> str:
        return "Comprehension"

    @property
    def var(self) -> Variable:
        return self.membership.left  # type: ignore[return-value]

    @property
    def domain(self) -> Node:
        return self.membership.right

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.membership, self.predicate)

    def with_children(self, *children: Node) -> Node:
        membership, predicate = children
        return Comprehension(membership, predicate)  # type: ignore[arg-type]


SET_LIKE = (Variable, Constant, UnaryOperator, BinaryOperator, Comprehension)
FORMULAS = (Relation, Negation, Connective, Quantifier)


# =============================================================================
# Constructors used by the rewrite rules
# =============================================================================


EMPTY_SET = Constant(ConstantKind.EMPTY_SET)
OMEGA = Constant(ConstantKind.OMEGA)


def element(left: Node, right: Node) -> Relation:
    return Relation(RelationKind.ELEMENT, left, right)


def equality(left: Node, right: Node) -> Relation:
    return Relation(RelationKind.EQUALITY, left, right)


def subset(left: Node, right: Node) -> Relation:
    return Relation(RelationKind.SUBSET, left, right)


def conjunction(left: Node, right: Node) -> Connective:
    return Connective(ConnectiveKind.CONJUNCTION, left, right)


def disjunction(left: Node, right: Node) -> Connective:
    return Connective(ConnectiveKind.DISJUNCTION, left, right)


def implication(left: Node, right: Node) -> Connective:
    return Connective(ConnectiveKind.IMPLICATION, left, right)


def biconditional(left: Node, right: Node) -> Connective:
    return Connective(ConnectiveKind.BICONDITIONAL, left, right)


def forall(var: Variable, body: Node) -> Quantifier:
    return Quantifier(QuantifierKind.UNIVERSAL, var, body)


def exists(var: Variable, body: Node) -> Quantifier:
    return Quantifier(QuantifierKind.EXISTENTIAL, var, body)


# =============================================================================
# Queries
# =============================================================================


def is_set_like(node: Node) -> bool:
    return isinstance(node, SET_LIKE)


def is_formula(node: Node) -> bool:
    return isinstance(node, FORMULAS)


def walk(node: Node) -> Iterator[Node]:
    """Yield every node of the tree in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def collect_indices(node: Node) -> set[int]:
    """Identifiers of every variable occurring anywhere in the tree."""
    return {n.index for n in walk(node) if isinstance(n, Variable)}


def is_primitive(node: Node, *, allow_constants: bool = False) -> bool:
    """True if only membership, equality, connectives, quantifiers and
    variables occur (and constants, when allowed)."""
    for n in walk(node):
        match n:
            case Variable() | Negation() | Connective() | Quantifier():
                continue
            case Relation(kind=RelationKind.EQUALITY | RelationKind.ELEMENT):
                continue
            case Constant() if allow_constants:
                continue
            case _:
                return False
    return True


def substitute(node: Node, mapping: dict[int, int]) -> Node:
    """Rename variables everywhere, bound occurrences included."""
    match node:
        case Variable(index):
            if index in mapping:
                return Variable(mapping[index])
            return node
        case _:
            if not node.children:
                return node
            return node.with_children(*(substitute(child, mapping) for child in node.children))


def substitute_free(node: Node, old: int, new: Variable) -> Node:
    """Replace free occurrences of variable `old` with `new`.

    Quantifiers and comprehensions rebinding `old` shadow it.
    """
    match node:
        case Variable(index):
            return new if index == old else node
        case Quantifier(kind, var, body):
            if var.index == old:
                return node
            return Quantifier(kind, var, substitute_free(body, old, new))
        case Comprehension(membership, predicate):
            domain = substitute_free(membership.right, old, new)
            if membership.left.index == old:  # type: ignore[attr-defined]
                return Comprehension(element(membership.left, domain), predicate)
            return Comprehension(
                element(membership.left, domain), substitute_free(predicate, old, new)
            )
        case _:
            if not node.children:
                return node
            return node.with_children(
                *(substitute_free(child, old, new) for child in node.children)
            )
