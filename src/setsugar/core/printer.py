"""Render syntax trees back to concrete syntax.

The printed form uses the canonical symbols of the lexer, so parsing the
output of render() gives back the same tree.
"""

from __future__ import annotations

from setsugar.core.ast import (
    DIGITS,
    INDEXED_VARIABLE_LETTER,
    SUBSCRIPT_DIGITS,
    BinaryOperator,
    BinaryOperatorKind,
    Comprehension,
    Connective,
    ConnectiveKind,
    Constant,
    ConstantKind,
    Negation,
    Node,
    Quantifier,
    QuantifierKind,
    Relation,
    RelationKind,
    UnaryOperator,
    UnaryOperatorKind,
    Variable,
    index_letter,
    is_letter_index,
)

_TO_SUBSCRIPT = str.maketrans(DIGITS, SUBSCRIPT_DIGITS)

CONSTANT_SYMBOLS: dict[ConstantKind, str] = {
    ConstantKind.EMPTY_SET: "∅",
    ConstantKind.OMEGA: "ω",
}

RELATION_SYMBOLS: dict[RelationKind, str] = {
    RelationKind.EQUALITY: "=",
    RelationKind.ELEMENT: "∈",
    RelationKind.SUBSET: "⊆",
    RelationKind.NOT_EQUAL: "≠",
    RelationKind.NOT_ELEMENT: "∉",
    RelationKind.NOT_SUBSET: "⊈",
}

NEGATION_SYMBOL = "¬"

CONNECTIVE_SYMBOLS: dict[ConnectiveKind, str] = {
    ConnectiveKind.CONJUNCTION: "∧",
    ConnectiveKind.DISJUNCTION: "∨",
    ConnectiveKind.IMPLICATION: "→",
    ConnectiveKind.BICONDITIONAL: "↔",
}

QUANTIFIER_SYMBOLS: dict[QuantifierKind, str] = {
    QuantifierKind.UNIVERSAL: "∀",
    QuantifierKind.EXISTENTIAL: "∃",
}

# Prefix operators written as NAME(operand). Singleton uses braces.
UNARY_OPERATOR_SYMBOLS: dict[UnaryOperatorKind, str] = {
    UnaryOperatorKind.POWER_SET: "Pot",
    UnaryOperatorKind.BIG_UNION: "⋃",
    UnaryOperatorKind.BIG_INTERSECTION: "⋂",
}

# Infix operators. Pair sets use braces.
BINARY_OPERATOR_SYMBOLS: dict[BinaryOperatorKind, str] = {
    BinaryOperatorKind.UNION: "∪",
    BinaryOperatorKind.INTERSECTION: "∩",
    BinaryOperatorKind.DIFFERENCE: "\\",
}


def render_variable(index: int) -> str:
    """v₀, v₁₂, ... for indexed variables; the letter itself otherwise."""
    if is_letter_index(index):
        return index_letter(index)
    return INDEXED_VARIABLE_LETTER + str(index).translate(_TO_SUBSCRIPT)


def render(node: Node) -> str:
    """Render a (possibly partially desugared) tree."""
    match node:
        case Constant(kind):
            return CONSTANT_SYMBOLS[kind]
        case Variable(index):
            return render_variable(index)
        case Relation(kind, left, right):
            return f"{render(left)} {RELATION_SYMBOLS[kind]} {render(right)}"
        case Negation(operand):
            return f"{NEGATION_SYMBOL}{_render_operand(operand)}"
        case Connective():
            return _render_connective_chain(node)
        case Quantifier(kind, var, body):
            return f"{QUANTIFIER_SYMBOLS[kind]}{render(var)} {_render_operand(body)}"
        case UnaryOperator(UnaryOperatorKind.SINGLETON, operand):
            return f"{{{render(operand)}}}"
        case UnaryOperator(kind, operand):
            return f"{UNARY_OPERATOR_SYMBOLS[kind]}({render(operand)})"
        case BinaryOperator(BinaryOperatorKind.PAIR_SET, left, right):
            return f"{{{render(left)}, {render(right)}}}"
        case BinaryOperator():
            return _render_infix_chain(node)
        case Comprehension(membership, predicate):
            return f"{{{render(membership)} | {render(predicate)}}}"
        case _:
            raise AssertionError(f"Cannot render {node!r}")


def _render_operand(node: Node) -> str:
    # Relations under ¬ and quantifiers get parentheses: ¬(x ∈ y), ∀x (x ∈ y).
    if isinstance(node, Relation):
        return f"({render(node)})"
    return render(node)


def _is_infix(node: Node) -> bool:
    return isinstance(node, BinaryOperator) and node.kind is not BinaryOperatorKind.PAIR_SET


def _render_set_operand(node: Node) -> str:
    if _is_infix(node):
        return f"({render(node)})"
    return render(node)


# Left-leaning chains such as A ∪ B ∪ C, and the ∨ chains the union rule
# makes of them, are walked in a loop.


def _render_infix_chain(node: Node) -> str:
    links: list[tuple[BinaryOperatorKind, Node]] = []
    while _is_infix(node):
        links.append((node.kind, node.right))  # type: ignore[attr-defined]
        node = node.left  # type: ignore[attr-defined]
    text = render(node)
    for depth, (kind, right) in enumerate(reversed(links)):
        if depth:
            text = f"({text})"
        text = f"{text} {BINARY_OPERATOR_SYMBOLS[kind]} {_render_set_operand(right)}"
    return text


def _render_connective_chain(node: Node) -> str:
    links: list[tuple[ConnectiveKind, Node]] = []
    while isinstance(node, Connective):
        links.append((node.kind, node.right))
        node = node.left
    text = render(node)
    for kind, right in reversed(links):
        text = f"({text} {CONNECTIVE_SYMBOLS[kind]} {render(right)})"
    return text
