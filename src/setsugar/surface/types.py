"""Token definitions for the formula lexer.

Every token records the literal text it matched and where it started.
The symbol tables map each spelling (canonical symbol first, ASCII and
LaTeX-style fallbacks after) to the concept it denotes.
"""

from __future__ import annotations

from dataclasses import dataclass

from setsugar.core.ast import (
    BinaryOperatorKind,
    ConnectiveKind,
    ConstantKind,
    QuantifierKind,
    RelationKind,
    UnaryOperatorKind,
)
from setsugar.core.errors import SetSugarError
from setsugar.utils.location import Location


class LexerError(SetSugarError):
    """Unrecognised character in the input."""


class TokenType:
    """Token categories.

    Plain string constants so tokens can be compared against them directly.
    """

    BRACKET = "BRACKET"
    RELATION = "RELATION"
    CONNECTIVE = "CONNECTIVE"
    QUANTIFIER = "QUANTIFIER"
    UNARY_OPERATOR = "UNARY_OPERATOR"
    BINARY_OPERATOR = "BINARY_OPERATOR"
    VARIABLE = "VARIABLE"
    CONSTANT = "CONSTANT"


# Marker for the unary connective in CONNECTIVE_SYMBOLS.
NEGATION = "Negation"

RELATION_SYMBOLS: dict[str, RelationKind] = {
    "=": RelationKind.EQUALITY,
    "∈": RelationKind.ELEMENT,
    "\\in": RelationKind.ELEMENT,
    "⊆": RelationKind.SUBSET,
    "\\subseteq": RelationKind.SUBSET,
    "≠": RelationKind.NOT_EQUAL,
    "!=": RelationKind.NOT_EQUAL,
    "\\neq": RelationKind.NOT_EQUAL,
    "∉": RelationKind.NOT_ELEMENT,
    "\\notin": RelationKind.NOT_ELEMENT,
    "⊈": RelationKind.NOT_SUBSET,
    "\\nsubseteq": RelationKind.NOT_SUBSET,
}

CONNECTIVE_SYMBOLS: dict[str, ConnectiveKind | str] = {
    "¬": NEGATION,
    "!": NEGATION,
    "~": NEGATION,
    "\\lnot": NEGATION,
    "∧": ConnectiveKind.CONJUNCTION,
    "&&": ConnectiveKind.CONJUNCTION,
    "&": ConnectiveKind.CONJUNCTION,
    "\\land": ConnectiveKind.CONJUNCTION,
    "∨": ConnectiveKind.DISJUNCTION,
    "||": ConnectiveKind.DISJUNCTION,
    "\\lor": ConnectiveKind.DISJUNCTION,
    "→": ConnectiveKind.IMPLICATION,
    "->": ConnectiveKind.IMPLICATION,
    "\\rightarrow": ConnectiveKind.IMPLICATION,
    "↔": ConnectiveKind.BICONDITIONAL,
    "<->": ConnectiveKind.BICONDITIONAL,
    "\\leftrightarrow": ConnectiveKind.BICONDITIONAL,
}

QUANTIFIER_SYMBOLS: dict[str, QuantifierKind] = {
    "∀": QuantifierKind.UNIVERSAL,
    "\\forall": QuantifierKind.UNIVERSAL,
    "∃": QuantifierKind.EXISTENTIAL,
    "\\exists": QuantifierKind.EXISTENTIAL,
}

BRACKET_SYMBOLS: tuple[str, ...] = ("(", ")", "{", "}", "|", ",")

CONSTANT_SYMBOLS: dict[str, ConstantKind] = {
    "∅": ConstantKind.EMPTY_SET,
    "0": ConstantKind.EMPTY_SET,
    "\\emptyset": ConstantKind.EMPTY_SET,
    "ω": ConstantKind.OMEGA,
    "\\omega": ConstantKind.OMEGA,
}

UNARY_OPERATOR_SYMBOLS: dict[str, UnaryOperatorKind] = {
    "Pot": UnaryOperatorKind.POWER_SET,
    "\\powerset": UnaryOperatorKind.POWER_SET,
    "⋃": UnaryOperatorKind.BIG_UNION,
    "Vereinigung": UnaryOperatorKind.BIG_UNION,
    "\\bigcup": UnaryOperatorKind.BIG_UNION,
    "⋂": UnaryOperatorKind.BIG_INTERSECTION,
    "Durchschnitt": UnaryOperatorKind.BIG_INTERSECTION,
    "\\bigcap": UnaryOperatorKind.BIG_INTERSECTION,
}

BINARY_OPERATOR_SYMBOLS: dict[str, BinaryOperatorKind] = {
    "∪": BinaryOperatorKind.UNION,
    "\\cup": BinaryOperatorKind.UNION,
    "∩": BinaryOperatorKind.INTERSECTION,
    "\\cap": BinaryOperatorKind.INTERSECTION,
    "\\": BinaryOperatorKind.DIFFERENCE,
    "∖": BinaryOperatorKind.DIFFERENCE,
    "\\setminus": BinaryOperatorKind.DIFFERENCE,
}

# Tried in this order at every position.
SYMBOL_CLASSES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (TokenType.RELATION, tuple(RELATION_SYMBOLS)),
    (TokenType.CONNECTIVE, tuple(CONNECTIVE_SYMBOLS)),
    (TokenType.QUANTIFIER, tuple(QUANTIFIER_SYMBOLS)),
    (TokenType.BRACKET, BRACKET_SYMBOLS),
    (TokenType.CONSTANT, tuple(CONSTANT_SYMBOLS)),
    (TokenType.UNARY_OPERATOR, tuple(UNARY_OPERATOR_SYMBOLS)),
    (TokenType.BINARY_OPERATOR, tuple(BINARY_OPERATOR_SYMBOLS)),
)


@dataclass(frozen=True)
class Token:
    """A classified piece of input."""

    type: str
    text: str
    location: Location

    def __str__(self) -> str:
        return f"{self.type}({self.text!r})"
