"""Recursive descent parser for sugared set-theory formulas."""

from __future__ import annotations

from setsugar.core.ast import (
    DIGITS,
    INDEXED_VARIABLE_LETTER,
    LETTER_RANGE_START,
    SUBSCRIPT_DIGITS,
    BinaryOperator,
    BinaryOperatorKind,
    Comprehension,
    Connective,
    Constant,
    Negation,
    Node,
    Quantifier,
    Relation,
    RelationKind,
    UnaryOperator,
    UnaryOperatorKind,
    Variable,
    is_formula,
    is_set_like,
)
from setsugar.core.errors import SetSugarError
from setsugar.surface.lexer import lex
from setsugar.surface.types import (
    BINARY_OPERATOR_SYMBOLS,
    CONNECTIVE_SYMBOLS,
    CONSTANT_SYMBOLS,
    NEGATION,
    QUANTIFIER_SYMBOLS,
    RELATION_SYMBOLS,
    UNARY_OPERATOR_SYMBOLS,
    Token,
    TokenType,
)
from setsugar.utils.location import Location

Item = Token | Node

_PLAIN_DIGITS = str.maketrans(SUBSCRIPT_DIGITS, DIGITS)


class ParseError(SetSugarError):
    """Malformed formula."""


class Parser:
    """Recursive descent parser over a token list.

    Variable and constant tokens are folded into leaf nodes up front; the
    parser then walks the resulting items with an index cursor.

    Grammar:
        formula  ::= QUANT variable formula
                   | NEG formula
                   | "(" formula CONN formula ")"
                   | "(" formula ")"
                   | setterm REL setterm

        setterm  ::= setatom (BINOP setatom)*

        setatom  ::= VARIABLE | CONSTANT
                   | UNOP "(" setterm ")"
                   | "{" setterm "," setterm "}"
                   | "{" setterm "}"
                   | "{" VARIABLE "∈" setterm "|" formula "}"
                   | "(" setterm ")"
    """

    def __init__(self, tokens: list[Token]):
        self.items, self.locations = self._fold_leaves(tokens)
        self.pos = 0
        if tokens:
            last = tokens[-1]
            self._end = Location(
                last.location.line, last.location.column + len(last.text), last.location.file
            )
        else:
            self._end = None

    # =====================================================================
    # Preprocessing
    # =====================================================================

    @staticmethod
    def _fold_leaves(tokens: list[Token]) -> tuple[list[Item], list[Location]]:
        """Replace variable and constant tokens with leaf nodes."""
        items: list[Item] = []
        for token in tokens:
            match token.type:
                case TokenType.CONSTANT:
                    items.append(Constant(CONSTANT_SYMBOLS[token.text]))
                case TokenType.VARIABLE:
                    items.append(Parser._variable(token))
                case _:
                    items.append(token)
        return items, [token.location for token in tokens]

    @staticmethod
    def _variable(token: Token) -> Variable:
        text = token.text
        if len(text) == 1:
            return Variable.named(text)
        assert text[0] == INDEXED_VARIABLE_LETTER
        index = int(text[1:].translate(_PLAIN_DIGITS))
        if index >= LETTER_RANGE_START:
            raise ParseError(f"Variable index too large: {text}", token.location)
        return Variable(index)

    # =====================================================================
    # Cursor
    # =====================================================================

    def _current(self) -> Item | None:
        if self.pos < len(self.items):
            return self.items[self.pos]
        return None

    def _location(self) -> Location | None:
        if self.pos < len(self.locations):
            return self.locations[self.pos]
        return self._end

    def _advance(self) -> Item:
        item = self.items[self.pos]
        self.pos += 1
        return item

    def _take(self) -> Token:
        item = self._advance()
        assert isinstance(item, Token)
        return item

    def _at(self, token_type: str, text: str | None = None) -> bool:
        item = self._current()
        return (
            isinstance(item, Token)
            and item.type == token_type
            and (text is None or item.text == text)
        )

    def _at_binary_connective(self) -> bool:
        item = self._current()
        return self._at(TokenType.CONNECTIVE) and CONNECTIVE_SYMBOLS[item.text] != NEGATION

    def _expect_bracket(self, text: str, context: str) -> None:
        if self._at(TokenType.BRACKET, text):
            self._advance()
            return
        item = self._current()
        if item is None:
            raise ParseError(f"Unexpected end of input: missing {text!r} {context}", self._location())
        raise ParseError(f"Expected {text!r} {context}, got {_describe(item)}", self._location())

    def _require_operand(self, context: str) -> None:
        if self._current() is None:
            raise ParseError(f"{context} at the end of the formula", self._location())

    # =====================================================================
    # Formulas
    # =====================================================================

    def parse(self) -> Node:
        """Parse the whole token list into one formula."""
        if not self.items:
            raise ParseError("Unexpected end of input: empty formula")
        node = self.parse_expression()
        item = self._current()
        if item is not None:
            raise ParseError(
                f"Unexpected {_describe(item)} after complete formula", self._location()
            )
        if not is_formula(node):
            raise ParseError(f"Expected a formula, got {node.tag}", self.locations[0])
        return node

    def parse_expression(self) -> Node:
        """Parse a formula or a set term, whichever starts here."""
        location = self._location()
        node = self.parse_primary()

        if self._at(TokenType.BINARY_OPERATOR) or self._at(TokenType.RELATION):
            if not is_set_like(node):
                token = self._current()
                raise ParseError(
                    f"{token.text!r} expects a set on the left, got {node.tag}",
                    location,
                )
            node = self._parse_operator_chain(node)

        if self._at(TokenType.RELATION):
            token = self._take()
            kind = RELATION_SYMBOLS[token.text]
            right = self._parse_set_term(f"Relation {token.text!r}")
            node = Relation(kind, node, right)
        return node

    def parse_formula(self, context: str) -> Node:
        location = self._location()
        node = self.parse_expression()
        if not is_formula(node):
            raise ParseError(f"Expected a formula {context}, got {node.tag}", location)
        return node

    def parse_primary(self) -> Node:
        """Parse the construct introduced by the item at the cursor."""
        item = self._current()
        location = self._location()
        if item is None:
            raise ParseError("Unexpected end of input", location)
        if isinstance(item, Node):
            self._advance()
            return item

        match item.type:
            case TokenType.QUANTIFIER:
                return self._parse_quantifier()
            case TokenType.CONNECTIVE if CONNECTIVE_SYMBOLS[item.text] == NEGATION:
                self._advance()
                self._require_operand(f"Negation {item.text!r}")
                return Negation(self.parse_formula(f"after {item.text!r}"))
            case TokenType.CONNECTIVE:
                raise ParseError(
                    f"Connective {item.text!r} must stand between two formulas in parentheses",
                    location,
                )
            case TokenType.BRACKET if item.text == "(":
                return self._parse_parenthesized()
            case TokenType.BRACKET if item.text == "{":
                return self._parse_braces()
            case TokenType.UNARY_OPERATOR:
                return self._parse_unary_operator()
            case TokenType.RELATION:
                raise ParseError(f"Relation {item.text!r} has no left operand", location)
            case TokenType.BINARY_OPERATOR:
                raise ParseError(f"Operator {item.text!r} has no left operand", location)
            case TokenType.BRACKET:
                raise ParseError(f"Unexpected {item.text!r}", location)
            case _:
                raise AssertionError(f"Unhandled token {item}")

    def _parse_quantifier(self) -> Node:
        token = self._take()
        kind = QUANTIFIER_SYMBOLS[token.text]
        var = self._current()
        if not isinstance(var, Variable):
            found = "end of input" if var is None else _describe(var)
            raise ParseError(
                f"Quantifier {token.text!r} expects a variable, got {found}",
                self._location(),
            )
        self._advance()
        self._require_operand(f"Quantifier {token.text!r}")
        body = self.parse_formula(f"as body of {token.text}")
        return Quantifier(kind, var, body)

    def _parse_parenthesized(self) -> Node:
        self._advance()
        location = self._location()
        inner = self.parse_expression()

        if self._at_binary_connective():
            token = self._take()
            kind = CONNECTIVE_SYMBOLS[token.text]
            if not is_formula(inner):
                raise ParseError(
                    f"Connective {token.text!r} expects a formula on the left, got {inner.tag}",
                    location,
                )
            self._require_operand(f"Connective {token.text!r}")
            right = self.parse_formula(f"after {token.text}")
            self._expect_bracket(")", f"to close {token.text}")
            return Connective(kind, inner, right)

        self._expect_bracket(")", "to close '('")
        return inner

    def _parse_braces(self) -> Node:
        self._advance()
        location = self._location()
        first = self.parse_expression()

        if self._at(TokenType.BRACKET, ","):
            self._advance()
            _check_set(first, "Pair set", location)
            second = self._parse_set_term("Pair set")
            self._expect_bracket("}", "to close pair set")
            return BinaryOperator(BinaryOperatorKind.PAIR_SET, first, second)

        if self._at(TokenType.BRACKET, "|"):
            self._advance()
            if not (
                isinstance(first, Relation)
                and first.kind is RelationKind.ELEMENT
                and isinstance(first.left, Variable)
            ):
                raise ParseError(
                    f"Comprehension expects 'variable ∈ set' before '|', got {first.tag}", location
                )
            self._require_operand("Comprehension '|'")
            predicate = self.parse_formula("after '|'")
            self._expect_bracket("}", "to close comprehension")
            return Comprehension(first, predicate)

        _check_set(first, "Singleton", location)
        self._expect_bracket("}", "to close '{'")
        return UnaryOperator(UnaryOperatorKind.SINGLETON, first)

    def _parse_unary_operator(self) -> Node:
        token = self._take()
        kind = UNARY_OPERATOR_SYMBOLS[token.text]
        self._expect_bracket("(", f"after {token.text}")
        operand = self._parse_set_term(f"Operator {token.text!r}")
        self._expect_bracket(")", f"to close {token.text}(")
        return UnaryOperator(kind, operand)

    # =====================================================================
    # Set terms
    # =====================================================================

    def _parse_set_term(self, context: str) -> Node:
        self._require_operand(context)
        location = self._location()
        node = self.parse_primary()
        _check_set(node, context, location)
        return self._parse_operator_chain(node)

    def _parse_operator_chain(self, left: Node) -> Node:
        """Left-associative chain: A ∪ B ∩ C is (A ∪ B) ∩ C."""
        while self._at(TokenType.BINARY_OPERATOR):
            token = self._take()
            kind = BINARY_OPERATOR_SYMBOLS[token.text]
            context = f"Operator {token.text!r}"
            self._require_operand(context)
            location = self._location()
            right = self.parse_primary()
            _check_set(right, context, location)
            left = BinaryOperator(kind, left, right)
        return left


def _check_set(node: Node, context: str, location: Location | None) -> None:
    if not is_set_like(node):
        raise ParseError(f"{context} expects a set operand, got {node.tag}", location)


def _describe(item: Item) -> str:
    if isinstance(item, Token):
        return repr(item.text)
    return item.tag


# =============================================================================
# Convenience Functions
# =============================================================================


def parse(tokens: list[Token]) -> Node:
    """Parse a token list into a formula."""
    return Parser(tokens).parse()


def parse_formula(source: str, filename: str | None = None, line: int = 1) -> Node:
    """Lex and parse one formula.

    Example:
        >>> str(parse_formula("x ∈ Pot(y)"))
        'x ∈ Pot(y)'
    """
    return Parser(lex(source, filename, line)).parse()
