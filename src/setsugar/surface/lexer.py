"""Lexer for sugared set-theory formulas.

Whitespace carries no meaning and is removed before matching; columns in
tokens and errors still refer to the original input.
"""

from __future__ import annotations

from setsugar.core.ast import DIGITS, INDEXED_VARIABLE_LETTER, SUBSCRIPT_DIGITS
from setsugar.surface.types import SYMBOL_CLASSES, LexerError, Token, TokenType
from setsugar.utils.location import Location


class Lexer:
    """Turns a formula string into a flat list of tokens.

    At each position the symbol classes are tried in a fixed order
    (relations, connectives, quantifiers, brackets, constants, unary
    operators, binary operators), taking the longest spelling inside a
    class. Failing that, `v` plus a run of digits is an indexed variable
    and any other ASCII letter a named variable.
    """

    # Longest spelling first within each class.
    CLASSES = tuple(
        (token_type, tuple(sorted(spellings, key=len, reverse=True)))
        for token_type, spellings in SYMBOL_CLASSES
    )

    def __init__(self, source: str, filename: str | None = None, line: int = 1):
        """Initialize lexer with one formula.

        Args:
            source: The formula text
            filename: Name of the file the formula came from, if any
            line: Line number of the formula in that file
        """
        self.source = source
        self.filename = filename
        self.line = line
        self._columns = [col for col, char in enumerate(source, start=1) if not char.isspace()]
        self._text = "".join(char for char in source if not char.isspace())

    def tokenize(self) -> list[Token]:
        """Convert the formula to a token list.

        Raises:
            LexerError: If a character starts no token
        """
        tokens: list[Token] = []
        pos = 0
        while pos < len(self._text):
            token = self._match_symbol(pos) or self._match_variable(pos)
            if token is None:
                raise LexerError(f"Unexpected character {self._text[pos]!r}", self._location(pos))
            tokens.append(token)
            pos += len(token.text)
        return tokens

    def _location(self, pos: int) -> Location:
        return Location(self.line, self._columns[pos], self.filename)

    def _match_symbol(self, pos: int) -> Token | None:
        for token_type, spellings in self.CLASSES:
            for spelling in spellings:
                if self._text.startswith(spelling, pos):
                    return Token(token_type, spelling, self._location(pos))
        return None

    def _match_variable(self, pos: int) -> Token | None:
        char = self._text[pos]
        if not (char.isascii() and char.isalpha()):
            return None
        end = pos + 1
        if char == INDEXED_VARIABLE_LETTER:
            while end < len(self._text) and self._text[end] in DIGITS + SUBSCRIPT_DIGITS:
                end += 1
        return Token(TokenType.VARIABLE, self._text[pos:end], self._location(pos))


# =============================================================================
# Convenience Functions
# =============================================================================


def lex(source: str, filename: str | None = None, line: int = 1) -> list[Token]:
    """Tokenize a formula.

    Example:
        >>> [t.type for t in lex("v0 ∈ x")]
        ['VARIABLE', 'RELATION', 'VARIABLE']
    """
    return Lexer(source, filename, line).tokenize()
