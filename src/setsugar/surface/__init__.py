"""Surface syntax: lexer and parser for sugared formulas."""

from setsugar.surface.lexer import Lexer, lex
from setsugar.surface.parser import ParseError, Parser, parse, parse_formula
from setsugar.surface.types import LexerError, Token, TokenType

__all__ = [
    # Lexer
    "Lexer",
    "LexerError",
    "Token",
    "TokenType",
    "lex",
    # Parser
    "Parser",
    "ParseError",
    "parse",
    "parse_formula",
]
