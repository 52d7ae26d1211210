"""
Prerequisite Lexer Package

Splits a free-text prerequisite description into connectives, parentheses,
course codes, grade clauses and free-text fallback tokens.
"""

from .tokens import Token, TokenType, SourceLocation, LEXICON
from .lexer import Lexer, tokenize_string
from .errors import Diagnostic, LexError, PrereqParseError

__all__ = [
    "Lexer",
    "tokenize_string",
    "Token",
    "TokenType",
    "SourceLocation",
    "LEXICON",
    "Diagnostic",
    "LexError",
    "PrereqParseError",
]
