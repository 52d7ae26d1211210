"""
prereqparse - structured trees from free-text course prerequisites

Turns sentences such as "CS 101 with a minimum grade of C or (CS 102 and
MATH 201)" into an immutable boolean expression tree over course
references, grade clauses and free-text fallback clauses.

Architecture:
    prereqparse/
    ├── lexer/          # Priority-ordered tokenizer
    ├── parser/         # Recursive descent grammar and AST nodes
    ├── serialize.py    # Nested-object / JSON / text forms
    ├── api.py          # parse(), try_parse(), pretty_print()
    └── cli.py          # Command line front-end
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .api import parse, try_parse, pretty_print
from .lexer import Lexer, Token, TokenType, LexError, PrereqParseError
from .parser import (
    Parser, ParseError, Expression, Course, Group, And, Or, Freeform, walk
)
from .serialize import to_dict, from_dict, dumps, loads, to_text

__all__ = [
    # Entry points
    "parse",
    "try_parse",
    "pretty_print",

    # Pipeline stages
    "Lexer",
    "Token",
    "TokenType",
    "Parser",

    # Tree
    "Expression", "Course", "Group", "And", "Or", "Freeform", "walk",

    # Serialization
    "to_dict", "from_dict", "dumps", "loads", "to_text",

    # Errors
    "PrereqParseError",
    "LexError",
    "ParseError",

    # Version info
    "__version__",
    "__license__",
]
