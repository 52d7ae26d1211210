"""
Public entry points: text in, expression tree out.

Every call builds its own Lexer and Parser, so parse() is safe to call
from many threads at once; only the read-only lexicon is shared.
"""

import logging
import sys
from typing import Optional, TextIO

from .lexer.lexer import Lexer
from .lexer.errors import PrereqParseError
from .parser.parser import Parser
from .parser.ast_nodes import Expression
from .serialize import dumps

logger = logging.getLogger(__name__)


def parse(text: str, source: str = "<input>") -> Expression:
    """
    Parse a prerequisite description into an expression tree.

    Args:
        text: Free-text prerequisite, e.g. "CS 101 or (CS 102 and MATH 201)"
        source: Name of the input, shown in diagnostics

    Returns:
        The complete expression tree

    Raises:
        LexError: If some part of the text matches no lexical rule
        ParseError: If the tokens do not fit the grammar
    """
    tokens = Lexer(text, source).tokenize()
    return Parser(tokens).parse()


def try_parse(text: str, source: str = "<input>") -> Optional[Expression]:
    """Like ``parse`` but returns None for unparseable text and logs why."""
    try:
        return parse(text, source)
    except PrereqParseError as e:
        logger.warning("could not parse prerequisite %r: %s", text, e.diagnostic.message)
        return None


def pretty_print(text: str, stream: Optional[TextIO] = None) -> Expression:
    """
    Parse ``text`` and write it along with the indented JSON form of the tree.

    Debugging aid only; the output format is not stable.
    """
    stream = stream if stream is not None else sys.stdout
    print(text, file=stream)
    result = parse(text)
    print(dumps(result, indent=2), file=stream)
    return result
