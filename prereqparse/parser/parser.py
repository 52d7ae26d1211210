"""
Recursive descent parser for prerequisite expressions.

Grammar, one token of lookahead, no backtracking:

    expression              := andExpression
    andExpression           := orExpression ( AND orExpression )*
    orExpression            := atomicBooleanExpression ( OR atomicBooleanExpression )*
    atomicBooleanExpression := parenthesisExpression | courseExpression | FREEFORM
    courseExpression        := COURSE_CODE GRADE_CLAUSE?
    parenthesisExpression   := LEFT_PAREN andExpression RIGHT_PAREN GRADE_CLAUSE?

Because orExpression is the operand of andExpression, "or" binds tighter
than "and": "A and B or C" is And(A, Or(B, C)). Downstream graph builders
rely on that shape, so keep it.
"""

import logging
from typing import Callable, Dict, List

from ..lexer.tokens import Token, TokenType
from .ast_nodes import Expression, Course, Group, Freeform, make_and, make_or
from .errors import (
    create_unexpected_token_error, create_unclosed_paren_error,
    create_trailing_tokens_error, create_nesting_too_deep_error
)

logger = logging.getLogger(__name__)


class Parser:
    """
    Prerequisite parser.

    Holds the token buffer and cursor for one parse. Build a fresh Parser
    for every token list; instances are not meant to be reused or shared
    between threads.
    """

    # Deepest parenthesis nesting accepted; keeps recursion well inside
    # the interpreter stack limit.
    MAX_NESTING_DEPTH = 100

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the lexer, ending with an EOF token
        """
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token list must end with an EOF token")
        self.tokens = tokens
        self.current = 0
        self.depth = 0

    def parse(self) -> Expression:
        """
        Parse the whole token list into an expression tree.

        Raises:
            ParseError: On the first token that does not fit the grammar
        """
        result = self._parse_and_expression()
        if not self._is_at_end():
            raise create_trailing_tokens_error(self._peek())
        logger.debug("parsed %d tokens into %s", len(self.tokens), result.node_type.value)
        return result

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def _parse_and_expression(self) -> Expression:
        operands = [self._parse_or_expression()]
        while self._match(TokenType.AND):
            operands.append(self._parse_or_expression())
        return make_and(operands)

    def _parse_or_expression(self) -> Expression:
        operands = [self._parse_atomic_expression()]
        while self._match(TokenType.OR):
            operands.append(self._parse_atomic_expression())
        return make_or(operands)

    def _parse_atomic_expression(self) -> Expression:
        """Dispatch on the lookahead token; the alternatives never overlap."""
        rule = self.ATOMIC_RULES.get(self._peek().type)
        if rule is None:
            raise create_unexpected_token_error(tuple(self.ATOMIC_RULES), self._peek())
        return rule(self)

    def _parse_parenthesis_expression(self) -> Expression:
        open_paren = self._advance()  # Consume (
        if self.depth >= self.MAX_NESTING_DEPTH:
            raise create_nesting_too_deep_error(self.MAX_NESTING_DEPTH, open_paren)

        self.depth += 1
        try:
            inner = self._parse_and_expression()
        finally:
            self.depth -= 1

        if not self._check(TokenType.RIGHT_PAREN):
            if self._is_at_end():
                raise create_unclosed_paren_error(open_paren.location, self._peek())
            raise create_unexpected_token_error(TokenType.RIGHT_PAREN, self._peek())
        self._advance()  # Consume )

        return Group(inner, self._parse_optional_grade())

    def _parse_course_expression(self) -> Expression:
        code = self._consume(TokenType.COURSE_CODE).lexeme
        return Course(code, self._parse_optional_grade())

    def _parse_freeform(self) -> Expression:
        return Freeform(self._consume(TokenType.FREEFORM).lexeme)

    def _parse_optional_grade(self) -> str:
        if self._check(TokenType.GRADE_CLAUSE):
            return self._advance().lexeme
        return ""

    # Alternatives of atomicBooleanExpression, in priority order
    ATOMIC_RULES: Dict[TokenType, Callable[['Parser'], Expression]] = {
        TokenType.LEFT_PAREN: _parse_parenthesis_expression,
        TokenType.COURSE_CODE: _parse_course_expression,
        TokenType.FREEFORM: _parse_freeform,
    }

    # ------------------------------------------------------------------
    # Token cursor helpers
    # ------------------------------------------------------------------

    def _match(self, token_type: TokenType) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._peek()
        if not self._is_at_end():
            self.current += 1
        return token

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        """Return current token without consuming."""
        return self.tokens[self.current]

    def _consume(self, token_type: TokenType) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()
        raise create_unexpected_token_error(token_type, self._peek())


def parse_tokens(tokens: List[Token]) -> Expression:
    """Convenience function to parse a token list with a fresh Parser."""
    return Parser(tokens).parse()
