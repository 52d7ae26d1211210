"""
Error handling for the prerequisite parser.

A ParseError is raised on the first token that does not fit the grammar.
There is no recovery: the caller gets either a whole tree or an error.
"""

from typing import Optional, List, Union, Collection

from ..lexer.tokens import Token, TokenType, SourceLocation, TOKEN_DESCRIPTIONS
from ..lexer.errors import PrereqParseError


class ParseError(PrereqParseError):
    """
    Raised when the token sequence violates the grammar.

    Carries what the grammar expected, the token actually found and its
    location. Named ParseError so it does not shadow the builtin SyntaxError.
    """

    def __init__(
        self,
        message: str,
        expected: str,
        found: Token,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(
            message,
            found.location,
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.expected = expected
        self.found = found


PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Unexpected end of input",
    "P003": "Unclosed parenthesis",
    "P004": "Trailing input after expression",
    "P005": "Parentheses nested too deeply",
}


def describe_expected(expected: Union[TokenType, str, Collection[TokenType]]) -> str:
    """Render an expected construct for a message."""
    if isinstance(expected, TokenType):
        return TOKEN_DESCRIPTIONS[expected]
    if isinstance(expected, str):
        return expected
    return " or ".join(TOKEN_DESCRIPTIONS[token_type] for token_type in expected)


def describe_found(found: Token) -> str:
    if found.type == TokenType.EOF:
        return TOKEN_DESCRIPTIONS[TokenType.EOF]
    return f"{TOKEN_DESCRIPTIONS[found.type]} {found.lexeme!r}"


def create_unexpected_token_error(expected: Union[TokenType, str, Collection[TokenType]],
                                  found: Token) -> ParseError:
    """Create an error for an unexpected token, or for running out of tokens."""
    if found.type == TokenType.EOF:
        return create_unexpected_eof_error(expected, found)

    expected_str = describe_expected(expected)
    found_str = describe_found(found)
    suggestions = []
    if found.type == TokenType.RIGHT_PAREN:
        suggestions.append("Remove the unmatched ')' or add a matching '('")
    elif found.is_connective:
        suggestions.append(f"Add an operand before '{found.lexeme}'")

    return ParseError(
        message=f"Expected {expected_str}, found {found_str}",
        expected=expected_str,
        found=found,
        code="P001",
        help_text=f"The parser expected to see {expected_str} at this position.",
        suggestions=suggestions
    )


def create_unexpected_eof_error(expected: Union[TokenType, str, Collection[TokenType]],
                                found: Token) -> ParseError:
    """Create an error for input that ends while more tokens are required."""
    expected_str = describe_expected(expected)
    return ParseError(
        message=f"Unexpected end of input, expected {expected_str}",
        expected=expected_str,
        found=found,
        code="P002",
        help_text=f"The input ended while the parser still expected {expected_str}.",
        suggestions=["Check for a dangling 'and'/'or'", "Check for an empty input"]
    )


def create_unclosed_paren_error(open_location: SourceLocation, found: Token) -> ParseError:
    """Create an error for a '(' that is never closed."""
    return ParseError(
        message=f"Unclosed parenthesis, found {describe_found(found)}",
        expected=TOKEN_DESCRIPTIONS[TokenType.RIGHT_PAREN],
        found=found,
        code="P003",
        help_text=f"The '(' at {open_location} was never closed.",
        suggestions=["Add a closing ')'"]
    )


def create_trailing_tokens_error(found: Token) -> ParseError:
    """Create an error for tokens left over after a complete expression."""
    suggestions = []
    if found.type == TokenType.RIGHT_PAREN:
        suggestions.append("Remove the unmatched ')' or add a matching '('")
    elif found.type == TokenType.GRADE_CLAUSE:
        suggestions.append("A grade clause must follow a course code or ')'")
    return ParseError(
        message=f"Unexpected {describe_found(found)} after a complete expression",
        expected=TOKEN_DESCRIPTIONS[TokenType.EOF],
        found=found,
        code="P004",
        help_text="A complete expression was parsed but input remains.",
        suggestions=suggestions
    )


def create_nesting_too_deep_error(limit: int, found: Token) -> ParseError:
    """Create an error for a '(' that would exceed the nesting limit."""
    return ParseError(
        message=f"Parentheses nested more than {limit} levels deep",
        expected=f"at most {limit} nested groups",
        found=found,
        code="P005",
        help_text="Real prerequisites never nest this deeply; the text is likely garbled.",
        suggestions=["Remove redundant parentheses"]
    )
