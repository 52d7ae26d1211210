"""
Token definitions for the prerequisite lexer.

The lexicon is an ordered table: at every input position the lexer tries
each rule in turn and the first one that matches wins. Order matters here
more than in most lexers, because the free-text rule would happily swallow
keywords, course codes and grade phrases if it were tried any earlier.
"""

import re
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple


class TokenType(Enum):
    """Token types emitted by the lexer."""

    EOF = auto()                    # End of input

    # Connectives
    AND = auto()                    # and
    OR = auto()                     # or

    # Grouping
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )

    # Payload
    COURSE_CODE = auto()            # CS 101, MATH 2A10
    GRADE_CLAUSE = auto()           # with a minimum grade of C or better
    FREEFORM = auto()               # permission of instructor


@dataclass(frozen=True)
class SourceLocation:
    """A position in the input text, used for diagnostics."""
    source: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.source}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.source!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """A lexical token: its type, the raw matched text and where it starts."""
    type: TokenType
    lexeme: str
    location: SourceLocation

    def __str__(self) -> str:
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.location!r})"

    @property
    def is_connective(self) -> bool:
        return self.type in (TokenType.AND, TokenType.OR)


@dataclass(frozen=True)
class LexRule:
    """
    One entry of the lexicon.

    A rule either has a compiled ``pattern`` anchored at the current
    position, or (for the free-text fallback) no pattern at all and is
    handled by a direct scan. ``token_type`` is None for skipped input.
    """
    name: str
    token_type: Optional[TokenType]
    pattern: Optional[Pattern[str]]

    @property
    def skipped(self) -> bool:
        return self.token_type is None


# Substrings a free-text run may never contain. Line breaks are ordinary
# characters here, so wrapped catalog text stays a single run.
FREEFORM_STOPS: Tuple[str, ...] = (" and ", " or ", "(", ")")

GRADE_PATTERN = (
    r"with a (?:minimum )*grade (?:of )*[ABC]-*\+*(?: or (?:higher|better))*"
)

COURSE_PATTERN = r"[A-Z]+ [0-9][A-Z0-9][0-9]+"

# Priority-ordered lexicon. Built once at import, never mutated.
LEXICON: Tuple[LexRule, ...] = (
    LexRule("WhiteSpace", None, re.compile(r"\s+")),
    LexRule("Comma", None, re.compile(r",")),
    LexRule("And", TokenType.AND, re.compile(r"and")),
    LexRule("Or", TokenType.OR, re.compile(r"or")),
    LexRule("CourseCode", TokenType.COURSE_CODE, re.compile(COURSE_PATTERN)),
    LexRule("GradeClause", TokenType.GRADE_CLAUSE, re.compile(GRADE_PATTERN)),
    LexRule("Freeform", TokenType.FREEFORM, None),
    LexRule("LParen", TokenType.LEFT_PAREN, re.compile(r"\(")),
    LexRule("RParen", TokenType.RIGHT_PAREN, re.compile(r"\)")),
)

# Human readable names used in diagnostics
TOKEN_DESCRIPTIONS = {
    TokenType.EOF: "end of input",
    TokenType.AND: "'and'",
    TokenType.OR: "'or'",
    TokenType.LEFT_PAREN: "'('",
    TokenType.RIGHT_PAREN: "')'",
    TokenType.COURSE_CODE: "course code",
    TokenType.GRADE_CLAUSE: "grade clause",
    TokenType.FREEFORM: "free text",
}
