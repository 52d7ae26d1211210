"""
Prerequisite lexer - splits a prerequisite sentence into tokens.

Each position is matched against LEXICON in order, first match wins.
Whitespace and commas are consumed without producing tokens. The
free-text rule is a plain scan for the nearest stop substring instead
of a per-character lookahead regex, which gets slow on long inputs.
"""

import logging
from typing import List, Optional, Tuple

from .tokens import Token, TokenType, SourceLocation, LexRule, LEXICON, FREEFORM_STOPS
from .errors import create_no_match_error

logger = logging.getLogger(__name__)


class Lexer:
    """
    Prerequisite lexical analyzer.

    A Lexer holds the cursor for a single input, so create a new one for
    every string. The lexicon itself is shared and read-only.
    """

    def __init__(self, text: str, source: str = "<input>"):
        """
        Initialize the lexer with the text to tokenize.

        Args:
            text: Free-text prerequisite description
            source: Name of the input for error reporting
        """
        self.text = text
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire input.

        Returns:
            List of tokens ending with an EOF token

        Raises:
            LexError: If no rule matches at some position
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []

        while self.pos < len(self.text):
            token = self._next_token()
            if token is not None:
                self.tokens.append(token)

        self.tokens.append(Token(TokenType.EOF, "", self._location()))
        logger.debug("tokenized %d chars into %d tokens", len(self.text), len(self.tokens))
        return self.tokens

    def _next_token(self) -> Optional[Token]:
        """Match one lexicon rule at the cursor; None if the match was skipped."""
        location = self._location()

        for rule in LEXICON:
            length = self._match_rule(rule)
            if not length:
                continue

            lexeme = self.text[self.pos:self.pos + length]
            self._advance_by(length)
            if rule.skipped:
                return None
            return Token(rule.token_type, lexeme, location)

        raise create_no_match_error(self.text[self.pos:], location)

    def _match_rule(self, rule: LexRule) -> int:
        """Length of the match for ``rule`` at the cursor, 0 if none."""
        if rule.pattern is None:
            return self._scan_freeform()
        match = rule.pattern.match(self.text, self.pos)
        if match is None:
            return 0
        return match.end() - match.start()

    def _scan_freeform(self) -> int:
        """Length of the longest run at the cursor containing no stop substring."""
        end = len(self.text)
        for stop in FREEFORM_STOPS:
            # Only stops starting before the current end can shorten the run
            found = self.text.find(stop, self.pos, end + len(stop) - 1)
            if found != -1 and found < end:
                end = found
        return end - self.pos

    def _location(self) -> SourceLocation:
        return SourceLocation(self.source, self.line, self.column, self.pos)

    def _advance_by(self, count: int):
        """Advance position by ``count`` characters, updating line/column."""
        for char in self.text[self.pos:self.pos + count]:
            if char == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.pos += count


def tokenize_string(text: str, source: str = "<input>") -> List[Token]:
    """
    Convenience function to tokenize a prerequisite string.

    Raises:
        LexError: If lexing fails
    """
    return Lexer(text, source).tokenize()


def token_summary(tokens: List[Token]) -> List[Tuple[str, str]]:
    """(type name, lexeme) pairs, handy for debugging and tests."""
    return [(token.type.name, token.lexeme) for token in tokens if token.type != TokenType.EOF]
