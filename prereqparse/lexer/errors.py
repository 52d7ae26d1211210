"""
Error handling for the prerequisite lexer.

Diagnostics are rendered the same way for lexer and parser errors so that
callers can show them next to the original text for manual correction.
"""

from typing import Optional, List, Tuple
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass(frozen=True)
class Diagnostic:
    """
    Why a prerequisite could not be parsed, pointing into the input.

    Rendered next to the original text so a catalog editor can fix it by hand.
    """
    message: str
    location: SourceLocation
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Tuple[str, ...] = ()

    def __str__(self) -> str:
        header = f"error[{self.code}]" if self.code else "error"
        result = f"{header}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"
        for suggestion in self.suggestions:
            result += f"  try: {suggestion}\n"

        return result


class PrereqParseError(Exception):
    """
    Base class for every error raised while turning text into a tree.

    Callers that only need to know "this text is not parseable" catch this.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.location = location
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            code=code,
            help_text=help_text,
            suggestions=tuple(suggestions or ())
        )

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexError(PrereqParseError):
    """Raised when no lexical rule matches at some input position."""

    def __init__(self, message: str, fragment: str, location: SourceLocation, **kwargs):
        super().__init__(message, location, **kwargs)
        self.fragment = fragment


LEXER_ERROR_CODES = {
    "L001": "No lexical rule matches",
}


def create_no_match_error(fragment: str, location: SourceLocation) -> LexError:
    """Create an error for input that none of the lexicon's rules accept."""
    preview = fragment if len(fragment) <= 20 else fragment[:20] + "..."
    return LexError(
        message=f"Unrecognized input: {preview!r}",
        fragment=fragment,
        location=location,
        code="L001",
        help_text="The text at this position is not a keyword, course code, "
                  "grade clause, parenthesis or free text.",
        suggestions=["Check for stray characters", "Remove empty parentheses or connectives"]
    )
