"""
Error handling for the Neutron lexer.

Author: xwest
"""

from typing import Optional, List

from ..errors import NeutronError, ErrorKind
from .tokens import SourceLocation


class LexerError(NeutronError):
    """
    Exception raised when the lexer encounters a character it cannot use.

    Lexing stops at the first such character; there is no skip-and-continue.
    """

    kind = ErrorKind.LEXICAL

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(
            message,
            location,
            code=code,
            help_text=help_text,
            suggestions=suggestions,
        )


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Unterminated string literal",
}


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for an invalid character."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in Neutron source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    suggestions = []
    if char == '_':
        suggestions.append("Identifiers must start with a letter")
    elif char == '.':
        suggestions.append("Floating-point literals need digits on both sides of '.'")

    return LexerError(
        message=f"Unrecognized character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
        suggestions=suggestions or None
    )


def create_unterminated_string_error(location: SourceLocation) -> LexerError:
    """Create an error for an unterminated string literal."""
    return LexerError(
        message="Unterminated string literal",
        location=location,
        code="L002",
        help_text="String literals must be closed with a matching '\"'.",
        suggestions=["Add a closing '\"'", "Check for unescaped quotes in the string"]
    )
