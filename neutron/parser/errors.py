"""
Error handling for the Neutron parser.

Parsing stops at the first token that does not fit the grammar; there is
no resynchronisation and no partial tree.

Author: xwest
"""

from typing import Optional, List, Union

from ..errors import NeutronError, ErrorKind
from ..lexer.tokens import Token, TokenType, SourceLocation


class ParseError(NeutronError):
    """
    Exception raised when the parser encounters a syntax error.

    Contains the offending token alongside the diagnostic.
    """

    kind = ErrorKind.SYNTACTIC

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
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
        self.token = token


# Token types that have a fixed spelling, for readable messages
TOKEN_SPELLINGS = {
    TokenType.THEN: "'then'",
    TokenType.END: "'end'",
    TokenType.ASSIGN: "'='",
    TokenType.LEFT_PAREN: "'('",
    TokenType.RIGHT_PAREN: "')'",
    TokenType.COMMA: "','",
    TokenType.IDENTIFIER: "identifier",
    TokenType.EOF: "end of input",
}


def describe_token_type(token_type: TokenType) -> str:
    return TOKEN_SPELLINGS.get(token_type, token_type.name)


def describe_token(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    return f"{token.type.name} '{token.lexeme}'"


def suggest_missing_token(expected: TokenType) -> List[str]:
    """Suggest what token might be missing."""
    token_suggestions = {
        TokenType.THEN: ["Blocks open with 'then'"],
        TokenType.END: ["Close the block with 'end'"],
        TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
        TokenType.ASSIGN: ["Add an assignment operator '='"],
    }
    return token_suggestions.get(expected, [])


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Invalid type annotation",
    "P010": "Unexpected end of input",
}


def create_unexpected_token_error(expected: Union[TokenType, str], found: Token) -> ParseError:
    """Create an error for an unexpected token."""
    expected_str = describe_token_type(expected) if isinstance(expected, TokenType) else expected
    found_str = describe_token(found)

    if found.type == TokenType.EOF:
        return create_unexpected_eof_error(expected_str, found)

    suggestions = suggest_missing_token(expected) if isinstance(expected, TokenType) else []

    return ParseError(
        message=f"Unexpected token: expected {expected_str}, found {found_str}",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"The parser expected {expected_str} at this position.",
        suggestions=suggestions or None
    )


def create_invalid_type_error(found: Token) -> ParseError:
    """Create an error for a missing or unknown type keyword after `var <name>`."""
    return ParseError(
        message=f"Expected a type (int, float, string, bool), found {describe_token(found)}",
        location=found.location,
        token=found,
        code="P002",
        help_text="Variable declarations need an explicit type: var <name> <type>.",
    )


def create_unexpected_eof_error(expected: str, found: Token) -> ParseError:
    """Create an error for unexpected end of input."""
    return ParseError(
        message=f"Unexpected end of input, expected {expected}",
        location=found.location,
        token=found,
        code="P010",
        help_text=f"The parser reached the end of the input while expecting {expected}.",
        suggestions=[f"Add the missing {expected}", "Check for an unclosed 'then ... end' block"]
    )
