"""
Semantic analysis error handling for Neutron.

Two categories are reported: declaration errors (duplicate or missing
names) and static-type errors (operand, assignment, condition and range
mismatches). Both use SemanticError; ``kind`` tells them apart.

Author: xwest
"""

from typing import Optional, List

from ..errors import NeutronError, ErrorKind
from ..lexer.tokens import SourceLocation


class SemanticError(NeutronError):
    """
    Exception raised when semantic analysis rejects a program.

    Defaults to the static-type category; declaration problems pass
    ``kind=ErrorKind.DECLARATION``.
    """

    kind = ErrorKind.STATIC_TYPE

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        kind: Optional[ErrorKind] = None,
    ):
        super().__init__(
            message,
            location,
            code=code,
            help_text=help_text,
            suggestions=suggestions,
            kind=kind,
        )


# Semantic error codes for categorization
SEMANTIC_ERROR_CODES = {
    # Type errors
    "S001": "Type mismatch",
    "S002": "Non-boolean condition",
    "S003": "Non-integer range bound",

    # Declaration errors
    "S010": "Undefined variable",
    "S011": "Variable redeclaration",
    "S012": "Undefined function",
    "S013": "Function redeclaration",
}


def create_type_mismatch_error(
    expected: str,
    actual: str,
    location: Optional[SourceLocation],
    context: str = "expression"
) -> SemanticError:
    """Create a type mismatch error."""
    return SemanticError(
        message=f"Type mismatch in {context}: expected {expected}, found {actual}",
        location=location,
        code="S001",
        help_text=f"The expression has type '{actual}' but '{expected}' was expected.",
        suggestions=[
            "Neutron never converts between types implicitly",
            "Use literals of the declared type (e.g. 1.0 for float)",
        ]
    )


def create_condition_type_error(
    construct: str,
    actual: str,
    location: Optional[SourceLocation]
) -> SemanticError:
    """Create an error for an if/while condition that is not bool."""
    return SemanticError(
        message=f"'{construct}' condition must be bool, found {actual}",
        location=location,
        code="S002",
        help_text="Conditions must be comparisons or boolean values.",
    )


def create_range_type_error(
    bound: str,
    actual: str,
    location: Optional[SourceLocation]
) -> SemanticError:
    """Create an error for a for-loop bound that is not int."""
    return SemanticError(
        message=f"'for' loop {bound} bound must be int, found {actual}",
        location=location,
        code="S003",
        help_text="For loops iterate over an integer range [start, end).",
    )


def create_undefined_symbol_error(
    symbol: str,
    location: Optional[SourceLocation],
    similar_names: Optional[List[str]] = None
) -> SemanticError:
    """Create an undefined variable error."""
    suggestions = []
    if similar_names:
        suggestions.extend([f"Did you mean '{name}'?" for name in similar_names[:3]])
    suggestions.append(f"Declare it first: var {symbol} <type>")

    return SemanticError(
        message=f"Variable '{symbol}' is not declared",
        location=location,
        code="S010",
        help_text=f"The variable '{symbol}' is not defined in the current scope.",
        suggestions=suggestions,
        kind=ErrorKind.DECLARATION,
    )


def create_redeclaration_error(
    symbol: str,
    location: Optional[SourceLocation],
    previous: Optional[SourceLocation] = None
) -> SemanticError:
    """Create an error for a second declaration in the same scope."""
    help_text = "A name can only be redeclared in a nested scope."
    if previous is not None:
        help_text += f" First declared at {previous}."

    return SemanticError(
        message=f"Variable '{symbol}' is already declared in this scope",
        location=location,
        code="S011",
        help_text=help_text,
        kind=ErrorKind.DECLARATION,
    )


def create_undefined_function_error(
    name: str,
    location: Optional[SourceLocation]
) -> SemanticError:
    """Create an error for a call to a function that was never declared."""
    return SemanticError(
        message=f"Function '{name}' is not declared",
        location=location,
        code="S012",
        help_text="Functions must be declared before the code that calls them.",
        kind=ErrorKind.DECLARATION,
    )


def create_function_redeclaration_error(
    name: str,
    location: Optional[SourceLocation]
) -> SemanticError:
    """Create an error for a duplicate function name."""
    return SemanticError(
        message=f"Function '{name}' is already declared",
        location=location,
        code="S013",
        help_text="Function names are global and cannot be overloaded.",
        kind=ErrorKind.DECLARATION,
    )
