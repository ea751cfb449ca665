"""
Runtime error handling for the Neutron interpreter.

Runtime faults end evaluation immediately. A program that passed semantic
analysis can still fault here (division by zero, arity, overflow).

Author: xwest
"""

from typing import Optional, List

from ..errors import NeutronError, ErrorKind
from ..lexer.tokens import SourceLocation


class InterpreterError(NeutronError):
    """Exception raised when evaluation cannot continue."""

    kind = ErrorKind.RUNTIME

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
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


RUNTIME_ERROR_CODES = {
    "R001": "Undefined variable",
    "R002": "Unsupported operand types",
    "R003": "Non-boolean condition",
    "R004": "Argument count mismatch",
    "R005": "Division by zero",
    "R006": "Function not found",
    "R007": "Integer overflow",
    "R008": "Non-integer range bound",
}


def create_undefined_variable_error(name: str, location: Optional[SourceLocation]) -> InterpreterError:
    return InterpreterError(
        message=f"Undefined variable '{name}'",
        location=location,
        code="R001",
        help_text="The variable is not bound in the current environment.",
    )


def create_unsupported_operands_error(
    operator: str,
    left_kind: str,
    right_kind: str,
    location: Optional[SourceLocation]
) -> InterpreterError:
    """Create an error for an operator applied to incompatible values."""
    return InterpreterError(
        message=f"Unsupported operands for '{operator}': {left_kind} and {right_kind}",
        location=location,
        code="R002",
        help_text="Both operands must have the same type, and that type must support the operator.",
    )


def create_condition_error(construct: str, kind: str, location: Optional[SourceLocation]) -> InterpreterError:
    return InterpreterError(
        message=f"'{construct}' condition must be a boolean, got {kind}",
        location=location,
        code="R003",
    )


def create_arity_mismatch_error(
    name: str,
    expected: int,
    actual: int,
    location: Optional[SourceLocation]
) -> InterpreterError:
    """Create an error for a call with the wrong number of arguments."""
    return InterpreterError(
        message=f"Function '{name}' expects {expected} arguments, got {actual}",
        location=location,
        code="R004",
    )


def create_division_by_zero_error(location: Optional[SourceLocation]) -> InterpreterError:
    return InterpreterError(
        message="Integer division by zero",
        location=location,
        code="R005",
        help_text="Check the divisor before dividing; float division yields inf or nan instead.",
    )


def create_function_not_found_error(name: str, location: Optional[SourceLocation]) -> InterpreterError:
    return InterpreterError(
        message=f"Function '{name}' not found",
        location=location,
        code="R006",
        help_text="Functions exist once their declaration has been executed.",
    )


def create_integer_overflow_error(location: Optional[SourceLocation]) -> InterpreterError:
    return InterpreterError(
        message="Integer overflow: result does not fit in a 64-bit signed integer",
        location=location,
        code="R007",
    )


def create_range_error(kind: str, location: Optional[SourceLocation]) -> InterpreterError:
    return InterpreterError(
        message=f"'for' loop range must be integers, got {kind}",
        location=location,
        code="R008",
    )
