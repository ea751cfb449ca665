"""
Shared diagnostics for every Neutron phase.

Each phase raises its own exception class (LexerError, ParseError,
SemanticError, InterpreterError); all of them derive from NeutronError so a
caller can catch one type and still tell the failure category apart through
the ``kind`` attribute.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Error taxonomy shared by the whole pipeline."""
    LEXICAL = "lexical"
    SYNTACTIC = "syntactic"
    DECLARATION = "declaration"
    STATIC_TYPE = "static-type"
    RUNTIME = "runtime"


@dataclass
class Diagnostic:
    """A single error report with an optional location and hints."""
    message: str
    location: Optional["SourceLocation"]
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class NeutronError(Exception):
    """
    Base class for all fatal Neutron errors.

    The first error detected in any phase aborts the pipeline, so there is
    no warning level and no error list: one exception, one diagnostic.
    """

    kind: ErrorKind = ErrorKind.RUNTIME

    def __init__(
        self,
        message: str,
        location: Optional["SourceLocation"] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        kind: Optional[ErrorKind] = None,
    ):
        super().__init__(message)
        if kind is not None:
            self.kind = kind
        self.message = message
        self.location = location
        self.code = code
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions,
        )

    def __str__(self) -> str:
        return str(self.diagnostic)
