"""
Token definitions for the Neutron lexer.

This module defines all token types supported by Neutron:
- Keywords (class, func, var, then, end, ret, if, else, for, while, loop)
- Type keywords (int, float, string, bool)
- Literals (integers, floats, booleans, strings, identifiers)
- Operators and punctuation

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types in Neutron.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input

    # ========================================================================
    # Literals
    # ========================================================================
    INTEGER = auto()                # 42
    FLOAT = auto()                  # 3.14
    BOOLEAN = auto()                # true, false
    STRING = auto()                 # "hello"
    IDENTIFIER = auto()             # variable_name

    # ========================================================================
    # Keywords
    # ========================================================================
    CLASS = auto()                  # class
    FUNC = auto()                   # func
    VAR = auto()                    # var
    THEN = auto()                   # then (opens a block)
    END = auto()                    # end (closes a block)
    RET = auto()                    # ret
    IF = auto()                     # if
    ELSE = auto()                   # else
    FOR = auto()                    # for
    WHILE = auto()                  # while
    LOOP = auto()                   # loop (reserved, no grammar rule)

    # Type keywords
    TYPE_INT = auto()               # int
    TYPE_FLOAT = auto()             # float
    TYPE_STRING = auto()            # string
    TYPE_BOOL = auto()              # bool

    # ========================================================================
    # Operators
    # ========================================================================
    ASSIGN = auto()                 # =
    EQUAL = auto()                  # ==
    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /

    # ========================================================================
    # Punctuation
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # { (lexed, unused by the grammar)
    RIGHT_BRACE = auto()            # } (lexed, unused by the grammar)
    COMMA = auto()                  # ,


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and AST dumps.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Neutron language.

    Contains the token type, lexeme (raw text), semantic value and source
    location. Two tokens compare equal when type, lexeme and value match;
    the location is not part of equality.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Parsed value (int, float, bool, str) or None
    location: SourceLocation

    def __eq__(self, other) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.lexeme, self.value) == (other.type, other.lexeme, other.value)

    def __hash__(self) -> int:
        return hash((self.type, self.lexeme, self.value))

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in LITERAL_TOKENS

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword (type keywords included)."""
        return self.lexeme in KEYWORDS and self.type is not TokenType.BOOLEAN

    @property
    def is_type_keyword(self) -> bool:
        """Check if this token names one of the four static types."""
        return self.type in TYPE_KEYWORDS.values()


# Lookup tables used by the lexer for keyword/operator recognition

KEYWORDS = {
    "class": TokenType.CLASS,
    "func": TokenType.FUNC,
    "var": TokenType.VAR,
    "then": TokenType.THEN,
    "end": TokenType.END,
    "ret": TokenType.RET,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "for": TokenType.FOR,
    "while": TokenType.WHILE,
    "loop": TokenType.LOOP,
    "true": TokenType.BOOLEAN,
    "false": TokenType.BOOLEAN,
    "int": TokenType.TYPE_INT,
    "float": TokenType.TYPE_FLOAT,
    "string": TokenType.TYPE_STRING,
    "bool": TokenType.TYPE_BOOL,
}

TYPE_KEYWORDS = {
    "int": TokenType.TYPE_INT,
    "float": TokenType.TYPE_FLOAT,
    "string": TokenType.TYPE_STRING,
    "bool": TokenType.TYPE_BOOL,
}

# Longest operators first; the lexer relies on this order for maximal munch.
OPERATORS = {
    "==": TokenType.EQUAL,
    "=": TokenType.ASSIGN,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
}

LITERAL_TOKENS = frozenset({
    TokenType.INTEGER,
    TokenType.FLOAT,
    TokenType.BOOLEAN,
    TokenType.STRING,
})

ESCAPE_SEQUENCES = {
    'n': '\n',
    't': '\t',
    '"': '"',
    '\\': '\\',
}
