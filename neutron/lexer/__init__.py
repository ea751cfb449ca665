"""
Neutron Lexer Package

Implements the lexical analyzer (tokenizer) for the Neutron language.

Key Features:
- Pull-based token stream (one token per next_token() call)
- Keyword, type keyword, literal and operator recognition
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
