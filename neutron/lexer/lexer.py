"""
Neutron Lexer - turns source text into tokens, one at a time.

The parser pulls tokens through next_token(); nothing is buffered beyond
the character under the cursor, so lexing the same text twice always gives
the same sequence.

A '-' is always its own MINUS token, even directly in front of a digit:
"a - 5", "a -5" and "a-5" all lex the same way. Negative literals are the
parser's job.

xwest
"""

import logging
from typing import Iterator, List

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, OPERATORS, ESCAPE_SEQUENCES
)
from .errors import create_invalid_character_error, create_unterminated_string_error

logger = logging.getLogger(__name__)


class Lexer:
    """
    Neutron lexical analyzer.

    Converts source code text into a pull-based stream of tokens.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Returns the EOF token once the input is exhausted; further calls keep
        returning EOF.

        Raises:
            LexerError: On an unrecognized character or unterminated string
        """
        self._skip_whitespace()

        start = self._location()

        if self.pos >= len(self.source):
            return Token(TokenType.EOF, "", None, start)

        current_char = self.source[self.pos]

        # Identifiers and keywords
        if current_char.isalpha():
            return self._tokenize_identifier_or_keyword(start)

        # Numbers (integers and floats)
        if self._is_digit(current_char):
            return self._tokenize_number(start)

        # String literals
        if current_char == '"':
            return self._tokenize_string(start)

        # Operators and punctuation (two-character first)
        for potential_op, token_type in OPERATORS.items():
            if self.source.startswith(potential_op, self.pos):
                self._advance_by(len(potential_op))
                return Token(token_type, potential_op, None, start)

        raise create_invalid_character_error(current_char, start)

    def tokenize(self) -> List[Token]:
        """
        Tokenize the remaining source code.

        Returns:
            List of tokens including the EOF token
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                break

        logger.debug("lexed %d tokens from %s", len(tokens), self.filename)
        return tokens

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to, but not including, EOF."""
        while True:
            token = self.next_token()
            if token.type == TokenType.EOF:
                return
            yield token

    def _tokenize_identifier_or_keyword(self, start: SourceLocation) -> Token:
        """Tokenize an identifier or keyword (maximal munch)."""
        start_pos = self.pos
        self._advance()

        while self.pos < len(self.source) and self._is_identifier_continue(self.source[self.pos]):
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)

        if token_type == TokenType.BOOLEAN:
            value = lexeme == "true"
        elif token_type == TokenType.IDENTIFIER:
            value = lexeme
        else:
            value = None

        return Token(token_type, lexeme, value, start)

    def _tokenize_number(self, start: SourceLocation) -> Token:
        """Tokenize integer or float literals."""
        start_pos = self.pos
        self._consume_digits()

        # A '.' only belongs to the number when a digit follows it
        if self._peek(0) == '.' and self._is_digit(self._peek(1)):
            self._advance()
            self._consume_digits()
            lexeme = self.source[start_pos:self.pos]
            return Token(TokenType.FLOAT, lexeme, float(lexeme), start)

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.INTEGER, lexeme, int(lexeme), start)

    def _tokenize_string(self, start: SourceLocation) -> Token:
        """Tokenize a double-quoted string literal."""
        start_pos = self.pos
        self._advance()  # Skip opening quote

        value_parts = []

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            if self.source[self.pos] == '\\' and self.pos + 1 < len(self.source):
                self._advance()  # Skip backslash
                escaped = self.source[self.pos]
                value_parts.append(ESCAPE_SEQUENCES.get(escaped, escaped))
            else:
                value_parts.append(self.source[self.pos])
            self._advance()

        if self.pos >= len(self.source):
            raise create_unterminated_string_error(start)

        self._advance()  # Skip closing quote

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.STRING, lexeme, ''.join(value_parts), start)

    def _consume_digits(self):
        while self.pos < len(self.source) and self._is_digit(self.source[self.pos]):
            self._advance()

    @staticmethod
    def _is_digit(char: str) -> bool:
        """ASCII digits only; other Unicode decimals are not numbers."""
        return '0' <= char <= '9'

    @staticmethod
    def _is_identifier_continue(char: str) -> bool:
        """Check if character can continue an identifier."""
        return char.isalnum() or char == '_'

    def _skip_whitespace(self):
        while self.pos < len(self.source) and self.source[self.pos].isspace():
            self._advance()

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        for _ in range(count):
            self._advance()

    def _peek(self, offset: int = 1) -> str:
        """Peek at character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return '\0'

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens, ending with EOF

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
