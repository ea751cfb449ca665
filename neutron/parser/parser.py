"""
Neutron recursive-descent parser.

Pulls tokens from a Lexer one at a time and builds the AST with a single
token of lookahead and no backtracking. Expression precedence, lowest
first: comparison, additive, multiplicative, primary. All binary operators
are left-associative.

While parsing, declarations are recorded in a private SymbolTable so that
a name declared twice in the same scope is rejected early. That table is
thrown away afterwards; the semantic analyzer repeats every check.

Author: xwest
"""

import logging
from typing import List, Sequence, Union

from ..lexer import Lexer
from ..lexer.tokens import Token, TokenType
from ..analyzer.symbol_table import SymbolTable, ScopeKind
from .ast_nodes import (
    Type, Program, Statement, Expression, ClassDeclaration,
    FunctionDeclaration, VariableDeclaration, Assignment, IfElse, WhileLoop,
    ForLoop, Ret, Number, Float, Boolean, StringLiteral, Identifier,
    FunctionCall, Arithmetic, Comparison
)
from .errors import create_unexpected_token_error, create_invalid_type_error

logger = logging.getLogger(__name__)


COMPARISON_TOKENS = {
    TokenType.LESS_THAN: "<",
    TokenType.GREATER_THAN: ">",
    TokenType.EQUAL: "==",
}

ADDITIVE_TOKENS = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
}

MULTIPLICATIVE_TOKENS = {
    TokenType.MULTIPLY: "*",
    TokenType.DIVIDE: "/",
}


class Parser:
    """
    Neutron parser.

    Consumes tokens on demand from a lexer and produces a Program. The first
    token that does not fit the grammar raises ParseError; there is no error
    recovery and no partial tree.
    """

    def __init__(self, lexer: Lexer):
        """
        Initialize the parser and prime the lookahead token.

        Args:
            lexer: Token source

        Raises:
            LexerError: If the very first token cannot be lexed
        """
        self.lexer = lexer
        self.symbols = SymbolTable()
        self.current_token: Token = lexer.next_token()

    def parse_program(self) -> Program:
        """
        Parse the whole token stream.

        Returns:
            Program AST node with the top-level statements in source order

        Raises:
            LexerError: If the lexer hits an invalid character
            ParseError: If the token stream does not match the grammar
            SemanticError: If a name is declared twice in the same scope
        """
        start = self.current_token.location
        statements = []

        while not self._check(TokenType.EOF):
            statements.append(self._parse_statement())

        logger.debug("parsed %d top-level statements from %s",
                     len(statements), self.lexer.filename)
        return Program(statements, location=start)

    parse = parse_program

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _parse_statement(self) -> Statement:
        """Parse one statement, dispatching on the current token."""
        token_type = self.current_token.type

        if token_type == TokenType.CLASS:
            return self._parse_class_declaration()
        elif token_type == TokenType.FUNC:
            return self._parse_function_declaration()
        elif token_type == TokenType.VAR:
            return self._parse_variable_declaration()
        elif token_type == TokenType.IF:
            return self._parse_if_statement()
        elif token_type == TokenType.WHILE:
            return self._parse_while_statement()
        elif token_type == TokenType.FOR:
            return self._parse_for_statement()
        elif token_type == TokenType.RET:
            return self._parse_return_statement()
        elif token_type == TokenType.IDENTIFIER:
            return self._parse_identifier_statement()

        raise create_unexpected_token_error("statement", self.current_token)

    def _parse_block(self, scope_kind: ScopeKind, scope_name: str,
                     terminators=(TokenType.END,),
                     int_names: Sequence[Token] = ()) -> List[Statement]:
        """
        Parse statements until one of the terminator tokens, inside a new
        advisory scope. The terminator itself is left for the caller.

        ``int_names`` are identifier tokens declared as int in the new scope
        before the first statement (parameters, loop variables).
        """
        self.symbols.enter_scope(scope_kind, scope_name)
        try:
            for name_token in int_names:
                self.symbols.declare_variable(name_token.lexeme, Type.INT, name_token.location)
            statements = []
            while self.current_token.type not in terminators:
                if self._check(TokenType.EOF):
                    raise create_unexpected_token_error(terminators[0], self.current_token)
                statements.append(self._parse_statement())
            return statements
        finally:
            self.symbols.exit_scope()

    def _parse_class_declaration(self) -> ClassDeclaration:
        start_token = self._consume(TokenType.CLASS)
        name = self._consume(TokenType.IDENTIFIER).lexeme
        self._consume(TokenType.THEN)

        members = self._parse_block(ScopeKind.CLASS, name)
        self._consume(TokenType.END)

        return ClassDeclaration(name, members, location=start_token.location)

    def _parse_function_declaration(self) -> FunctionDeclaration:
        """Parse `func name(p1, p2) then ... end`."""
        start_token = self._consume(TokenType.FUNC)
        name = self._consume(TokenType.IDENTIFIER).lexeme

        self._consume(TokenType.LEFT_PAREN)
        params = []
        if not self._check(TokenType.RIGHT_PAREN):
            params.append(self._consume(TokenType.IDENTIFIER))
            while self._match(TokenType.COMMA):
                params.append(self._consume(TokenType.IDENTIFIER))
        self._consume(TokenType.RIGHT_PAREN)
        self._consume(TokenType.THEN)

        # Registered before the body so that recursive calls resolve
        param_names = [param.lexeme for param in params]
        self.symbols.declare_function(name, param_names, start_token.location)

        body = self._parse_block(ScopeKind.FUNCTION, name, int_names=params)
        self._consume(TokenType.END)

        return FunctionDeclaration(name, param_names, body, location=start_token.location)

    def _parse_variable_declaration(self) -> VariableDeclaration:
        """Parse `var name type`; the type is mandatory."""
        start_token = self._consume(TokenType.VAR)
        name_token = self._consume(TokenType.IDENTIFIER)

        type_token = self.current_token
        if not type_token.is_type_keyword:
            raise create_invalid_type_error(type_token)
        self._advance()
        var_type = Type.from_token_type(type_token.type)

        self.symbols.declare_variable(name_token.lexeme, var_type, name_token.location)
        return VariableDeclaration(name_token.lexeme, var_type, location=start_token.location)

    def _parse_identifier_statement(self) -> Union[Assignment, FunctionCall]:
        """Parse `name = expr` or `name(args)`."""
        name_token = self._consume(TokenType.IDENTIFIER)

        if self._match(TokenType.ASSIGN):
            expression = self._parse_expression()
            return Assignment(name_token.lexeme, expression, location=name_token.location)

        if self._check(TokenType.LEFT_PAREN):
            return self._parse_call(name_token)

        raise create_unexpected_token_error("'=' or '(' after identifier", self.current_token)

    def _parse_if_statement(self) -> IfElse:
        """Parse `if cond then ... [else ...] end`."""
        start_token = self._consume(TokenType.IF)
        condition = self._parse_expression()
        self._consume(TokenType.THEN)

        then_block = self._parse_block(ScopeKind.BLOCK, "if",
                                       terminators=(TokenType.END, TokenType.ELSE))
        else_block = None
        if self._match(TokenType.ELSE):
            else_block = self._parse_block(ScopeKind.BLOCK, "else")
        self._consume(TokenType.END)

        return IfElse(condition, then_block, else_block, location=start_token.location)

    def _parse_while_statement(self) -> WhileLoop:
        start_token = self._consume(TokenType.WHILE)
        condition = self._parse_expression()
        self._consume(TokenType.THEN)

        body = self._parse_block(ScopeKind.LOOP, "while")
        self._consume(TokenType.END)

        return WhileLoop(condition, body, location=start_token.location)

    def _parse_for_statement(self) -> ForLoop:
        """
        Parse `for v = start end then ... end`.

        The two bounds are written back to back, so a bound that starts
        with '-' must be parenthesised: `for i = 0 (-5) then`.
        """
        start_token = self._consume(TokenType.FOR)
        var_token = self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.ASSIGN)
        start = self._parse_expression()
        end = self._parse_expression()
        self._consume(TokenType.THEN)

        body = self._parse_block(ScopeKind.LOOP, "for", int_names=[var_token])
        self._consume(TokenType.END)

        return ForLoop(var_token.lexeme, start, end, body, location=start_token.location)

    def _parse_return_statement(self) -> Ret:
        start_token = self._consume(TokenType.RET)
        expression = self._parse_expression()
        return Ret(expression, location=start_token.location)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self) -> Expression:
        """Parse an expression (comparison level)."""
        left = self._parse_additive()

        while self.current_token.type in COMPARISON_TOKENS:
            operator_token = self._advance()
            right = self._parse_additive()
            left = Comparison(COMPARISON_TOKENS[operator_token.type], left, right,
                              location=operator_token.location)

        return left

    def _parse_additive(self) -> Expression:
        left = self._parse_multiplicative()

        while self.current_token.type in ADDITIVE_TOKENS:
            operator_token = self._advance()
            right = self._parse_multiplicative()
            left = Arithmetic(ADDITIVE_TOKENS[operator_token.type], left, right,
                              location=operator_token.location)

        return left

    def _parse_multiplicative(self) -> Expression:
        left = self._parse_primary()

        while self.current_token.type in MULTIPLICATIVE_TOKENS:
            operator_token = self._advance()
            right = self._parse_primary()
            left = Arithmetic(MULTIPLICATIVE_TOKENS[operator_token.type], left, right,
                              location=operator_token.location)

        return left

    def _parse_primary(self) -> Expression:
        """Parse literals, identifiers, calls, parentheses and negative literals."""
        token = self.current_token

        if token.type == TokenType.INTEGER:
            self._advance()
            return Number(token.value, location=token.location)
        elif token.type == TokenType.FLOAT:
            self._advance()
            return Float(token.value, location=token.location)
        elif token.type == TokenType.BOOLEAN:
            self._advance()
            return Boolean(token.value, location=token.location)
        elif token.type == TokenType.STRING:
            self._advance()
            return StringLiteral(token.value, location=token.location)
        elif token.type == TokenType.IDENTIFIER:
            self._advance()
            if self._check(TokenType.LEFT_PAREN):
                return self._parse_call(token)
            return Identifier(token.lexeme, location=token.location)
        elif token.type == TokenType.LEFT_PAREN:
            self._advance()
            expression = self._parse_expression()
            self._consume(TokenType.RIGHT_PAREN)
            return expression
        elif token.type == TokenType.MINUS:
            return self._parse_negative_literal()

        raise create_unexpected_token_error("expression", token)

    def _parse_negative_literal(self) -> Expression:
        """`-` directly followed by a number is the only unary minus."""
        minus_token = self._consume(TokenType.MINUS)
        literal = self.current_token

        if literal.type == TokenType.INTEGER:
            self._advance()
            return Number(-literal.value, location=minus_token.location)
        elif literal.type == TokenType.FLOAT:
            self._advance()
            return Float(-literal.value, location=minus_token.location)

        raise create_unexpected_token_error("number after '-'", literal)

    def _parse_call(self, name_token: Token) -> FunctionCall:
        """Parse the argument list of a call whose name was already consumed."""
        self._consume(TokenType.LEFT_PAREN)
        args = []
        if not self._check(TokenType.RIGHT_PAREN):
            args.append(self._parse_expression())
            while self._match(TokenType.COMMA):
                args.append(self._parse_expression())
        self._consume(TokenType.RIGHT_PAREN)

        return FunctionCall(name_token.lexeme, args, location=name_token.location)

    # ------------------------------------------------------------------
    # Utility methods
    # ------------------------------------------------------------------

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self.current_token.type == token_type

    def _advance(self) -> Token:
        """Consume and return the current token, pulling the next one."""
        token = self.current_token
        if token.type != TokenType.EOF:
            self.current_token = self.lexer.next_token()
        return token

    def _match(self, token_type: TokenType) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _consume(self, token_type: TokenType) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()
        raise create_unexpected_token_error(token_type, self.current_token)


def parse_string(source: str, filename: str = "<string>") -> Program:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        Program AST

    Raises:
        LexerError, ParseError, SemanticError: On the first problem found
    """
    parser = Parser(Lexer(source, filename))
    return parser.parse_program()


def parse_file(filepath: str) -> Program:
    """
    Convenience function to parse a source file.

    Raises:
        LexerError, ParseError, SemanticError: On the first problem found
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath)
