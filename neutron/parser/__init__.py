"""
Neutron Parser Package

Implements a recursive descent parser for the Neutron language. Produces
an Abstract Syntax Tree whose nodes carry source locations.

Key Features:
- Pull-based parsing with one token of lookahead
- Comparison / additive / multiplicative precedence levels
- Negative numeric literals folded at primary position
- Advisory duplicate-declaration check while parsing

Author: xwest
"""

# AST nodes first: the parser depends on the analyzer's symbol table, which
# in turn needs the node types.
from .ast_nodes import *
from .errors import ParseError
from .parser import Parser, parse_string, parse_file

__all__ = [
    # Core parser
    "Parser", "parse_string", "parse_file",

    # AST nodes
    "ASTNode", "ASTNodeType", "Type",
    "Program", "Statement", "Expression",
    "ClassDeclaration", "FunctionDeclaration", "VariableDeclaration",
    "Assignment", "IfElse", "WhileLoop", "ForLoop", "Ret",
    "Number", "Float", "Boolean", "StringLiteral", "Identifier",
    "FunctionCall", "Arithmetic", "Comparison",
    "format_tree",

    # Error handling
    "ParseError",
]
