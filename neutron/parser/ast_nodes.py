"""
Abstract Syntax Tree node definitions for Neutron.

Every node is a dataclass that exclusively owns its children: no parent
pointers, no sharing. Source locations are carried for diagnostics but are
not part of node equality, so trees built by hand in tests compare equal to
parsed ones.

Author: xwest
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..lexer.tokens import SourceLocation, TokenType


class Type(Enum):
    """The four static types of Neutron."""
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOL = "bool"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_token_type(cls, token_type: TokenType) -> "Type":
        return _TYPE_KEYWORDS[token_type]


_TYPE_KEYWORDS = {
    TokenType.TYPE_INT: Type.INT,
    TokenType.TYPE_FLOAT: Type.FLOAT,
    TokenType.TYPE_STRING: Type.STRING,
    TokenType.TYPE_BOOL: Type.BOOL,
}


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    PROGRAM = "Program"

    # Declarations and statements
    CLASS_DECLARATION = "ClassDeclaration"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    VARIABLE_DECLARATION = "VariableDeclaration"
    ASSIGNMENT = "Assignment"
    IF_ELSE = "IfElse"
    WHILE_LOOP = "WhileLoop"
    FOR_LOOP = "ForLoop"
    RET = "Ret"

    # Expressions
    NUMBER = "Number"
    FLOAT = "Float"
    BOOLEAN = "Boolean"
    STRING_LITERAL = "StringLiteral"
    IDENTIFIER = "Identifier"
    FUNCTION_CALL = "FunctionCall"
    ARITHMETIC = "Arithmetic"
    COMPARISON = "Comparison"


ARITHMETIC_OPERATORS = ("+", "-", "*", "/")
COMPARISON_OPERATORS = ("<", ">", "==")


class ASTNode:
    """Base class for all AST nodes."""

    node_type: ASTNodeType

    def children(self) -> List["ASTNode"]:
        """Get all child nodes, in source order."""
        return []

    def walk(self):
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()


class Statement(ASTNode):
    """Base class for statements."""


class Expression(ASTNode):
    """Base class for expressions."""


def _location():
    return field(default=None, compare=False, repr=False)


# ============================================================================
# Top-level
# ============================================================================

@dataclass
class Program(ASTNode):
    """Root node: the ordered top-level statements."""
    statements: List[Statement]
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.PROGRAM

    def children(self) -> List[ASTNode]:
        return list(self.statements)


# ============================================================================
# Declarations and statements
# ============================================================================

@dataclass
class ClassDeclaration(Statement):
    """Class used as a namespace for its member statements."""
    name: str
    members: List[Statement]
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.CLASS_DECLARATION

    def children(self) -> List[ASTNode]:
        return list(self.members)


@dataclass
class FunctionDeclaration(Statement):
    """Function definition with untyped parameters."""
    name: str
    params: List[str]
    body: List[Statement]
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.FUNCTION_DECLARATION

    def children(self) -> List[ASTNode]:
        return list(self.body)


@dataclass
class VariableDeclaration(Statement):
    """`var <name> <type>`."""
    name: str
    var_type: Type
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.VARIABLE_DECLARATION


@dataclass
class Assignment(Statement):
    """`<name> = <expression>`."""
    variable: str
    expression: Expression
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.ASSIGNMENT

    def children(self) -> List[ASTNode]:
        return [self.expression]


@dataclass
class IfElse(Statement):
    """If statement with optional else block."""
    condition: Expression
    then_block: List[Statement]
    else_block: Optional[List[Statement]] = None
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.IF_ELSE

    def children(self) -> List[ASTNode]:
        children = [self.condition] + list(self.then_block)
        if self.else_block:
            children.extend(self.else_block)
        return children


@dataclass
class WhileLoop(Statement):
    condition: Expression
    body: List[Statement]
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.WHILE_LOOP

    def children(self) -> List[ASTNode]:
        return [self.condition] + list(self.body)


@dataclass
class ForLoop(Statement):
    """`for <variable> = <start> <end>` over the half-open range [start, end)."""
    variable: str
    start: Expression
    end: Expression
    body: List[Statement]
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.FOR_LOOP

    def children(self) -> List[ASTNode]:
        return [self.start, self.end] + list(self.body)


@dataclass
class Ret(Statement):
    expression: Expression
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.RET

    def children(self) -> List[ASTNode]:
        return [self.expression]


# ============================================================================
# Expressions
# ============================================================================

@dataclass
class Number(Expression):
    value: int
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.NUMBER


@dataclass
class Float(Expression):
    value: float
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.FLOAT


@dataclass
class Boolean(Expression):
    value: bool
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.BOOLEAN


@dataclass
class StringLiteral(Expression):
    value: str
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.STRING_LITERAL


@dataclass
class Identifier(Expression):
    name: str
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.IDENTIFIER


@dataclass
class FunctionCall(Expression, Statement):
    """Call by name; also valid as a statement."""
    name: str
    args: List[Expression]
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.FUNCTION_CALL

    def children(self) -> List[ASTNode]:
        return list(self.args)


@dataclass
class Arithmetic(Expression):
    """Binary `+ - * /`."""
    operator: str
    left: Expression
    right: Expression
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.ARITHMETIC

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


@dataclass
class Comparison(Expression):
    """Binary `< > ==`, always Bool-valued."""
    operator: str
    left: Expression
    right: Expression
    location: Optional[SourceLocation] = _location()

    node_type = ASTNodeType.COMPARISON

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


LITERAL_NODES = (Number, Float, Boolean, StringLiteral)


def format_tree(node: ASTNode, indent: int = 0) -> str:
    """Render an indented, one-node-per-line dump of a tree."""
    pad = "  " * indent
    label = node.node_type.value

    if isinstance(node, LITERAL_NODES):
        label += f" {node.value!r}"
    elif isinstance(node, Identifier):
        label += f" {node.name}"
    elif isinstance(node, (Arithmetic, Comparison)):
        label += f" {node.operator}"
    elif isinstance(node, ClassDeclaration):
        label += f" {node.name}"
    elif isinstance(node, FunctionDeclaration):
        label += f" {node.name}({', '.join(node.params)})"
    elif isinstance(node, FunctionCall):
        label += f" {node.name}"
    elif isinstance(node, VariableDeclaration):
        label += f" {node.name}: {node.var_type}"
    elif isinstance(node, Assignment):
        label += f" {node.variable}"
    elif isinstance(node, ForLoop):
        label += f" {node.variable}"

    lines = [pad + label]
    for child in node.children():
        lines.append(format_tree(child, indent + 1))
    return "\n".join(lines)
