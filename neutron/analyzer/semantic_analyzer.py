"""
Semantic analyzer for Neutron.

Checks a Program with a fresh symbol table:
- Every function is registered before any statement is checked, so calls
  may refer to functions declared later in the source
- Declaration checking (undeclared names, duplicates per scope)
- Static typing of expressions (no implicit widening)
- Bool conditions and int loop ranges
- Return types inferred from each function's ``ret`` expressions

A function body is checked the first time a call to it is analysed, or after
the top-level statements if nothing calls it earlier. The body sees the
global scope and its parameters only, like a call at runtime.

The first problem found is raised; nothing is collected.

Author: xwest
"""

import logging
from typing import Dict, List, Optional, Sequence, Set
from dataclasses import dataclass, field

from ..parser.ast_nodes import (
    ASTNode, Type, Program, Statement, Expression, ClassDeclaration,
    FunctionDeclaration, VariableDeclaration, Assignment, IfElse, WhileLoop,
    ForLoop, Ret, Number, Float, Boolean, StringLiteral, Identifier,
    FunctionCall, Arithmetic, Comparison
)
from .symbol_table import SymbolTable, ScopeKind, FunctionSignature
from .errors import (
    create_type_mismatch_error, create_condition_type_error,
    create_range_type_error
)

logger = logging.getLogger(__name__)


LITERAL_TYPES = {
    Number: Type.INT,
    Float: Type.FLOAT,
    Boolean: Type.BOOL,
    StringLiteral: Type.STRING,
}

# Static type of a call whose callee has no known return type (no ret,
# unknown callee, or recursion before the first ret)
DEFAULT_CALL_TYPE = Type.INT


@dataclass
class AnalysisResult:
    """Results of a successful semantic analysis."""
    program: Program
    symbol_table: SymbolTable
    functions: Dict[str, FunctionSignature]
    # Keyed by id(node): AST dataclasses compare by value and are unhashable
    type_annotations: Dict[int, Type] = field(default_factory=dict)

    def type_of(self, node: ASTNode) -> Optional[Type]:
        """Inferred static type of an expression node, if it was analysed."""
        return self.type_annotations.get(id(node))


class SemanticAnalyzer:
    """
    Main semantic analyzer for Neutron.

    Argument count is left to the interpreter, and so are calls to names
    that no function declaration defines.
    """

    def __init__(self):
        """Initialize the semantic analyzer."""
        self.symbol_table = SymbolTable()
        self.type_annotations: Dict[int, Type] = {}
        self._declarations: Dict[str, FunctionDeclaration] = {}
        self._checked: Set[str] = set()
        # Functions whose body is being checked, with the ret type seen so far
        self._return_types: Dict[str, Optional[Type]] = {}
        self._function_stack: List[str] = []

    def analyze(self, program: Program) -> AnalysisResult:
        """
        Perform semantic analysis on the AST.

        Args:
            program: The abstract syntax tree to analyze

        Returns:
            AnalysisResult with the function table and per-node types

        Raises:
            SemanticError: On the first declaration or type error
        """
        self.symbol_table = SymbolTable()
        self.type_annotations = {}
        self._declarations = {}
        self._checked = set()
        self._return_types = {}
        self._function_stack = []

        self._collect_functions(program.statements)

        for stmt in program.statements:
            self._check_statement(stmt)

        for name in self._declarations:
            self._check_function(name)

        logger.debug("analysis passed: %d functions, %d typed expressions",
                     len(self.symbol_table.functions), len(self.type_annotations))

        return AnalysisResult(
            program=program,
            symbol_table=self.symbol_table,
            functions=dict(self.symbol_table.functions),
            type_annotations=self.type_annotations,
        )

    def _collect_functions(self, statements: List[Statement]):
        """Register every function declaration, nested ones included."""
        for stmt in statements:
            if isinstance(stmt, FunctionDeclaration):
                self.symbol_table.declare_function(stmt.name, stmt.params, stmt.location)
                self._declarations[stmt.name] = stmt
                self._collect_functions(stmt.body)
            elif isinstance(stmt, ClassDeclaration):
                self._collect_functions(stmt.members)
            elif isinstance(stmt, IfElse):
                self._collect_functions(stmt.then_block)
                if stmt.else_block is not None:
                    self._collect_functions(stmt.else_block)
            elif isinstance(stmt, (WhileLoop, ForLoop)):
                self._collect_functions(stmt.body)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _check_statement(self, stmt: Statement):
        """Check one statement."""
        if isinstance(stmt, VariableDeclaration):
            self.symbol_table.declare_variable(stmt.name, stmt.var_type, stmt.location)
        elif isinstance(stmt, Assignment):
            self._check_assignment(stmt)
        elif isinstance(stmt, FunctionDeclaration):
            # Body is checked on first call or after the top-level statements
            pass
        elif isinstance(stmt, ClassDeclaration):
            self._check_block(stmt.members, ScopeKind.CLASS, stmt.name)
        elif isinstance(stmt, IfElse):
            self._check_if_else(stmt)
        elif isinstance(stmt, WhileLoop):
            self._check_while_loop(stmt)
        elif isinstance(stmt, ForLoop):
            self._check_for_loop(stmt)
        elif isinstance(stmt, Ret):
            self._check_ret(stmt)
        elif isinstance(stmt, FunctionCall):
            self._check_expression(stmt)

    def _check_block(self, statements: List[Statement], kind: ScopeKind, name: str,
                     int_names: Sequence[str] = ()):
        """Check statements in a new scope, seeding ``int_names`` as int."""
        self.symbol_table.enter_scope(kind, name)
        try:
            for var_name in int_names:
                self.symbol_table.declare_variable(var_name, Type.INT)
            for stmt in statements:
                self._check_statement(stmt)
        finally:
            self.symbol_table.exit_scope()

    def _check_assignment(self, assignment: Assignment):
        target_type = self.symbol_table.lookup_type(assignment.variable, assignment.location)
        value_type = self._check_expression(assignment.expression)

        if value_type != target_type:
            raise create_type_mismatch_error(
                str(target_type), str(value_type),
                assignment.location, f"assignment to '{assignment.variable}'"
            )

    def _check_function(self, name: str):
        """
        Check a function body once, with int parameters on top of the
        global scope, and record its return type on the signature.
        """
        if name in self._checked or name in self._return_types:
            return

        func = self._declarations[name]
        self._return_types[name] = None
        self._function_stack.append(name)
        self.symbol_table.enter_function_scope(name)
        try:
            for param in func.params:
                self.symbol_table.declare_variable(param, Type.INT, func.location)
            for stmt in func.body:
                self._check_statement(stmt)
        finally:
            self.symbol_table.exit_function_scope()
            self._function_stack.pop()
            return_type = self._return_types.pop(name)

        self._checked.add(name)
        self.symbol_table.functions[name].return_type = return_type
        logger.debug("checked function %s -> %s", name, return_type)

    def _check_ret(self, ret: Ret):
        """Every ret in one function must produce the same type."""
        value_type = self._check_expression(ret.expression)
        if not self._function_stack:
            # Top-level ret has no function to return from
            return

        name = self._function_stack[-1]
        expected = self._return_types[name]
        if expected is None:
            self._return_types[name] = value_type
        elif value_type != expected:
            raise create_type_mismatch_error(
                str(expected), str(value_type), ret.location, f"return value of '{name}'"
            )

    def _check_if_else(self, if_else: IfElse):
        condition_type = self._check_expression(if_else.condition)
        if condition_type != Type.BOOL:
            raise create_condition_type_error("if", str(condition_type), if_else.location)

        self._check_block(if_else.then_block, ScopeKind.BLOCK, "if")
        if if_else.else_block is not None:
            self._check_block(if_else.else_block, ScopeKind.BLOCK, "else")

    def _check_while_loop(self, while_loop: WhileLoop):
        condition_type = self._check_expression(while_loop.condition)
        if condition_type != Type.BOOL:
            raise create_condition_type_error("while", str(condition_type), while_loop.location)

        self._check_block(while_loop.body, ScopeKind.LOOP, "while")

    def _check_for_loop(self, for_loop: ForLoop):
        """Both bounds must be int; the loop variable is an int in the loop scope."""
        for bound, expr in (("start", for_loop.start), ("end", for_loop.end)):
            bound_type = self._check_expression(expr)
            if bound_type != Type.INT:
                raise create_range_type_error(bound, str(bound_type), for_loop.location)

        self._check_block(for_loop.body, ScopeKind.LOOP, "for", int_names=[for_loop.variable])

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _check_expression(self, expr: Expression) -> Type:
        """Check an expression and return its static type."""
        literal_type = LITERAL_TYPES.get(type(expr))
        if literal_type is not None:
            result_type = literal_type
        elif isinstance(expr, Identifier):
            result_type = self.symbol_table.lookup_type(expr.name, expr.location)
        elif isinstance(expr, (Arithmetic, Comparison)):
            result_type = self._check_binary_operation(expr)
        elif isinstance(expr, FunctionCall):
            result_type = self._check_function_call(expr)
        else:
            raise TypeError(f"Unknown expression node: {type(expr).__name__}")

        self.type_annotations[id(expr)] = result_type
        return result_type

    def _check_binary_operation(self, expr) -> Type:
        """Operands must have the same type; int and float never mix."""
        left_type = self._check_expression(expr.left)
        right_type = self._check_expression(expr.right)

        if left_type != right_type:
            raise create_type_mismatch_error(
                str(left_type), str(right_type),
                expr.location, f"operands of '{expr.operator}'"
            )

        if isinstance(expr, Comparison):
            return Type.BOOL
        return left_type

    def _check_function_call(self, call: FunctionCall) -> Type:
        for arg in call.args:
            self._check_expression(arg)

        signature = self.symbol_table.lookup_function_safe(call.name)
        if signature is None:
            logger.debug("call to unknown function '%s' left to the interpreter", call.name)
            return DEFAULT_CALL_TYPE

        self._check_function(call.name)
        if call.name in self._return_types:
            # Recursive call: only the rets before it are known
            return self._return_types[call.name] or DEFAULT_CALL_TYPE
        return signature.return_type or DEFAULT_CALL_TYPE


def analyze_string(source: str, filename: str = "<string>") -> AnalysisResult:
    """
    Convenience function to lex, parse and analyze a source string.

    Raises:
        LexerError, ParseError, SemanticError: On the first problem found
    """
    from ..parser import parse_string

    program = parse_string(source, filename)
    return SemanticAnalyzer().analyze(program)
