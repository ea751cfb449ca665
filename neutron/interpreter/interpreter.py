"""
Tree-walking interpreter for Neutron.

Evaluates an analysed Program directly over the AST:
- Top-level statements run in order, then the entry point (``run``) is called
- Blocks, loop bodies and branches each get a fresh runtime scope
- ``ret`` unwinds to the nearest call boundary as a RETURN value
- Calls run against a copy of the global scope plus their parameters

Author: xwest
"""

import logging
import math
from typing import Dict, List, Optional

from ..lexer.tokens import SourceLocation
from ..parser.ast_nodes import (
    ASTNode, Program, Statement, Expression, ClassDeclaration,
    FunctionDeclaration, VariableDeclaration, Assignment, IfElse, WhileLoop,
    ForLoop, Ret, Number, Float, Boolean, StringLiteral, Identifier,
    FunctionCall, Arithmetic, Comparison
)
from .values import Value, ValueKind, FunctionInfo, fits_int64
from .environment import Environment
from .errors import (
    create_unsupported_operands_error, create_condition_error,
    create_arity_mismatch_error, create_division_by_zero_error,
    create_function_not_found_error, create_integer_overflow_error,
    create_range_error
)

logger = logging.getLogger(__name__)


DEFAULT_ENTRY_POINT = "run"

NUMERIC_KINDS = (ValueKind.INT, ValueKind.FLOAT)


class Interpreter:
    """
    Neutron tree-walking interpreter.

    Holds the runtime environment and the function table. A fresh
    interpreter should be used per program.
    """

    def __init__(self, entry_point: str = DEFAULT_ENTRY_POINT):
        """
        Args:
            entry_point: Function called without arguments after the
                top-level statements, if the program declares it
        """
        self.entry_point = entry_point
        self.global_environment = Environment()
        self.environment = self.global_environment
        self.functions: Dict[str, FunctionInfo] = {}
        self.call_depth = 0

    @property
    def variables(self) -> Dict[str, Value]:
        """Merged snapshot of the bindings visible right now."""
        return self.environment.snapshot()

    def interpret(self, node: ASTNode) -> Value:
        """
        Evaluate a node.

        Programs return the entry point's result, or Void when there is no
        entry point. Statements return Void or a RETURN-wrapped value.

        Raises:
            InterpreterError: On the first runtime fault
        """
        if isinstance(node, Program):
            return self._execute_program(node)
        elif isinstance(node, Expression):
            return self._evaluate(node)
        return self._execute(node)

    def call_function(self, name: str, args: List[Value],
                      location: Optional[SourceLocation] = None) -> Value:
        """
        Call a declared function with already evaluated arguments.

        The body runs against a copy of the global scope plus a scope of
        parameters. The caller's environment is restored afterwards, so
        neither callee locals nor global writes made by the callee survive.
        """
        func = self.functions.get(name)
        if func is None:
            raise create_function_not_found_error(name, location)

        if len(args) != func.arity:
            raise create_arity_mismatch_error(name, func.arity, len(args), location)

        logger.debug("call %s(%s) at depth %d",
                     name, ", ".join(str(arg) for arg in args), self.call_depth)

        saved_environment = self.environment
        self.environment = Environment([
            dict(self.global_environment.global_scope),
            dict(zip(func.params, args)),
        ])
        self.call_depth += 1
        try:
            for stmt in func.body:
                result = self._execute(stmt)
                if result.is_return:
                    return result.data
            return Value.void()
        finally:
            self.call_depth -= 1
            self.environment = saved_environment

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _execute_program(self, program: Program) -> Value:
        for stmt in program.statements:
            self._execute(stmt)

        if self.entry_point in self.functions:
            return self.call_function(self.entry_point, [], program.location)

        logger.debug("no '%s' function declared, nothing to call", self.entry_point)
        return Value.void()

    def _execute(self, stmt: Statement) -> Value:
        """Execute one statement; returns Void or a RETURN value."""
        if isinstance(stmt, VariableDeclaration):
            self.environment.declare(stmt.name, Value.void())
        elif isinstance(stmt, Assignment):
            value = self._evaluate(stmt.expression)
            self.environment.assign(stmt.variable, value, stmt.location)
        elif isinstance(stmt, FunctionDeclaration):
            self.functions[stmt.name] = FunctionInfo(stmt.name, list(stmt.params), list(stmt.body))
        elif isinstance(stmt, ClassDeclaration):
            # Classes only group their members; nothing is instantiated
            for member in stmt.members:
                self._execute(member)
        elif isinstance(stmt, IfElse):
            return self._execute_if_else(stmt)
        elif isinstance(stmt, WhileLoop):
            return self._execute_while_loop(stmt)
        elif isinstance(stmt, ForLoop):
            return self._execute_for_loop(stmt)
        elif isinstance(stmt, Ret):
            return Value.returned(self._evaluate(stmt.expression))
        elif isinstance(stmt, FunctionCall):
            # Result of a call statement is discarded
            self._evaluate(stmt)
        else:
            raise TypeError(f"Cannot execute node: {type(stmt).__name__}")

        return Value.void()

    def _execute_block(self, statements: List[Statement],
                       bindings: Optional[Dict[str, Value]] = None) -> Value:
        """Run statements in a fresh scope, stopping at the first RETURN."""
        self.environment.push(bindings)
        try:
            for stmt in statements:
                result = self._execute(stmt)
                if result.is_return:
                    return result
            return Value.void()
        finally:
            self.environment.pop()

    def _execute_if_else(self, if_else: IfElse) -> Value:
        if self._evaluate_condition(if_else.condition, "if", if_else.location):
            return self._execute_block(if_else.then_block)
        elif if_else.else_block is not None:
            return self._execute_block(if_else.else_block)
        return Value.void()

    def _execute_while_loop(self, while_loop: WhileLoop) -> Value:
        while self._evaluate_condition(while_loop.condition, "while", while_loop.location):
            result = self._execute_block(while_loop.body)
            if result.is_return:
                return result
        return Value.void()

    def _execute_for_loop(self, for_loop: ForLoop) -> Value:
        """
        Iterate over [start, end). The loop variable is bound in a scope of
        its own, so any outer binding of the same name is left untouched.
        """
        start = self._evaluate(for_loop.start)
        end = self._evaluate(for_loop.end)
        for bound in (start, end):
            if bound.kind != ValueKind.INT:
                raise create_range_error(bound.kind.value, for_loop.location)

        for i in range(start.data, end.data):
            result = self._execute_block(for_loop.body, {for_loop.variable: Value.from_int(i)})
            if result.is_return:
                return result

        return Value.void()

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _evaluate(self, expr: Expression) -> Value:
        if isinstance(expr, Number):
            return self._checked_int(expr.value, expr.location)
        elif isinstance(expr, Float):
            return Value.from_float(expr.value)
        elif isinstance(expr, Boolean):
            return Value.from_bool(expr.value)
        elif isinstance(expr, StringLiteral):
            return Value.from_string(expr.value)
        elif isinstance(expr, Identifier):
            return self.environment.lookup(expr.name, expr.location)
        elif isinstance(expr, Arithmetic):
            return self._evaluate_arithmetic(expr)
        elif isinstance(expr, Comparison):
            return self._evaluate_comparison(expr)
        elif isinstance(expr, FunctionCall):
            # Arguments are evaluated before the callee is looked up
            args = [self._evaluate(arg) for arg in expr.args]
            return self.call_function(expr.name, args, expr.location)

        raise TypeError(f"Cannot evaluate node: {type(expr).__name__}")

    def _evaluate_condition(self, condition: Expression, construct: str,
                            location: Optional[SourceLocation]) -> bool:
        value = self._evaluate(condition)
        if value.kind != ValueKind.BOOL:
            raise create_condition_error(construct, value.kind.value, location)
        return value.data

    def _evaluate_arithmetic(self, expr: Arithmetic) -> Value:
        left = self._evaluate(expr.left)
        right = self._evaluate(expr.right)

        if left.kind != right.kind or left.kind not in NUMERIC_KINDS:
            raise create_unsupported_operands_error(
                expr.operator, left.kind.value, right.kind.value, expr.location
            )

        if left.kind == ValueKind.FLOAT:
            return Value.from_float(_float_arithmetic(expr.operator, left.data, right.data))

        a, b = left.data, right.data
        if expr.operator == "+":
            result = a + b
        elif expr.operator == "-":
            result = a - b
        elif expr.operator == "*":
            result = a * b
        else:
            if b == 0:
                raise create_division_by_zero_error(expr.location)
            result = _truncating_division(a, b)

        return self._checked_int(result, expr.location)

    def _evaluate_comparison(self, expr: Comparison) -> Value:
        left = self._evaluate(expr.left)
        right = self._evaluate(expr.right)
        operator = expr.operator

        if left.kind == right.kind:
            if left.kind in NUMERIC_KINDS:
                if operator == "<":
                    return Value.from_bool(left.data < right.data)
                elif operator == ">":
                    return Value.from_bool(left.data > right.data)
                return Value.from_bool(left.data == right.data)

            if operator == "==" and left.kind in (ValueKind.BOOL, ValueKind.STRING):
                return Value.from_bool(left.data == right.data)

        raise create_unsupported_operands_error(
            operator, left.kind.value, right.kind.value, expr.location
        )

    @staticmethod
    def _checked_int(number: int, location: Optional[SourceLocation]) -> Value:
        if not fits_int64(number):
            raise create_integer_overflow_error(location)
        return Value.from_int(number)


def _truncating_division(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _float_arithmetic(operator: str, a: float, b: float) -> float:
    """IEEE-754 float arithmetic; division by zero gives inf or nan."""
    if operator == "+":
        return a + b
    elif operator == "-":
        return a - b
    elif operator == "*":
        return a * b

    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def run_string(source: str, filename: str = "<string>",
               entry_point: str = DEFAULT_ENTRY_POINT) -> Value:
    """
    Convenience function to check and run a source string.

    Raises:
        NeutronError: On the first lexical, syntax, semantic or runtime error
    """
    from ..analyzer import analyze_string

    analysis = analyze_string(source, filename)
    return Interpreter(entry_point).interpret(analysis.program)
