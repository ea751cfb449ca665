"""
Test suite for the Neutron interpreter.

Tests cover:
- Entry point handling and return propagation
- Integer and float arithmetic, comparisons
- Loop scoping and call isolation
- Runtime faults

Author: xwest
"""

import math
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from neutron.errors import ErrorKind
from neutron.parser import (
    parse_string, Program, FunctionDeclaration, FunctionCall, Assignment,
    VariableDeclaration, Arithmetic, Number, Identifier, Ret, Type
)
from neutron.interpreter import (
    Interpreter, InterpreterError, Value, ValueKind, Environment, run_string
)


def run(source, entry_point="run"):
    """Parse and interpret without semantic analysis; returns (value, interpreter)."""
    interpreter = Interpreter(entry_point)
    value = interpreter.interpret(parse_string(source))
    return value, interpreter


class TestValues(unittest.TestCase):

    def test_constructors_and_equality(self):
        self.assertEqual(Value.from_int(6), Value(ValueKind.INT, 6))
        self.assertNotEqual(Value.from_int(1), Value.from_float(1.0))
        self.assertEqual(Value.void().kind, ValueKind.VOID)
        self.assertTrue(Value.returned(Value.from_int(1)).is_return)

    def test_display(self):
        self.assertEqual(str(Value.from_int(14)), "Int(14)")
        self.assertEqual(str(Value.from_float(2.5)), "Float(2.5)")
        self.assertEqual(str(Value.from_bool(True)), "Bool(true)")
        self.assertEqual(str(Value.from_string("hi")), "String('hi')")
        self.assertEqual(str(Value.void()), "Void")


class TestEnvironment(unittest.TestCase):

    def test_inner_scopes_shadow_and_vanish(self):
        env = Environment()
        env.declare("x", Value.from_int(1))
        env.push({"x": Value.from_int(2)})
        self.assertEqual(env.lookup("x"), Value.from_int(2))
        env.pop()
        self.assertEqual(env.lookup("x"), Value.from_int(1))

    def test_assign_updates_innermost_binding(self):
        env = Environment()
        env.declare("x", Value.from_int(1))
        env.push()
        env.assign("x", Value.from_int(5))
        env.pop()
        self.assertEqual(env.lookup("x"), Value.from_int(5))

    def test_unbound_names(self):
        env = Environment()
        with self.assertRaises(InterpreterError) as cm:
            env.lookup("nope")
        self.assertEqual(cm.exception.code, "R001")
        with self.assertRaises(InterpreterError):
            env.assign("nope", Value.void())

    def test_outermost_scope_is_kept(self):
        env = Environment()
        env.pop()
        self.assertEqual(len(env), 1)


class TestInterpreter(unittest.TestCase):
    """Test cases for evaluation."""

    def test_top_level_assignments(self):
        value, interpreter = run("var x int x = 5 x = 6")
        self.assertEqual(value, Value.void())
        self.assertEqual(interpreter.variables["x"], Value.from_int(6))

    def test_declaration_binds_void(self):
        _, interpreter = run("var x int")
        self.assertEqual(interpreter.variables["x"], Value.void())

    def test_entry_point_result(self):
        value, _ = run("func run() then ret 2 + 3 * 4 end")
        self.assertEqual(value, Value.from_int(14))

    def test_custom_entry_point(self):
        value, _ = run("func main() then ret 7 end func run() then ret 1 end", entry_point="main")
        self.assertEqual(value, Value.from_int(7))

    def test_function_without_ret_returns_void(self):
        value, _ = run("func run() then var x int end")
        self.assertEqual(value, Value.void())

    def test_return_unwinds_while_loop(self):
        value, _ = run("func run() then while true then ret 1 end end")
        self.assertEqual(value, Value.from_int(1))

    def test_return_unwinds_nested_blocks(self):
        source = """
        func run() then
            for i = 0 10 then
                if i == 3 then
                    ret i
                end
            end
            ret 99
        end
        """
        value, _ = run(source)
        self.assertEqual(value, Value.from_int(3))

    def test_statements_after_ret_do_not_run(self):
        value, _ = run("func run() then ret 1 ret 2 end")
        self.assertEqual(value, Value.from_int(1))

    def test_for_loop_iterates_half_open_range(self):
        source = """
        func run() then
            var count int
            count = 0
            for i = 0 5 then
                count = count + 1
            end
            ret count
        end
        """
        value, _ = run(source)
        self.assertEqual(value, Value.from_int(5))

    def test_for_loop_variable_unbound_afterwards(self):
        _, interpreter = run("for i = 0 5 then end")
        self.assertNotIn("i", interpreter.variables)

    def test_for_loop_restores_previous_binding(self):
        _, interpreter = run("var i int i = 42 for i = 0 3 then end")
        self.assertEqual(interpreter.variables["i"], Value.from_int(42))

    def test_for_loop_restores_binding_after_return(self):
        # A top-level ret leaves the loop early and is then ignored
        _, interpreter = run("var i int i = 7 for i = 0 10 then if i == 3 then ret i end end")
        self.assertEqual(interpreter.variables["i"], Value.from_int(7))

    def test_empty_range(self):
        value, _ = run("func run() then for i = 5 5 then ret 1 end ret 0 end")
        self.assertEqual(value, Value.from_int(0))

    def test_while_reevaluates_condition(self):
        source = """
        func run() then
            var n int
            n = 0
            while n < 10 then
                n = n + 3
            end
            ret n
        end
        """
        value, _ = run(source)
        self.assertEqual(value, Value.from_int(12))

    def test_if_else_branches(self):
        source = "func run() then if 2 > 3 then ret 1 else ret 2 end end"
        self.assertEqual(run(source)[0], Value.from_int(2))

    def test_recursion(self):
        source = """
        func fact(n) then
            if n < 2 then ret 1 end
            ret n * fact(n - 1)
        end
        func run() then ret fact(10) end
        """
        self.assertEqual(run(source)[0], Value.from_int(3628800))

    def test_callee_locals_do_not_leak(self):
        source = """
        func helper() then
            var secret int
            secret = 1
            ret secret
        end
        var out int
        out = helper()
        """
        _, interpreter = run(source)
        self.assertEqual(interpreter.variables["out"], Value.from_int(1))
        self.assertNotIn("secret", interpreter.variables)

    def test_callee_cannot_see_caller_locals(self):
        source = """
        func peek() then ret hidden end
        func run() then
            var hidden int
            hidden = 1
            ret peek()
        end
        """
        with self.assertRaises(InterpreterError) as cm:
            run(source)
        self.assertEqual(cm.exception.code, "R001")

    def test_callee_reads_globals_but_writes_are_discarded(self):
        source = """
        var g int
        g = 10
        func bump() then
            g = g + 1
            ret g
        end
        var seen int
        seen = bump()
        """
        _, interpreter = run(source)
        self.assertEqual(interpreter.variables["seen"], Value.from_int(11))
        self.assertEqual(interpreter.variables["g"], Value.from_int(10))

    def test_caller_values_unchanged_by_call(self):
        source = """
        func run() then
            var a int
            a = 5
            var b int
            b = twice(a)
            ret a + b
        end
        func twice(a) then
            a = a * 2
            ret a
        end
        """
        self.assertEqual(run(source)[0], Value.from_int(15))

    def test_class_members_run_in_enclosing_scope(self):
        source = """
        class Counter then
            var start int
            start = 3
            func get() then ret 4 end
        end
        func run() then ret get() end
        """
        value, interpreter = run(source)
        self.assertEqual(value, Value.from_int(4))
        self.assertEqual(interpreter.variables["start"], Value.from_int(3))

    def test_call_statement_discards_result(self):
        value, _ = run("func f() then ret 5 end func run() then f() ret 1 end")
        self.assertEqual(value, Value.from_int(1))

    def test_top_level_ret_is_ignored(self):
        _, interpreter = run("ret 1 var x int x = 2")
        self.assertEqual(interpreter.variables["x"], Value.from_int(2))

    def test_interpret_single_nodes(self):
        interpreter = Interpreter()
        self.assertEqual(
            interpreter.interpret(Arithmetic("+", Number(1), Number(2))), Value.from_int(3)
        )
        interpreter.interpret(VariableDeclaration("x", Type.INT))
        interpreter.interpret(Assignment("x", Number(9)))
        self.assertEqual(interpreter.interpret(Identifier("x")), Value.from_int(9))
        self.assertEqual(
            interpreter.interpret(Ret(Number(1))), Value.returned(Value.from_int(1))
        )

    def test_functions_table(self):
        _, interpreter = run("func f(a, b) then ret a end")
        self.assertEqual(interpreter.functions["f"].params, ["a", "b"])
        self.assertEqual(interpreter.functions["f"].arity, 2)


class TestArithmetic(unittest.TestCase):

    def _eval(self, expression):
        return run(f"func run() then ret {expression} end")[0]

    def test_integer_operators(self):
        self.assertEqual(self._eval("7 + 3"), Value.from_int(10))
        self.assertEqual(self._eval("7 - 10"), Value.from_int(-3))
        self.assertEqual(self._eval("7 * -3"), Value.from_int(-21))
        self.assertEqual(self._eval("7 / 2"), Value.from_int(3))

    def test_integer_division_truncates_toward_zero(self):
        self.assertEqual(self._eval("-7 / 2"), Value.from_int(-3))
        self.assertEqual(self._eval("7 / -2"), Value.from_int(-3))
        self.assertEqual(self._eval("-7 / -2"), Value.from_int(3))

    def test_float_operators(self):
        self.assertEqual(self._eval("1.5 + 2.25"), Value.from_float(3.75))
        self.assertEqual(self._eval("1.0 / 4.0"), Value.from_float(0.25))

    def test_float_division_by_zero_follows_ieee(self):
        self.assertEqual(self._eval("1.0 / 0.0"), Value.from_float(math.inf))
        self.assertEqual(self._eval("-1.0 / 0.0"), Value.from_float(-math.inf))
        self.assertTrue(math.isnan(self._eval("0.0 / 0.0").data))

    def test_integer_division_by_zero(self):
        with self.assertRaises(InterpreterError) as cm:
            self._eval("1 / 0")
        self.assertEqual(cm.exception.code, "R005")
        self.assertEqual(cm.exception.kind, ErrorKind.RUNTIME)

    def test_integer_overflow(self):
        with self.assertRaises(InterpreterError) as cm:
            self._eval("9223372036854775807 + 1")
        self.assertEqual(cm.exception.code, "R007")
        self.assertEqual(self._eval("-9223372036854775807 - 1"), Value.from_int(-(2 ** 63)))

    def test_mixed_kinds_fault(self):
        with self.assertRaises(InterpreterError) as cm:
            self._eval("1 + 1.0")
        self.assertEqual(cm.exception.code, "R002")

    def test_string_arithmetic_faults(self):
        with self.assertRaises(InterpreterError) as cm:
            self._eval('"a" + "b"')
        self.assertEqual(cm.exception.code, "R002")

    def test_comparisons(self):
        self.assertEqual(self._eval("1 < 2"), Value.from_bool(True))
        self.assertEqual(self._eval("2.5 > 3.5"), Value.from_bool(False))
        self.assertEqual(self._eval("4 == 4"), Value.from_bool(True))
        self.assertEqual(self._eval("true == false"), Value.from_bool(False))
        self.assertEqual(self._eval('"a" == "a"'), Value.from_bool(True))

    def test_ordering_strings_faults(self):
        with self.assertRaises(InterpreterError) as cm:
            self._eval('"a" < "b"')
        self.assertEqual(cm.exception.code, "R002")


class TestRuntimeFaults(unittest.TestCase):

    def test_function_not_found(self):
        with self.assertRaises(InterpreterError) as cm:
            run("foo()")
        self.assertEqual(cm.exception.code, "R006")

    def test_arity_mismatch(self):
        with self.assertRaises(InterpreterError) as cm:
            run("func f(a) then ret a end f(1, 2)")
        self.assertEqual(cm.exception.code, "R004")
        self.assertIn("expects 1 arguments, got 2", cm.exception.message)

    def test_entry_point_with_parameters(self):
        with self.assertRaises(InterpreterError) as cm:
            run("func run(a) then ret a end")
        self.assertEqual(cm.exception.code, "R004")

    def test_arguments_evaluated_before_lookup(self):
        with self.assertRaises(InterpreterError) as cm:
            run("missing(1 / 0)")
        self.assertEqual(cm.exception.code, "R005")

    def test_undefined_variable(self):
        with self.assertRaises(InterpreterError) as cm:
            run("x = 1")
        self.assertEqual(cm.exception.code, "R001")

    def test_non_bool_condition(self):
        with self.assertRaises(InterpreterError) as cm:
            run("if 1 then end")
        self.assertEqual(cm.exception.code, "R003")

    def test_non_int_range(self):
        with self.assertRaises(InterpreterError) as cm:
            run("for i = 0 1.5 then end")
        self.assertEqual(cm.exception.code, "R008")

    def test_environment_restored_after_fault(self):
        interpreter = Interpreter()
        program = Program([
            FunctionDeclaration("boom", [], [Ret(Arithmetic("/", Number(1), Number(0)))]),
            FunctionCall("boom", []),
        ])
        with self.assertRaises(InterpreterError):
            interpreter.interpret(program)
        self.assertIs(interpreter.environment, interpreter.global_environment)


class TestRunString(unittest.TestCase):

    def test_runs_checked_program(self):
        self.assertEqual(run_string("func run() then ret 40 + 2 end"), Value.from_int(42))

    def test_unknown_function_passes_checks_and_fails_at_runtime(self):
        with self.assertRaises(InterpreterError) as cm:
            run_string("foo()")
        self.assertEqual(cm.exception.code, "R006")

    def test_string_result_of_later_function(self):
        source = (
            'func run() then var s string s = greet() ret s end '
            'func greet() then ret "hi" end'
        )
        self.assertEqual(run_string(source), Value.from_string("hi"))


if __name__ == "__main__":
    unittest.main()
