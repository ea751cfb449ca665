"""
Test suite for the Neutron symbol table.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from neutron.errors import ErrorKind
from neutron.parser import Type
from neutron.analyzer import SymbolTable, ScopeKind, SemanticError


class TestSymbolTable(unittest.TestCase):
    """Test cases for scope management."""

    def setUp(self):
        self.table = SymbolTable()

    def test_starts_with_global_scope(self):
        self.assertEqual(self.table.depth, 1)
        self.assertEqual(self.table.current_scope.kind, ScopeKind.GLOBAL)

    def test_declare_and_lookup(self):
        self.table.declare_variable("x", Type.INT)
        self.assertEqual(self.table.lookup_type("x"), Type.INT)
        self.assertTrue(self.table.is_declared("x"))

    def test_lookup_walks_outwards(self):
        self.table.declare_variable("x", Type.INT)
        self.table.enter_scope(ScopeKind.FUNCTION, "f")
        self.table.enter_scope(ScopeKind.BLOCK, "if")
        self.assertEqual(self.table.lookup_type("x"), Type.INT)

    def test_inner_declaration_shadows_outer(self):
        self.table.declare_variable("x", Type.INT)
        self.table.enter_scope(ScopeKind.BLOCK, "block")
        self.table.declare_variable("x", Type.STRING)
        self.assertEqual(self.table.lookup_type("x"), Type.STRING)
        self.table.exit_scope()
        self.assertEqual(self.table.lookup_type("x"), Type.INT)

    def test_names_disappear_with_their_scope(self):
        self.table.enter_scope(ScopeKind.LOOP, "for")
        self.table.declare_variable("i", Type.INT)
        self.table.exit_scope()
        self.assertIsNone(self.table.lookup_symbol_safe("i"))

    def test_duplicate_in_same_scope(self):
        self.table.declare_variable("x", Type.INT)
        with self.assertRaises(SemanticError) as cm:
            self.table.declare_variable("x", Type.INT)
        self.assertEqual(cm.exception.code, "S011")
        self.assertEqual(cm.exception.kind, ErrorKind.DECLARATION)

    def test_global_scope_is_never_popped(self):
        self.assertIsNone(self.table.exit_scope())
        self.assertEqual(self.table.depth, 1)
        self.table.declare_variable("x", Type.BOOL)
        self.assertEqual(self.table.lookup_type("x"), Type.BOOL)

    def test_undefined_lookup_suggests_similar_names(self):
        self.table.declare_variable("counter", Type.INT)
        with self.assertRaises(SemanticError) as cm:
            self.table.lookup_symbol("countr")
        self.assertEqual(cm.exception.code, "S010")
        self.assertIn("Did you mean 'counter'?", cm.exception.diagnostic.suggestions)

    def test_functions_are_global_and_unique(self):
        self.table.enter_scope(ScopeKind.CLASS, "C")
        self.table.declare_function("f", ["a"])
        self.table.exit_scope()
        self.assertEqual(self.table.lookup_function("f").params, ["a"])

        with self.assertRaises(SemanticError) as cm:
            self.table.declare_function("f", [])
        self.assertEqual(cm.exception.code, "S013")

    def test_unknown_function(self):
        with self.assertRaises(SemanticError) as cm:
            self.table.lookup_function("missing")
        self.assertEqual(cm.exception.code, "S012")
        self.assertIsNone(self.table.lookup_function_safe("missing"))

    def test_new_function_has_no_return_type(self):
        self.assertIsNone(self.table.declare_function("f", []).return_type)

    def test_function_scope_sees_only_globals(self):
        self.table.declare_variable("g", Type.INT)
        self.table.enter_scope(ScopeKind.FUNCTION, "outer")
        self.table.declare_variable("local", Type.STRING)

        self.table.enter_function_scope("inner")
        self.assertEqual(self.table.depth, 2)
        self.assertEqual(self.table.current_scope.kind, ScopeKind.FUNCTION)
        self.assertEqual(self.table.lookup_type("g"), Type.INT)
        self.assertIsNone(self.table.lookup_symbol_safe("local"))

        self.table.exit_function_scope()
        self.assertEqual(self.table.depth, 2)
        self.assertEqual(self.table.lookup_type("local"), Type.STRING)

    def test_function_scope_sees_current_globals(self):
        self.table.enter_function_scope("f")
        self.table.exit_function_scope()
        self.table.declare_variable("later", Type.BOOL)
        self.table.enter_function_scope("g")
        self.assertEqual(self.table.lookup_type("later"), Type.BOOL)
        self.table.exit_function_scope()

    def test_visible_variables(self):
        self.table.declare_variable("a", Type.INT)
        self.table.enter_scope(ScopeKind.BLOCK, "block")
        self.table.declare_variable("a", Type.FLOAT)
        self.table.declare_variable("b", Type.BOOL)
        self.assertEqual(self.table.visible_variables(), {"a": Type.FLOAT, "b": Type.BOOL})


if __name__ == "__main__":
    unittest.main()
