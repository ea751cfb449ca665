"""
Runs the bundled sample programs end to end.

Author: xwest
"""

import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from neutron import check_file, ErrorKind
from neutron.interpreter import Value

EXAMPLES_DIR = os.path.join(project_root, "examples")


def example(name):
    return os.path.join(EXAMPLES_DIR, name)


class TestExamples(unittest.TestCase):

    def _run(self, name):
        result = check_file(example(name), run=True)
        self.assertTrue(result.ok, str(result.error))
        return result.value

    def test_factorial(self):
        self.assertEqual(self._run("factorial.neutron"), Value.from_int(3628800))

    def test_fibonacci(self):
        self.assertEqual(self._run("fibonacci.neutron"), Value.from_int(6765))

    def test_shapes(self):
        self.assertEqual(self._run("shapes.neutron"), Value.from_int(26))

    def test_countdown(self):
        self.assertEqual(self._run("countdown.neutron"), Value.from_int(4))

    def test_type_error(self):
        result = check_file(example("type_error.neutron"))
        self.assertFalse(result.ok)
        self.assertEqual(result.error.kind, ErrorKind.STATIC_TYPE)


if __name__ == "__main__":
    unittest.main()
