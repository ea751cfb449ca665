"""
Neutron Interpreter Package

Tree-walking evaluation of analysed Neutron programs.

Author: xwest
"""

from .values import Value, ValueKind, FunctionInfo
from .environment import Environment
from .errors import InterpreterError
from .interpreter import Interpreter, run_string, DEFAULT_ENTRY_POINT

__all__ = [
    "Interpreter", "run_string", "DEFAULT_ENTRY_POINT",
    "Value", "ValueKind", "FunctionInfo",
    "Environment",
    "InterpreterError",
]
