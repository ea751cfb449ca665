"""
Neutron Language Package

A small imperative language with classes as namespaces, functions, typed
variables and loops, implemented as a lexer, parser, semantic analyzer and
tree-walking interpreter.

Architecture:
    neutron/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis and AST generation
    ├── analyzer/        # Scopes, declarations and static types
    ├── interpreter/     # Runtime values, environment and evaluation
    ├── pipeline.py      # Result-returning driver over all phases
    └── cli.py           # `neutron` command

Author: xwest
License: MIT
"""

import logging

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Parser before analyzer: the parser pulls in the analyzer's symbol table,
# which needs the AST module to be loaded already.
from .errors import ErrorKind, Diagnostic, NeutronError
from .lexer import Lexer, LexerError
from .parser import Parser, ParseError
from .analyzer import SemanticAnalyzer, SemanticError
from .interpreter import Interpreter, InterpreterError, Value
from .pipeline import PipelineResult, check_source, run_source, check_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "SemanticAnalyzer",
    "Interpreter",
    "Value",

    # Pipeline
    "PipelineResult",
    "check_source",
    "run_source",
    "check_file",

    # Errors
    "ErrorKind",
    "Diagnostic",
    "NeutronError",
    "LexerError",
    "ParseError",
    "SemanticError",
    "InterpreterError",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
