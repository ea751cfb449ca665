"""
Neutron Semantic Analyzer Package

Implements static checking of parsed programs:
- Scoped symbol resolution
- Expression typing with exact type matching
- Declaration rules for variables and functions

Author: xwest
"""

from .symbol_table import SymbolTable, Symbol, Scope, ScopeKind, FunctionSignature
from .errors import SemanticError
from .semantic_analyzer import SemanticAnalyzer, AnalysisResult, analyze_string

__all__ = [
    # Main analyzer
    "SemanticAnalyzer", "AnalysisResult", "analyze_string",

    # Symbol management
    "SymbolTable", "Symbol", "Scope", "ScopeKind", "FunctionSignature",

    # Error handling
    "SemanticError",
]
