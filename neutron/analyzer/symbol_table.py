"""
Symbol table and scope management for Neutron.

A stack of scopes maps variable names to static types; a single flat table
maps function names to their parameter lists. Both the parser (advisory
checks) and the semantic analyzer (authoritative checks) build their own
instance; the two are never shared.

Author: xwest
"""

import logging
from typing import Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum

from ..lexer.tokens import SourceLocation
from ..parser.ast_nodes import Type
from .errors import (
    create_undefined_symbol_error, create_redeclaration_error,
    create_undefined_function_error, create_function_redeclaration_error
)

logger = logging.getLogger(__name__)


class ScopeKind(Enum):
    """Types of scopes."""
    GLOBAL = "global"
    CLASS = "class"
    FUNCTION = "function"
    BLOCK = "block"
    LOOP = "loop"


@dataclass
class Symbol:
    """A declared variable."""
    name: str
    symbol_type: Type
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        return f"{self.name}: {self.symbol_type}"


@dataclass
class Scope:
    """Represents a lexical scope."""
    kind: ScopeKind
    name: str
    symbols: Dict[str, Symbol] = field(default_factory=dict)

    def define_symbol(self, symbol: Symbol) -> None:
        """Define a symbol in this scope."""
        if symbol.name in self.symbols:
            raise create_redeclaration_error(
                symbol.name, symbol.location, self.symbols[symbol.name].location
            )
        self.symbols[symbol.name] = symbol

    def lookup_symbol_local(self, name: str) -> Optional[Symbol]:
        """Look up a symbol only in this scope."""
        return self.symbols.get(name)

    def __str__(self) -> str:
        return f"Scope({self.kind.value}, {self.name}, {len(self.symbols)} symbols)"


@dataclass
class FunctionSignature:
    name: str
    params: List[str]
    location: Optional[SourceLocation] = None
    # Type of the function's ret expressions; None until the body is checked
    # or when the body never returns a value
    return_type: Optional[Type] = None


class SymbolTable:
    """
    Manages the scope stack and the global function table.

    Invariants: a variable may be redeclared in a strictly nested scope but
    not twice in the same scope; function names are globally unique; the
    global scope is never popped.
    """

    def __init__(self):
        self.global_scope = Scope(ScopeKind.GLOBAL, "global")
        self.scopes: List[Scope] = [self.global_scope]
        self.functions: Dict[str, FunctionSignature] = {}
        self._suspended: List[List[Scope]] = []

    @property
    def current_scope(self) -> Scope:
        return self.scopes[-1]

    @property
    def depth(self) -> int:
        """Number of open scopes, global included."""
        return len(self.scopes)

    def enter_scope(self, kind: ScopeKind, name: str) -> Scope:
        """Push a new innermost scope."""
        new_scope = Scope(kind, name)
        self.scopes.append(new_scope)
        return new_scope

    def exit_scope(self) -> Optional[Scope]:
        """Pop the innermost scope; the global scope stays put."""
        if len(self.scopes) > 1:
            return self.scopes.pop()
        return None

    def enter_function_scope(self, name: str) -> Scope:
        """
        Open a function body scope that sees only the global scope.

        Enclosing block, loop and class scopes are hidden until the matching
        exit_function_scope(), since a called function only has the globals
        and its own parameters.
        """
        self._suspended.append(self.scopes)
        self.scopes = [self.global_scope]
        return self.enter_scope(ScopeKind.FUNCTION, name)

    def exit_function_scope(self) -> Scope:
        function_scope = self.scopes[-1]
        self.scopes = self._suspended.pop()
        return function_scope

    # ------------------------------------------------------------------
    # Variables
    # ------------------------------------------------------------------

    def declare_variable(self, name: str, var_type: Type,
                         location: Optional[SourceLocation] = None) -> Symbol:
        """Declare a variable in the innermost scope."""
        symbol = Symbol(name, var_type, location)
        self.current_scope.define_symbol(symbol)
        logger.debug("declared %s in %s", symbol, self.current_scope)
        return symbol

    def lookup_symbol_safe(self, name: str) -> Optional[Symbol]:
        """Look up a variable from the innermost scope outwards, or None."""
        for scope in reversed(self.scopes):
            symbol = scope.lookup_symbol_local(name)
            if symbol is not None:
                return symbol
        return None

    def lookup_symbol(self, name: str, location: Optional[SourceLocation] = None) -> Symbol:
        """Look up a variable and raise a declaration error if it is missing."""
        symbol = self.lookup_symbol_safe(name)
        if symbol is None:
            raise create_undefined_symbol_error(name, location, self.get_similar_names(name))
        return symbol

    def lookup_type(self, name: str, location: Optional[SourceLocation] = None) -> Type:
        return self.lookup_symbol(name, location).symbol_type

    def is_declared(self, name: str) -> bool:
        return self.lookup_symbol_safe(name) is not None

    def visible_variables(self) -> Dict[str, Type]:
        """All visible variables, inner declarations shadowing outer ones."""
        result = {}
        for scope in self.scopes:
            for name, symbol in scope.symbols.items():
                result[name] = symbol.symbol_type
        return result

    def get_similar_names(self, name: str, max_distance: int = 2) -> List[str]:
        """Get visible names close to the given one (for error suggestions)."""
        def levenshtein_distance(s1: str, s2: str) -> int:
            if len(s1) < len(s2):
                return levenshtein_distance(s2, s1)

            if len(s2) == 0:
                return len(s1)

            previous_row = list(range(len(s2) + 1))
            for i, c1 in enumerate(s1):
                current_row = [i + 1]
                for j, c2 in enumerate(s2):
                    insertions = previous_row[j + 1] + 1
                    deletions = current_row[j] + 1
                    substitutions = previous_row[j] + (c1 != c2)
                    current_row.append(min(insertions, deletions, substitutions))
                previous_row = current_row

            return previous_row[-1]

        similar_names = []
        for symbol_name in self.visible_variables():
            distance = levenshtein_distance(name.lower(), symbol_name.lower())
            if distance <= max_distance:
                similar_names.append((symbol_name, distance))

        similar_names.sort(key=lambda x: x[1])
        return [similar for similar, _ in similar_names[:5]]

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def declare_function(self, name: str, params: List[str],
                         location: Optional[SourceLocation] = None) -> FunctionSignature:
        """Register a function globally; names cannot repeat."""
        if name in self.functions:
            raise create_function_redeclaration_error(name, location)
        signature = FunctionSignature(name, list(params), location)
        self.functions[name] = signature
        logger.debug("declared function %s(%s)", name, ", ".join(params))
        return signature

    def lookup_function_safe(self, name: str) -> Optional[FunctionSignature]:
        return self.functions.get(name)

    def lookup_function(self, name: str, location: Optional[SourceLocation] = None) -> FunctionSignature:
        signature = self.lookup_function_safe(name)
        if signature is None:
            raise create_undefined_function_error(name, location)
        return signature

    def __str__(self) -> str:
        return f"SymbolTable(current: {self.current_scope}, functions: {len(self.functions)})"
