"""
Runtime scope chain for the Neutron interpreter.

Author: xwest
"""

from typing import Dict, List, Optional

from ..lexer.tokens import SourceLocation
from .values import Value
from .errors import create_undefined_variable_error


class Environment:
    """
    A stack of name -> Value scopes. Index 0 is the outermost scope and is
    never popped; lookups go from the innermost scope outwards.
    """

    def __init__(self, scopes: Optional[List[Dict[str, Value]]] = None):
        self.scopes: List[Dict[str, Value]] = scopes if scopes else [{}]

    @property
    def global_scope(self) -> Dict[str, Value]:
        return self.scopes[0]

    def push(self, bindings: Optional[Dict[str, Value]] = None):
        self.scopes.append(dict(bindings) if bindings else {})

    def pop(self):
        if len(self.scopes) > 1:
            self.scopes.pop()

    def declare(self, name: str, value: Value):
        """Bind a name in the innermost scope, replacing any binding there."""
        self.scopes[-1][name] = value

    def assign(self, name: str, value: Value, location: Optional[SourceLocation] = None):
        """Rebind the innermost visible binding of ``name``."""
        for scope in reversed(self.scopes):
            if name in scope:
                scope[name] = value
                return
        raise create_undefined_variable_error(name, location)

    def lookup(self, name: str, location: Optional[SourceLocation] = None) -> Value:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        raise create_undefined_variable_error(name, location)

    def __contains__(self, name: str) -> bool:
        return any(name in scope for scope in self.scopes)

    def snapshot(self) -> Dict[str, Value]:
        """Merged view of all visible bindings, inner ones winning."""
        merged = {}
        for scope in self.scopes:
            merged.update(scope)
        return merged

    def __len__(self) -> int:
        return len(self.scopes)
