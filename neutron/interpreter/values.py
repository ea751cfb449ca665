"""
Runtime values for the Neutron interpreter.

Author: xwest
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List

from ..parser.ast_nodes import Statement


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class ValueKind(Enum):
    """Runtime value kinds."""
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    VOID = "void"
    RETURN = "return"    # Wraps a value unwinding to the nearest call


@dataclass(frozen=True)
class Value:
    """
    A runtime value: a kind tag plus its Python payload.

    Ints hold Python ints kept within the signed 64-bit range by the
    interpreter; RETURN holds another Value.
    """
    kind: ValueKind
    data: Any = None

    @classmethod
    def from_int(cls, data) -> "Value":
        return cls(ValueKind.INT, data)

    @classmethod
    def from_float(cls, data) -> "Value":
        return cls(ValueKind.FLOAT, data)

    @classmethod
    def from_bool(cls, data) -> "Value":
        return cls(ValueKind.BOOL, bool(data))

    @classmethod
    def from_string(cls, data) -> "Value":
        return cls(ValueKind.STRING, data)

    @classmethod
    def void(cls) -> "Value":
        return cls(ValueKind.VOID)

    @classmethod
    def returned(cls, value: "Value") -> "Value":
        """Wrap a value so it unwinds enclosing blocks up to the call."""
        return cls(ValueKind.RETURN, value)

    @property
    def is_return(self) -> bool:
        return self.kind == ValueKind.RETURN

    def __str__(self) -> str:
        label = self.kind.name.capitalize()
        if self.kind == ValueKind.VOID:
            return label
        if self.kind == ValueKind.BOOL:
            return f"{label}({'true' if self.data else 'false'})"
        if self.kind == ValueKind.STRING:
            return f"{label}({self.data!r})"
        return f"{label}({self.data})"


def fits_int64(number: int) -> bool:
    return INT64_MIN <= number <= INT64_MAX


@dataclass
class FunctionInfo:
    """A declared function as stored in the interpreter's function table."""
    name: str
    params: List[str]
    body: List[Statement] = field(default_factory=list)

    @property
    def arity(self) -> int:
        return len(self.params)
