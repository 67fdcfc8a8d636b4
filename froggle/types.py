"""Type definitions and runtime values for Froggle.

Static types are `TypeSpec` instances (`number`, `bool` and the return-only
`void`) and `FunctionType` signatures. At runtime a `number` is a Python
`int`, a `bool` is a Python `bool`, and a function is a `FunctionValue`
remembering the frame it was declared in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True)
class TypeSpec:
    """A Froggle type, identified by its keyword (`number`, `bool`, `void`)."""
    kind: str

    def __repr__(self) -> str:
        return self.kind

    @property
    def is_value(self) -> bool:
        """Whether variables, parameters and expressions may hold this type."""
        return self.kind != 'void'

    @staticmethod
    def from_name(name: str) -> Optional['TypeSpec']:
        return TYPE_NAMES.get(name)


NUMBER = TypeSpec('number')
BOOL = TypeSpec('bool')
VOID = TypeSpec('void')

TYPE_NAMES = {t.kind: t for t in (NUMBER, BOOL, VOID)}


@dataclass(frozen=True)
class FunctionType:
    """Static signature of a declared function."""
    params: Tuple[TypeSpec, ...]
    return_type: TypeSpec

    def __repr__(self) -> str:
        inner = ", ".join(repr(p) for p in self.params)
        return f"func({inner}): {self.return_type!r}"


class VoidVal:
    """Marker object for the result of a `void` function."""
    def __repr__(self) -> str:
        return 'void'


VOID_VALUE = VoidVal()


class FunctionValue:
    """Represents a user-defined Froggle function."""
    def __init__(self, name: str, params: List[Any], return_type: TypeSpec, body: Any, frame: int):
        self.name = name
        self.params = params
        self.return_type = return_type
        self.body = body
        self.frame = frame  # declaration frame; call frames are parented here

    @property
    def signature(self) -> FunctionType:
        return FunctionType(tuple(p.type_spec for p in self.params), self.return_type)

    def __repr__(self) -> str:
        return f"<function {self.name}>"


def type_of(value: Any) -> Any:
    """Return the static type of a runtime value.

    Used to rebuild a type scope from values already bound in a persistent
    global frame. Raises TypeError for objects that are not Froggle values.
    """
    # bool is a subclass of int; test it first
    if isinstance(value, bool):
        return BOOL
    if isinstance(value, int):
        return NUMBER
    if isinstance(value, FunctionValue):
        return value.signature
    if isinstance(value, VoidVal):
        return VOID
    raise TypeError(f"not a Froggle value: {value!r}")


def to_string(value: Any) -> str:
    """Convert a Froggle value to the text `croak` prints."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    return repr(value)
