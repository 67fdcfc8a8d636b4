"""Abstract Syntax Tree (AST) definitions for the Froggle language.

The AST classes defined in this module represent the syntactic structure
of parsed Froggle programs. The set of node classes is closed: the type
checker, the interpreter and the JSON serializer each dispatch over exactly
these classes. Nodes are frozen once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .types import TypeSpec


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Program(Node):
    body: List[Node]


# Statements

@dataclass(frozen=True)
class Declaration(Node):
    name: str
    type_spec: Optional[TypeSpec]  # None when the type is inferred
    expr: Node


@dataclass(frozen=True)
class Assignment(Node):
    name: str
    expr: Node


@dataclass(frozen=True)
class Print(Node):
    expr: Node


@dataclass(frozen=True)
class Block(Node):
    statements: List[Node]


@dataclass(frozen=True)
class While(Node):
    condition: Node
    body: Block


@dataclass(frozen=True)
class If(Node):
    condition: Node
    then_branch: Node
    else_branch: Optional[Node]


@dataclass(frozen=True)
class Param:
    name: str
    type_spec: TypeSpec


@dataclass(frozen=True)
class FunctionDecl(Node):
    name: str
    params: List[Param]
    return_type: TypeSpec
    body: Block


@dataclass(frozen=True)
class Return(Node):
    expr: Optional[Node]  # None for a bare `return;`


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expr: Node


# Expressions

@dataclass(frozen=True)
class NumberLiteral(Node):
    value: int


@dataclass(frozen=True)
class BoolLiteral(Node):
    value: bool


@dataclass(frozen=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True)
class Binary(Node):
    op: str
    left: Node
    right: Node


@dataclass(frozen=True)
class Call(Node):
    name: str
    args: List[Node]


@dataclass(frozen=True)
class Grouping(Node):
    expr: Node
