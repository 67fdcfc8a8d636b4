"""Static type checker for Froggle.

The checker walks a whole unit before anything runs. It keeps its own
`Environment` arena whose frames mirror the lexical structure of the
program and map each name to a `TypeSpec` (variables) or a `FunctionType`
(functions). The first violation raises `TypeCheckError`; a unit that
raises is never handed to the interpreter.

Functions are registered before the statements of their list are checked,
so a call may come before the declaration. A function body is checked
where it is declared, though, and at runtime it reads the variables of its
declaring frame as they are at the time of the call. For every function the
checker therefore records which names its body reaches outside itself,
directly or through other functions of the same frame. Once a statement
list is finished, each call made from it is checked against the variables
that were declared in the frame at that call: a name the body found in the
frame must already be declared there, and a name it found further out must
not be shadowed there yet.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Set, Tuple

from .ast import (
    Program, Declaration, Assignment, Print, Block, While, If, FunctionDecl,
    Return, ExpressionStatement, NumberLiteral, BoolLiteral, Identifier,
    Binary, Call, Grouping, Node,
)
from .environment import Environment
from .errors import TypeCheckError
from .types import TypeSpec, FunctionType, NUMBER, BOOL, VOID, type_of

ARITHMETIC_OPS = ('+', '-', '*', '/')
RELATIONAL_OPS = ('>', '<')
EQUALITY_OPS = ('==',)


def always_returns(node: Node) -> bool:
    """Whether executing `node` is guaranteed to end in a `return`."""
    if isinstance(node, Return):
        return True
    if isinstance(node, Block):
        return any(always_returns(stmt) for stmt in node.statements)
    if isinstance(node, If):
        return (node.else_branch is not None
                and always_returns(node.then_branch)
                and always_returns(node.else_branch))
    return False


@dataclass
class FunctionUses:
    """Names a function body reaches in frames outside its own."""
    scope: int
    # (variable, frame it resolved to when the body was checked)
    reads: Set[Tuple[str, int]] = field(default_factory=set)
    # functions of `scope` called from the body
    calls: Set[str] = field(default_factory=set)


class TypeChecker:
    """Whole-program static pass over a Froggle AST."""
    def __init__(self, globals: Optional[Dict[str, Any]] = None):
        self.env = Environment()
        # (function name, declared return type, uses) for each enclosing function
        self.functions: List[Tuple[str, TypeSpec, FunctionUses]] = []
        # keyed by (declaring frame, function name)
        self.uses: Dict[Tuple[int, str], FunctionUses] = {}
        # per frame: calls made from its statement list, with the variables
        # declared in the frame at the time of the call
        self.pending: Dict[int, List[Tuple[str, FrozenSet[str]]]] = {}
        if globals:
            for name, value in globals.items():
                self.env.declare(Environment.GLOBAL, name, type_of(value))

    def check(self, program: Program) -> None:
        self.check_statements(program.body, Environment.GLOBAL)

    def check_statements(self, statements: List[Node], scope: int) -> None:
        # Register every function of this list first so that calls may
        # precede the declaration (recursion, mutual recursion)
        for stmt in statements:
            if isinstance(stmt, FunctionDecl):
                self.declare_function(stmt, scope)
        self.pending[scope] = []
        for stmt in statements:
            self.check_statement(stmt, scope)
        self.check_calls(scope)

    def check_calls(self, scope: int) -> None:
        for name, declared in self.pending.pop(scope):
            for var, frame in sorted(self.reach(scope, name)):
                if frame == scope and var not in declared:
                    raise TypeCheckError(f"call to {name} reads {var} before it is declared")
                if frame != scope and var in declared:
                    raise TypeCheckError(f"call to {name} reads an outer {var} that is shadowed at this call")
        for key in [k for k in self.uses if k[0] == scope]:
            del self.uses[key]

    def reach(self, scope: int, name: str) -> Set[Tuple[str, int]]:
        """Every outside name `name` reads, following calls within `scope`."""
        reads: Set[Tuple[str, int]] = set()
        seen = set()
        todo = [name]
        while todo:
            current = todo.pop()
            if current in seen:
                continue
            seen.add(current)
            # functions bound by an earlier unit have no record
            uses = self.uses.get((scope, current))
            if uses is None:
                continue
            reads |= uses.reads
            todo.extend(uses.calls)
        return reads

    def declared_variables(self, scope: int) -> FrozenSet[str]:
        values = self.env.frames[scope].values
        return frozenset(n for n, t in values.items() if not isinstance(t, FunctionType))

    def note_read(self, name: str, frame: int) -> None:
        for _, _, uses in self.functions:
            if uses.scope >= frame:
                uses.reads.add((name, frame))

    def note_call(self, name: str, frame: int) -> None:
        for _, _, uses in self.functions:
            if uses.scope == frame:
                # checked whenever the enclosing function itself is called
                uses.calls.add(name)
                return
        self.pending[frame].append((name, self.declared_variables(frame)))

    def declare(self, scope: int, name: str, t: Any) -> None:
        existing = self.env.local(scope, name)
        if existing is not None and existing != t:
            raise TypeCheckError(f"{name} is already declared in this scope as {existing!r}, cannot redeclare it as {t!r}")
        self.env.declare(scope, name, t)

    def declare_function(self, node: FunctionDecl, scope: int) -> None:
        seen = set()
        for param in node.params:
            if param.name in seen:
                raise TypeCheckError(f"duplicate parameter {param.name} in function {node.name}")
            seen.add(param.name)
            if not param.type_spec.is_value:
                raise TypeCheckError(f"parameter {param.name} of function {node.name}: expected number or bool, got {param.type_spec!r}")
        signature = FunctionType(tuple(p.type_spec for p in node.params), node.return_type)
        self.declare(scope, node.name, signature)

    def check_statement(self, node: Node, scope: int) -> None:
        if isinstance(node, Declaration):
            actual = self.require_value(self.infer(node.expr, scope), f"initializer of {node.name}")
            if node.type_spec is not None:
                if not node.type_spec.is_value:
                    raise TypeCheckError(f"declaration of {node.name}: variables cannot have type {node.type_spec!r}")
                if actual != node.type_spec:
                    raise TypeCheckError(f"declaration of {node.name}: expected {node.type_spec!r}, got {actual!r}")
            self.declare(scope, node.name, actual)
            return
        if isinstance(node, Assignment):
            target = self.env.lookup(scope, node.name)
            if target is None:
                raise TypeCheckError(f"assignment to undeclared variable {node.name}")
            if isinstance(target, FunctionType):
                raise TypeCheckError(f"cannot assign to function {node.name}")
            self.note_read(node.name, self.env.resolve(scope, node.name))
            actual = self.infer(node.expr, scope)
            if actual != target:
                raise TypeCheckError(f"assignment to {node.name}: expected {target!r}, got {actual!r}")
            return
        if isinstance(node, Print):
            self.require_value(self.infer(node.expr, scope), 'croak')
            return
        if isinstance(node, While):
            self.require_condition(node.condition, scope, 'while')
            self.check_statement(node.body, scope)
            return
        if isinstance(node, If):
            self.require_condition(node.condition, scope, 'if')
            self.check_statement(node.then_branch, scope)
            if node.else_branch is not None:
                self.check_statement(node.else_branch, scope)
            return
        if isinstance(node, Block):
            block_scope = self.env.push(scope)
            self.check_statements(node.statements, block_scope)
            self.env.pop(block_scope)
            return
        if isinstance(node, FunctionDecl):
            self.check_function(node, scope)
            return
        if isinstance(node, Return):
            if not self.functions:
                raise TypeCheckError('return outside of a function')
            name, expected, _ = self.functions[-1]
            actual = self.infer(node.expr, scope) if node.expr is not None else VOID
            if actual != expected:
                raise TypeCheckError(f"return in function {name}: expected {expected!r}, got {actual!r}")
            return
        if isinstance(node, ExpressionStatement):
            self.infer(node.expr, scope)
            return
        raise TypeCheckError(f"unsupported statement {type(node).__name__}")

    def check_function(self, node: FunctionDecl, scope: int) -> None:
        body_scope = self.env.push(scope)
        for param in node.params:
            self.env.declare(body_scope, param.name, param.type_spec)
        uses = self.uses.setdefault((scope, node.name), FunctionUses(scope))
        self.functions.append((node.name, node.return_type, uses))
        self.check_statements(node.body.statements, body_scope)
        self.functions.pop()
        self.env.pop(body_scope)
        if node.return_type != VOID and not always_returns(node.body):
            raise TypeCheckError(f"function {node.name} may finish without returning a {node.return_type!r}")

    def require_value(self, t: TypeSpec, construct: str) -> TypeSpec:
        if not t.is_value:
            raise TypeCheckError(f"{construct}: expected number or bool, got {t!r}")
        return t

    def require_condition(self, condition: Node, scope: int, construct: str) -> None:
        actual = self.infer(condition, scope)
        if actual != BOOL:
            raise TypeCheckError(f"{construct} condition: expected bool, got {actual!r}")

    def infer(self, node: Node, scope: int) -> TypeSpec:
        if isinstance(node, NumberLiteral):
            return NUMBER
        if isinstance(node, BoolLiteral):
            return BOOL
        if isinstance(node, Identifier):
            t = self.env.lookup(scope, node.name)
            if t is None:
                raise TypeCheckError(f"undeclared variable {node.name}")
            if isinstance(t, FunctionType):
                raise TypeCheckError(f"{node.name} is a function and can only be called")
            self.note_read(node.name, self.env.resolve(scope, node.name))
            return t
        if isinstance(node, Grouping):
            return self.infer(node.expr, scope)
        if isinstance(node, Binary):
            return self.infer_binary(node, scope)
        if isinstance(node, Call):
            return self.infer_call(node, scope)
        raise TypeCheckError(f"unsupported expression {type(node).__name__}")

    def infer_binary(self, node: Binary, scope: int) -> TypeSpec:
        left = self.infer(node.left, scope)
        right = self.infer(node.right, scope)
        op = node.op
        if op in ARITHMETIC_OPS or op in RELATIONAL_OPS:
            if left != NUMBER or right != NUMBER:
                raise TypeCheckError(f"operator {op}: expected number operands, got {left!r} and {right!r}")
            return NUMBER if op in ARITHMETIC_OPS else BOOL
        if op in EQUALITY_OPS:
            self.require_value(left, f"operator {op}")
            if left != right:
                raise TypeCheckError(f"operator {op}: expected operands of the same type, got {left!r} and {right!r}")
            return BOOL
        raise TypeCheckError(f"unknown operator {op}")

    def infer_call(self, node: Call, scope: int) -> TypeSpec:
        signature = self.env.lookup(scope, node.name)
        if signature is None:
            raise TypeCheckError(f"call to undeclared function {node.name}")
        if not isinstance(signature, FunctionType):
            raise TypeCheckError(f"{node.name} is a {signature!r}, not a function")
        self.note_call(node.name, self.env.resolve(scope, node.name))
        if len(node.args) != len(signature.params):
            raise TypeCheckError(f"function {node.name}: expected {len(signature.params)} arguments, got {len(node.args)}")
        for position, (arg, expected) in enumerate(zip(node.args, signature.params), start=1):
            actual = self.infer(arg, scope)
            if actual != expected:
                raise TypeCheckError(f"argument {position} of {node.name}: expected {expected!r}, got {actual!r}")
        return signature.return_type


def check_program(program: Program, globals: Optional[Dict[str, Any]] = None) -> None:
    """Type check `program`, optionally against values already bound globally."""
    try:
        TypeChecker(globals).check(program)
    except RecursionError:
        raise TypeCheckError('program is nested too deeply') from None
