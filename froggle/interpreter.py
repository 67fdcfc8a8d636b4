"""Tree-walking interpreter for the Froggle language.

The interpreter executes a type-checked AST against an `Environment` arena
that maps names to runtime values. Statement execution returns either None
or a `ReturnSignal`; every executor that runs nested statements hands a
`ReturnSignal` straight back to its caller, which unwinds to the nearest
function call without running the remaining statements.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, List, Optional, TextIO

from .ast import (
    Program, Declaration, Assignment, Print, Block, While, If, FunctionDecl,
    Return, ExpressionStatement, NumberLiteral, BoolLiteral, Identifier,
    Binary, Call, Grouping, Node,
)
from .environment import Environment
from .errors import ExecutionError
from .types import FunctionValue, VOID, VOID_VALUE, to_string

# Each Froggle call costs several Python frames
RECURSION_LIMIT = 20000


@dataclass
class ReturnSignal:
    """Result of a statement that executed `return`."""
    value: Any


def divide(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


class Interpreter:
    """Core interpreter that executes Froggle AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', out: Optional[TextIO] = None):
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None
        self.out = out

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self) -> None:
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> None:
        """Execute `program` in the global frame of `env`.

        Output already written stays written if execution fails. Whatever
        happens, every non-global frame is discarded afterwards so that a
        persistent environment can be reused for the next unit.
        """
        if env is None:
            env = self.global_env
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(limit, RECURSION_LIMIT))
        try:
            self.execute_block(program.body, env, Environment.GLOBAL)
        except RecursionError:
            raise ExecutionError('maximum recursion depth exceeded') from None
        finally:
            env.reset()
            sys.setrecursionlimit(limit)

    def execute_block(self, statements: List[Node], env: Environment, frame: int) -> Optional[ReturnSignal]:
        # Functions are bound before the first statement runs, as the
        # type checker registers them before checking the list
        for stmt in statements:
            if isinstance(stmt, FunctionDecl):
                env.declare(frame, stmt.name, FunctionValue(stmt.name, stmt.params, stmt.return_type, stmt.body, frame))
                if self.debug_level >= 2:
                    self.debug(f"define function {stmt.name}")
        for stmt in statements:
            result = self.execute(stmt, env, frame)
            # propagate return signals
            if result is not None:
                return result
        return None

    def execute(self, node: Node, env: Environment, frame: int) -> Optional[ReturnSignal]:
        if isinstance(node, Declaration):
            value = self.evaluate(node.expr, env, frame)
            env.declare(frame, node.name, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name} = {to_string(value)}")
            return None
        if isinstance(node, Assignment):
            value = self.evaluate(node.expr, env, frame)
            if not env.assign(frame, node.name, value):
                raise ExecutionError(f"assignment to undefined variable {node.name}")
            if self.debug_level >= 2:
                self.debug(f"assign {node.name} = {to_string(value)}")
            return None
        if isinstance(node, Print):
            value = self.evaluate(node.expr, env, frame)
            print(to_string(value), file=self.out)
            return None
        if isinstance(node, Block):
            block_frame = env.push(frame)
            try:
                return self.execute_block(node.statements, env, block_frame)
            finally:
                env.pop(block_frame)
        if isinstance(node, While):
            while self.condition(node.condition, env, frame, 'while'):
                result = self.execute(node.body, env, frame)
                if result is not None:
                    return result
            return None
        if isinstance(node, If):
            if self.condition(node.condition, env, frame, 'if'):
                return self.execute(node.then_branch, env, frame)
            if node.else_branch is not None:
                return self.execute(node.else_branch, env, frame)
            return None
        if isinstance(node, FunctionDecl):
            # already bound by execute_block
            return None
        if isinstance(node, Return):
            value = self.evaluate(node.expr, env, frame) if node.expr is not None else VOID_VALUE
            return ReturnSignal(value)
        if isinstance(node, ExpressionStatement):
            self.evaluate(node.expr, env, frame)
            return None
        raise ExecutionError(f"cannot execute {type(node).__name__}")

    def condition(self, node: Node, env: Environment, frame: int, construct: str) -> bool:
        value = self.evaluate(node, env, frame)
        if not isinstance(value, bool):
            raise ExecutionError(f"{construct} condition evaluated to {to_string(value)}, not a bool")
        if self.debug_level >= 3:
            self.debug(f"{construct} condition -> {to_string(value)}")
        return value

    def evaluate(self, node: Node, env: Environment, frame: int) -> Any:
        if isinstance(node, NumberLiteral):
            return node.value
        if isinstance(node, BoolLiteral):
            return node.value
        if isinstance(node, Identifier):
            value = env.lookup(frame, node.name)
            if value is None:
                raise ExecutionError(f"undefined variable {node.name}")
            return value
        if isinstance(node, Grouping):
            return self.evaluate(node.expr, env, frame)
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env, frame)
            right = self.evaluate(node.right, env, frame)
            return self.binary_op(node.op, left, right)
        if isinstance(node, Call):
            func = env.lookup(frame, node.name)
            if not isinstance(func, FunctionValue):
                raise ExecutionError(f"{node.name} is not a function")
            args = [self.evaluate(arg, env, frame) for arg in node.args]
            return self.call_function(func, args, env)
        raise ExecutionError(f"cannot evaluate {type(node).__name__}")

    def binary_op(self, op: str, a: Any, b: Any) -> Any:
        if op == '==':
            return type(a) is type(b) and a == b
        if isinstance(a, bool) or isinstance(b, bool) or not isinstance(a, int) or not isinstance(b, int):
            raise ExecutionError(f"operator {op} requires number operands, got {to_string(a)} and {to_string(b)}")
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if op == '/':
            if b == 0:
                raise ExecutionError('division by zero')
            return divide(a, b)
        if op == '>':
            return a > b
        if op == '<':
            return a < b
        raise ExecutionError(f"unknown operator {op}")

    def call_function(self, func: FunctionValue, args: List[Any], env: Environment) -> Any:
        if len(args) != len(func.params):
            raise ExecutionError(f"{func.name} expects {len(func.params)} arguments, got {len(args)}")
        if self.debug_level >= 1:
            self.debug(f"call {func.name}({', '.join(to_string(a) for a in args)})")
        # Parameters get their own bindings in a frame parented at the
        # declaration frame, never the caller's frame
        call_frame = env.push(func.frame)
        try:
            for param, arg in zip(func.params, args):
                env.declare(call_frame, param.name, arg)
            result = self.execute_block(func.body.statements, env, call_frame)
        finally:
            env.pop(call_frame)
        if result is not None:
            value = result.value
        elif func.return_type != VOID:
            raise ExecutionError(f"function {func.name} finished without returning a {func.return_type!r}")
        else:
            value = VOID_VALUE
        if self.debug_level >= 1:
            self.debug(f"return {func.name} -> {to_string(value)}")
        return value

