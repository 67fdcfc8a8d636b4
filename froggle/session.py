"""Pipeline driver shared by file mode and interactive mode.

A `Session` owns one persistent `Environment`. Each call to `run` takes a
unit through lex → parse → check → interpret against that environment, so
bindings made by one unit are visible to the next. File mode uses a fresh
session per run; interactive mode keeps one for the whole session.
"""

from __future__ import annotations

from typing import Optional, TextIO

from .ast import FunctionDecl, Program
from .environment import Environment
from .errors import ExecutionError
from .interpreter import Interpreter
from .parser import parse_program
from .typechecker import check_program


class Session:
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', out: Optional[TextIO] = None):
        self.env = Environment()
        self.interpreter = Interpreter(debug_level=debug_level, debug_file=debug_file, out=out)

    def execute(self, program: Program) -> None:
        """Check `program` against the current globals, then run it.

        If the unit fails at runtime, the variables it already bound are
        kept, but its functions are unbound again (or restored to what they
        replaced): their bodies were checked against declarations the unit
        never reached.
        """
        check_program(program, self.env.globals)
        replaced = {stmt.name: self.env.globals.get(stmt.name)
                    for stmt in program.body if isinstance(stmt, FunctionDecl)}
        try:
            self.interpreter.run(program, self.env)
        except ExecutionError:
            for name, previous in replaced.items():
                if previous is None:
                    self.env.globals.pop(name, None)
                else:
                    self.env.globals[name] = previous
            raise

    def run(self, source: str) -> None:
        self.execute(parse_program(source))

    def close(self) -> None:
        self.interpreter.close()


def run_program(source: str, debug_level: int = 0, out: Optional[TextIO] = None) -> None:
    """Convenience function to check and run a Froggle program from source string."""
    session = Session(debug_level=debug_level, out=out)
    try:
        session.run(source)
    finally:
        session.close()


def run_file(file_path: str, debug_level: int = 0) -> None:
    """Check and run a Froggle source file in a fresh session."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    run_program(source, debug_level=debug_level)
