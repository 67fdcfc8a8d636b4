# Froggle language package
# This package provides a type checker and interpreter for the Froggle language.
from .errors import FroggleError, LexError, ParseError, TypeCheckError, ExecutionError
from .environment import Environment
from .interpreter import Interpreter
from .lexer import scan
from .parser import parse_program
from .session import Session, run_program, run_file
from .typechecker import TypeChecker, check_program

__all__ = [
    'FroggleError',
    'LexError',
    'ParseError',
    'TypeCheckError',
    'ExecutionError',
    'Environment',
    'Interpreter',
    'scan',
    'parse_program',
    'Session',
    'run_program',
    'run_file',
    'TypeChecker',
    'check_program',
]
