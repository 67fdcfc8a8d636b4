"""CLI entry point for the Froggle interpreter.

Usage:
    python -m froggle [-v|-vv|-vvv] [program_file]
    python -m froggle --emit-ast <program_file>
    python -m froggle [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse and type check the given .frog file and emit an AST JSON file
  --ast         Type check and execute a previously emitted AST JSON file

Without a program file an interactive session is started. Debug information
is written to `debug.txt` in the current directory when verbosity is greater
than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, program_from_obj
from .errors import FroggleError
from .parser import parse_program
from .repl import repl
from .session import Session
from .typechecker import check_program


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def emit_ast(program_file: Path) -> None:
    program = parse_program(read_source(program_file))
    check_program(program)
    obj = ast_to_obj(program)
    out_path = program_file.with_name(program_file.name + '.ast.json')
    with open(out_path, 'w', encoding='utf-8') as out:
        json.dump(obj, out, ensure_ascii=False, indent=2)
    print(str(out_path))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Froggle language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='FROG_FILE', help='emit AST JSON for the given .frog file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Froggle program file (.frog) to execute')
    args = parser.parse_args(argv)

    if args.program and (args.emit_ast or args.ast):
        parser.error('a program file cannot be combined with --emit-ast/--ast')

    session = Session(debug_level=args.v)
    try:
        if args.emit_ast:
            emit_ast(Path(args.emit_ast))
        elif args.ast:
            source = read_source(Path(args.ast))
            try:
                data = json.loads(source)
            except json.JSONDecodeError as e:
                print(f"Error: {args.ast} is not valid JSON: {e}", file=sys.stderr)
                sys.exit(1)
            session.execute(program_from_obj(data))
        elif args.program:
            session.run(read_source(Path(args.program)))
        else:
            repl(session)
    except FroggleError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    finally:
        session.close()


if __name__ == '__main__':
    main()
