"""Interactive Froggle session.

Lines are buffered until every `{` has a matching `}`; the buffered text is
then run as one unit against a persistent `Session`. An error aborts only
the current unit: it is reported and the global variables bound so far are
kept.

Globals persist across units with their types. A later unit may redeclare a
global with the same type (`let x = 1;` then `let x = 2;`), but not with a
different one: `let x = true;` after `let x = 1;` is a type error and `x`
stays a number, so functions checked earlier keep reading a number.
"""

import sys
from typing import Callable, Optional

from .errors import FroggleError
from .session import Session

PROMPT = 'froggle> '
CONTINUATION_PROMPT = '...> '
QUIT_COMMANDS = (':q', ':quit', 'quit', 'exit')


def brace_delta(line: str) -> int:
    return line.count('{') - line.count('}')


def repl(session: Optional[Session] = None, read: Callable[[str], str] = input) -> None:
    if session is None:
        session = Session()
    print("Froggle REPL. Type :q to quit.")

    buffer_lines = []
    depth = 0
    while True:
        prompt = PROMPT if not buffer_lines else CONTINUATION_PROMPT
        try:
            line = read(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            break

        stripped = line.strip()
        if not buffer_lines and stripped in QUIT_COMMANDS:
            break
        if not stripped and not buffer_lines:
            continue

        buffer_lines.append(line)
        depth += brace_delta(line)
        # Wait for block completion if braces aren't balanced yet
        if depth > 0:
            continue

        source = "\n".join(buffer_lines) + "\n"
        buffer_lines = []
        depth = 0
        try:
            session.run(source)
        except FroggleError as e:
            print(str(e), file=sys.stderr)
