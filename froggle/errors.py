from typing import Optional


class FroggleError(Exception):
    """Base class for every error reported to a Froggle user."""
    kind = 'Error'

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is not None:
            return f"{self.kind}: {self.message} at {self.line}:{self.column}"
        return f"{self.kind}: {self.message}"


class LexError(FroggleError):
    """Raised when no token shape matches the input."""
    kind = 'LexError'

    def __init__(self, char: str, line: int, column: int):
        super().__init__(f"unexpected character {char!r}", line, column)
        self.char = char


class ParseError(FroggleError):
    kind = 'ParseError'


class TypeCheckError(FroggleError):
    kind = 'TypeError'


class ExecutionError(FroggleError):
    kind = 'RuntimeError'
