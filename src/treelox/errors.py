"""Error taxonomy for every pipeline stage.

Each error class carries the process exit code the driver maps it to:
65 for anything detected before execution starts, 70 for failures while
the program runs.
"""

from __future__ import annotations

from typing import Sequence

from .tokens import Token, TokenType

EX_DATAERR = 65
EX_SOFTWARE = 70


class LoxError(Exception):
    exit_code = EX_SOFTWARE


class LexicalError(LoxError):
    exit_code = EX_DATAERR

    def __init__(self, line: int, message: str):
        self.line = line
        self.message = message
        super().__init__(f"[line {line}] Error: {message}")


class LexicalErrors(LoxError):
    """Raised once scanning finished with at least one lexical error."""

    exit_code = EX_DATAERR

    def __init__(self, errors: Sequence[LexicalError]):
        self.errors = list(errors)
        super().__init__("\n".join(str(e) for e in self.errors))


def _location(token: Token) -> str:
    if token.type is TokenType.EOF:
        return "at end"
    return f"at '{token.lexeme}'"


class ParseError(LoxError):
    exit_code = EX_DATAERR

    def __init__(self, token: Token, message: str):
        self.token = token
        self.line = token.line
        self.message = message
        # filled in by Parser.parse() once recovery has seen the whole file
        self.errors: list[ParseError] = [self]
        super().__init__(f"[line {token.line}] Error {_location(token)}: {message}")


class BindingError(LoxError):
    exit_code = EX_DATAERR

    def __init__(self, token: Token, message: str):
        self.token = token
        self.line = token.line
        self.message = message
        super().__init__(f"[line {token.line}] Error {_location(token)}: {message}")


class LoxRuntimeError(LoxError):
    exit_code = EX_SOFTWARE

    def __init__(self, token: Token, message: str):
        self.token = token.lexeme
        self.line = token.line
        self.message = message
        super().__init__(f"[line {token.line}] Runtime Error: {message}")


class InternalError(LoxError):
    """A broken interpreter invariant, never caused by the user's program."""

    exit_code = EX_SOFTWARE
