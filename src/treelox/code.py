from __future__ import annotations

import logging

from . import nodes
from .errors import LexicalErrors
from .parser import Parser
from .scanner import Scanner
from .tokens import Token

logger = logging.getLogger(__name__)


def scan(source: str) -> list[Token]:
    """Scan `source`, raising LexicalErrors (with every error found) on failure."""
    tokens, errors = Scanner(source).scan_tokens()
    if errors:
        raise LexicalErrors(errors)
    return tokens


class ProgramCode:
    """
    Holds:
      - source text and filename
      - the token stream
      - the parsed top-level statements

    Construction runs the scanner and the parser; binding resolution is left
    to the interpreter, which owns the session the bindings are written to.
    """

    def __init__(self, source: str, filename: str = "<treelox>"):
        self.source = source
        self.filename = filename
        self.tokens = scan(source)
        self.statements: list[nodes.Stmt] = Parser(self.tokens).parse()
        logger.debug(
            "%s: %d tokens, %d statements", filename, len(self.tokens), len(self.statements)
        )
