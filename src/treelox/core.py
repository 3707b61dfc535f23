from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, TextIO

from . import nodes
from .code import ProgramCode
from .common import ReturnSignal
from .errors import InternalError, LoxError
from .resolver import Resolver
from .session import Session

logger = logging.getLogger(__name__)

MODES = ("evaluate", "run")


@dataclass
class RunResult:
    """Outcome of `Interpreter.run`: either ok, or the LoxError that stopped it."""

    exception: Optional[LoxError] = None
    statements: list[nodes.Stmt] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.exception is None

    def raise_for_exception(self) -> None:
        if self.exception is not None:
            raise self.exception


class InterpreterCore:
    def __init__(
        self,
        mode: str = "evaluate",
        *,
        stdout: Optional[TextIO] = None,
        session: Optional[Session] = None,
    ):
        """
        mode:
          - "evaluate" -> every expression statement prints its value
          - "run"      -> only `print` statements produce output
        stdout: stream program output is written to (default: sys.stdout)
        session: frames + bindings to run against (default: a fresh one)
        """
        if mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, not {mode!r}")
        self.mode = mode
        self.stdout = stdout
        self.session = Session() if session is None else session
        self.globals = self.session.globals
        self.environment = self.globals

    # ----- run -----

    def run(self, source: str, filename: str = "<treelox>") -> RunResult:
        """
        Scan, parse, resolve and execute `source` against this interpreter's session.

        Language-level failures are returned on the result rather than raised.
        """
        try:
            code = ProgramCode(source, filename)
        except LoxError as exc:
            return RunResult(exception=exc)

        try:
            self.resolve(code.statements)
            self.interpret(code.statements)
        except LoxError as exc:
            return RunResult(exception=exc, statements=code.statements)
        return RunResult(statements=code.statements)

    def resolve(self, statements: Sequence[nodes.Stmt]) -> None:
        Resolver(self.session).resolve(statements)

    def interpret(self, statements: Sequence[nodes.Stmt]) -> None:
        try:
            for stmt in statements:
                self.exec_stmt(stmt)
        except ReturnSignal as exc:
            raise InternalError("return escaped to top-level code") from exc
        finally:
            self.environment = self.globals

    def write(self, text: str) -> None:
        out = sys.stdout if self.stdout is None else self.stdout
        out.write(text + "\n")

    # ----- dispatch -----

    def exec_stmt(self, node: nodes.Stmt) -> None:
        m = getattr(self, f"exec_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Statement not supported: {node.__class__.__name__}")
        m(node)

    def eval_expr(self, node: nodes.Expr) -> Any:
        m = getattr(self, f"eval_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Expression not supported: {node.__class__.__name__}")
        return m(node)

    def execute_block(self, statements: Sequence[nodes.Stmt], frame: int) -> None:
        """
        Run `statements` with `frame` as the current environment, then restore.

        `frame` belongs to this call: it is released on exit unless a closure
        captured it.
        """
        previous = self.environment
        self.environment = frame
        try:
            for stmt in statements:
                self.exec_stmt(stmt)
        finally:
            self.environment = previous
            self.session.arena.release(frame)
