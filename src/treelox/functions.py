from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Sequence

from . import nodes
from .common import ReturnSignal

if TYPE_CHECKING:
    from .main import Interpreter

logger = logging.getLogger(__name__)


class LoxCallable:
    """Anything a call expression can invoke."""

    def arity(self) -> int:
        raise NotImplementedError

    def call(self, interpreter: "Interpreter", arguments: Sequence[Any]) -> Any:
        raise NotImplementedError


class LoxFunction(LoxCallable):
    """
    A user-defined function value.

    Holds the declaration and the handle of the frame that was current when
    the declaration executed (the closure). Several variables may alias the
    same LoxFunction; they all share its closure frame.
    """

    __slots__ = ("declaration", "closure")

    def __init__(self, declaration: nodes.Function, closure: int):
        self.declaration = declaration
        self.closure = closure

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: "Interpreter", arguments: Sequence[Any]) -> Any:
        arena = interpreter.session.arena
        # The call frame hangs off the closure, not off the caller's frame.
        call_frame = arena.new_frame(self.closure)
        for param, value in zip(self.declaration.params, arguments):
            arena.define(call_frame, param.lexeme, value)

        logger.debug("call %s with %d argument(s)", self.name, len(arguments))
        try:
            interpreter.execute_block(self.declaration.body, call_frame)
        except ReturnSignal as r:
            return r.value
        return None

    def __repr__(self) -> str:
        return f"<fn {self.name}>"


class NativeFunction(LoxCallable):
    """A callable implemented by the host, e.g. `clock`."""

    __slots__ = ("name", "_arity", "fn")

    def __init__(self, name: str, arity: int, fn: Callable[..., Any]):
        self.name = name
        self._arity = arity
        self.fn = fn

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter: "Interpreter", arguments: Sequence[Any]) -> Any:
        return self.fn(*arguments)

    def __repr__(self) -> str:
        return "<native fn>"
