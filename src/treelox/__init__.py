"""treelox: a tree-walking interpreter for the Lox scripting language."""

import logging

from .code import ProgramCode
from .core import RunResult
from .errors import (
    BindingError,
    InternalError,
    LexicalError,
    LexicalErrors,
    LoxError,
    LoxRuntimeError,
    ParseError,
)
from .main import Interpreter
from .session import Session

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BindingError",
    "Interpreter",
    "InternalError",
    "LexicalError",
    "LexicalErrors",
    "LoxError",
    "LoxRuntimeError",
    "ParseError",
    "ProgramCode",
    "RunResult",
    "Session",
]
