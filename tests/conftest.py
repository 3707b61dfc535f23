from __future__ import annotations

import io
import sys
from pathlib import Path

# Allow importing the package when running plain `pytest` without an editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

import pytest

from treelox import Interpreter


@pytest.fixture
def run_lox():
    """Run a program and return everything it printed; Lox errors are raised."""

    def _run(source: str, *, mode: str = "run", session=None, filename: str = "<test>") -> str:
        out = io.StringIO()
        interpreter = Interpreter(mode, stdout=out, session=session)
        result = interpreter.run(source, filename)
        result.raise_for_exception()
        return out.getvalue()

    return _run


@pytest.fixture
def lines(run_lox):
    """Like run_lox, but split into output lines."""

    def _lines(source: str, **kwargs) -> list[str]:
        return run_lox(source, **kwargs).splitlines()

    return _lines
