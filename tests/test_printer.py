from __future__ import annotations

import io
from pathlib import Path

import pytest

from treelox import Interpreter
from treelox.code import scan
from treelox.parser import Parser
from treelox.printer import SourcePrinter, to_sexpr, unparse

KITCHEN_SINK = Path(__file__).parent / "fixtures" / "kitchen_sink.lox"


def _parse(source: str):
    return Parser(scan(source)).parse()


def _shape(source: str) -> list[str]:
    return [to_sexpr(stmt) for stmt in _parse(source)]


def _run(source: str) -> str:
    out = io.StringIO()
    Interpreter("run", stdout=out).run(source).raise_for_exception()
    return out.getvalue()


def test_unparse_simple_program():
    source = "var a = 1; if (a > 0) { print a; } else print -a;"
    assert unparse(_parse(source)) == (
        "var a = 1.0;\n"
        "if (a > 0.0) {\n"
        "    print a;\n"
        "} else print -a;\n"
    )


def test_unparse_quotes_strings_and_keeps_groups():
    assert unparse(_parse('print ("a" + "b") == "ab";')) == 'print ("a" + "b") == "ab";\n'


def test_unparse_function():
    source = "fun add(a, b) { return a + b; } fun nothing() { return; }"
    assert unparse(_parse(source)) == (
        "fun add(a, b) {\n"
        "    return a + b;\n"
        "}\n"
        "fun nothing() {\n"
        "    return;\n"
        "}\n"
    )


def test_custom_indent_unit():
    printer = SourcePrinter()
    printer.indent_unit = "\t"
    assert printer.unparse(_parse("{ print 1; }")) == "{\n\tprint 1.0;\n}\n"


def test_small_fractions_render_positionally():
    assert unparse(_parse("print 0.0000001;")) == "print 0.0000001;\n"


@pytest.mark.parametrize(
    "source",
    [
        "print 1 + 2 * (3 - 4) / -5;",
        "var x; x = !true or false and nil;",
        'print "multi\nline";',
        "for (var i = 0; i < 10; i = i + 1) { if (i == 2) print i; }",
        "while (false) {}",
        "fun f(n) { if (n < 2) return n; return f(n - 1) + f(n - 2); } print f(10);",
        "{ var a = 1; { var b = a; print b; } }",
        "f(1)(2)(g(3), 4);",
    ],
)
def test_parse_unparse_parse_keeps_shape(source):
    first = _parse(source)
    regenerated = unparse(first)
    assert _shape(regenerated) == [to_sexpr(stmt) for stmt in first]


def test_kitchen_sink_round_trip_runs_identically():
    source = KITCHEN_SINK.read_text()
    regenerated = unparse(_parse(source))
    assert _shape(regenerated) == _shape(source)
    assert _run(regenerated) == _run(source)
