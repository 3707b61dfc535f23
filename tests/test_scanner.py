from __future__ import annotations

import pytest

from treelox.code import scan
from treelox.errors import LexicalErrors
from treelox.scanner import Scanner
from treelox.tokens import Token, TokenType


def _types(source: str) -> list[TokenType]:
    tokens, errors = Scanner(source).scan_tokens()
    assert errors == []
    return [t.type for t in tokens]


def test_punctuation_and_operators():
    assert _types("(){},.-+;*/ ! != = == < <= > >=") == [
        TokenType.LEFT_PAREN,
        TokenType.RIGHT_PAREN,
        TokenType.LEFT_BRACE,
        TokenType.RIGHT_BRACE,
        TokenType.COMMA,
        TokenType.DOT,
        TokenType.MINUS,
        TokenType.PLUS,
        TokenType.SEMICOLON,
        TokenType.STAR,
        TokenType.SLASH,
        TokenType.BANG,
        TokenType.BANG_EQUAL,
        TokenType.EQUAL,
        TokenType.EQUAL_EQUAL,
        TokenType.LESS,
        TokenType.LESS_EQUAL,
        TokenType.GREATER,
        TokenType.GREATER_EQUAL,
        TokenType.EOF,
    ]


def test_keywords_versus_identifiers():
    assert _types("var fun orchid or _tmp nil") == [
        TokenType.VAR,
        TokenType.FUN,
        TokenType.IDENTIFIER,
        TokenType.OR,
        TokenType.IDENTIFIER,
        TokenType.NIL,
        TokenType.EOF,
    ]


def test_number_literals():
    tokens, _ = Scanner("10 2.5 7.").scan_tokens()
    assert [str(t) for t in tokens] == [
        "NUMBER 10 10.0",
        "NUMBER 2.5 2.5",
        "NUMBER 7 7.0",
        "DOT . null",
        "EOF  null",
    ]


def test_string_literal_drops_quotes_and_spans_lines():
    tokens, errors = Scanner('"one\ntwo" x').scan_tokens()
    assert errors == []
    assert tokens[0].type is TokenType.STRING
    assert tokens[0].literal == "one\ntwo"
    assert str(tokens[0]) == 'STRING "one\ntwo" one\ntwo'
    # the identifier after the string sits on the second line
    assert tokens[1].line == 2


def test_comments_and_newlines_are_skipped():
    tokens, _ = Scanner("// nothing here\n\nprint 1; // trailing\n").scan_tokens()
    assert [t.type for t in tokens] == [
        TokenType.PRINT,
        TokenType.NUMBER,
        TokenType.SEMICOLON,
        TokenType.EOF,
    ]
    assert tokens[0].line == 3
    assert tokens[-1].line == 4


def test_eof_token_shape():
    tokens, errors = Scanner("").scan_tokens()
    assert errors == []
    assert tokens == [Token(TokenType.EOF, "", None, 1)]


def test_unexpected_characters_are_all_reported():
    tokens, errors = Scanner("var a = 1;\n@ #").scan_tokens()
    assert [str(e) for e in errors] == [
        "[line 2] Error: Unexpected character: @",
        "[line 2] Error: Unexpected character: #",
    ]
    # scanning continues past errors
    assert tokens[-1].type is TokenType.EOF
    assert [t.type for t in tokens[:5]] == [
        TokenType.VAR,
        TokenType.IDENTIFIER,
        TokenType.EQUAL,
        TokenType.NUMBER,
        TokenType.SEMICOLON,
    ]


def test_unterminated_string():
    _, errors = Scanner('print "never\nclosed').scan_tokens()
    assert len(errors) == 1
    assert errors[0].line == 2
    assert errors[0].message == "Unterminated string."


def test_number_literal_that_overflows_is_rejected():
    _, errors = Scanner("1" * 400).scan_tokens()
    assert len(errors) == 1
    assert errors[0].message.startswith("Invalid number literal: 111")


def test_scan_raises_every_error_together():
    with pytest.raises(LexicalErrors) as info:
        scan("$\n%")
    assert len(info.value.errors) == 2
    assert info.value.exit_code == 65
    assert str(info.value) == (
        "[line 1] Error: Unexpected character: $\n"
        "[line 2] Error: Unexpected character: %"
    )
