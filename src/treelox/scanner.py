from __future__ import annotations

import logging
import math

from .errors import LexicalError
from .tokens import KEYWORDS, LiteralValue, Token, TokenType

logger = logging.getLogger(__name__)

_SINGLE_CHAR_TOKENS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# first char -> (type when followed by "=", type otherwise)
_ONE_OR_TWO_CHAR_TOKENS = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}

_WHITESPACE = frozenset(" \r\t")


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_alpha(char: str) -> bool:
    return char == "_" or char.isalpha()


def _is_alphanumeric(char: str) -> bool:
    return _is_alpha(char) or _is_digit(char)


class Scanner:
    """
    Turns source text into a flat token list.

    Lexical errors never stop the scan: they are collected and returned next
    to the tokens so the caller can report all of them before deciding to halt.
    """

    def __init__(self, source: str):
        self.source = source
        self.tokens: list[Token] = []
        self.errors: list[LexicalError] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> tuple[list[Token], list[LexicalError]]:
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        logger.debug("scanned %d tokens, %d errors", len(self.tokens), len(self.errors))
        return self.tokens, self.errors

    def scan_token(self) -> None:
        c = self.advance()

        single = _SINGLE_CHAR_TOKENS.get(c)
        if single is not None:
            self.add_token(single)
            return

        pair = _ONE_OR_TWO_CHAR_TOKENS.get(c)
        if pair is not None:
            with_equal, alone = pair
            self.add_token(with_equal if self.match("=") else alone)
            return

        if c == "/":
            if self.match("/"):
                while self.peek() != "\n" and not self.is_at_end():
                    self.advance()
            else:
                self.add_token(TokenType.SLASH)
        elif c in _WHITESPACE:
            pass
        elif c == "\n":
            self.line += 1
        elif c == '"':
            self.string()
        elif _is_digit(c):
            self.number()
        elif _is_alpha(c):
            self.identifier()
        else:
            self.error(f"Unexpected character: {c}")

    def identifier(self) -> None:
        while _is_alphanumeric(self.peek()):
            self.advance()
        text = self.source[self.start : self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def number(self) -> None:
        while _is_digit(self.peek()):
            self.advance()

        # a fraction needs at least one digit after the dot
        if self.peek() == "." and _is_digit(self.peek_next()):
            self.advance()
            while _is_digit(self.peek()):
                self.advance()

        text = self.source[self.start : self.current]
        value = float(text)
        if not math.isfinite(value):
            self.error(f"Invalid number literal: {text}")
            return
        self.add_token(TokenType.NUMBER, value)

    def string(self) -> None:
        while self.peek() != '"' and not self.is_at_end():
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        if self.is_at_end():
            self.error("Unterminated string.")
            return

        self.advance()  # closing quote
        self.add_token(TokenType.STRING, self.source[self.start + 1 : self.current - 1])

    def match(self, expected: str) -> bool:
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def add_token(self, token_type: TokenType, literal: LiteralValue = None) -> None:
        text = self.source[self.start : self.current]
        self.tokens.append(Token(token_type, text, literal, self.line))

    def error(self, message: str) -> None:
        self.errors.append(LexicalError(self.line, message))

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)
