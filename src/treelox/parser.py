from __future__ import annotations

import logging
from typing import Optional

from . import nodes
from .errors import ParseError
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)

MAX_ARGUMENTS = 255

_EQUALITY = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
_COMPARISON = (
    TokenType.GREATER,
    TokenType.GREATER_EQUAL,
    TokenType.LESS,
    TokenType.LESS_EQUAL,
)
_TERM = (TokenType.MINUS, TokenType.PLUS)
_FACTOR = (TokenType.SLASH, TokenType.STAR)
_UNARY = (TokenType.BANG, TokenType.MINUS)

# tokens that start a declaration/statement, used to resynchronize after an error
_STATEMENT_STARTS = frozenset(
    {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }
)


class Parser:
    """
    Recursive-descent parser, one method per grammar rule:

        program     -> declaration* EOF
        declaration -> funDecl | varDecl | statement
        statement   -> exprStmt | forStmt | ifStmt | printStmt
                     | returnStmt | whileStmt | block
        expression  -> assignment
        assignment  -> IDENTIFIER "=" assignment | logic_or
        logic_or    -> logic_and ( "or" logic_and )*
        logic_and   -> equality ( "and" equality )*
        equality    -> comparison ( ( "!=" | "==" ) comparison )*
        comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
        term        -> factor ( ( "-" | "+" ) factor )*
        factor      -> unary ( ( "/" | "*" ) unary )*
        unary       -> ( "!" | "-" ) unary | call
        call        -> primary ( "(" arguments? ")" )*
        primary     -> NUMBER | STRING | "true" | "false" | "nil"
                     | IDENTIFIER | "(" expression ")"

    The terminating ";" of expression and print statements is optional.
    """

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.current = 0
        self.errors: list[ParseError] = []

    def parse(self) -> list[nodes.Stmt]:
        statements: list[nodes.Stmt] = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)

        if self.errors:
            first = self.errors[0]
            first.errors = list(self.errors)
            raise first

        logger.debug("parsed %d top-level statements", len(statements))
        return statements

    # ----- statements -----

    def declaration(self) -> Optional[nodes.Stmt]:
        try:
            if self.match(TokenType.FUN):
                return self.function("function")
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError as exc:
            self.errors.append(exc)
            self.synchronize()
            return None

    def function(self, kind: str) -> nodes.Function:
        name = self.consume(TokenType.IDENTIFIER, f"Expect {kind} name.")
        self.consume(TokenType.LEFT_PAREN, f"Expect '(' after {kind} name.")
        params: list[Token] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    raise self.error(self.peek(), "Can't have more than 255 parameters.")
                params.append(self.consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self.match(TokenType.COMMA):
                    break
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
        self.consume(TokenType.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        return nodes.Function(name, params, self.block())

    def var_declaration(self) -> nodes.Var:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return nodes.Var(name, initializer)

    def statement(self) -> nodes.Stmt:
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.RETURN):
            return self.return_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.LEFT_BRACE):
            return nodes.Block(self.block())
        return self.expression_statement()

    def for_statement(self) -> nodes.Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        initializer: Optional[nodes.Stmt]
        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()

        # desugar into a while loop
        if increment is not None:
            body = nodes.Block([body, nodes.Expression(increment)])
        if condition is None:
            condition = nodes.Literal(True)
        body = nodes.While(condition, body)
        if initializer is not None:
            body = nodes.Block([initializer, body])
        return body

    def if_statement(self) -> nodes.If:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self.statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.statement()
        return nodes.If(condition, then_branch, else_branch)

    def print_statement(self) -> nodes.Print:
        value = self.expression()
        self.match(TokenType.SEMICOLON)
        return nodes.Print(value)

    def return_statement(self) -> nodes.Return:
        keyword = self.previous()
        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return nodes.Return(keyword, value)

    def while_statement(self) -> nodes.While:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        return nodes.While(condition, self.statement())

    def block(self) -> list[nodes.Stmt]:
        statements: list[nodes.Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self) -> nodes.Expression:
        expr = self.expression()
        self.match(TokenType.SEMICOLON)
        return nodes.Expression(expr)

    # ----- expressions -----

    def expression(self) -> nodes.Expr:
        return self.assignment()

    def assignment(self) -> nodes.Expr:
        expr = self.logic_or()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, nodes.Variable):
                return nodes.Assign(expr.name, value)
            raise self.error(equals, "Invalid assignment target.")

        return expr

    def logic_or(self) -> nodes.Expr:
        expr = self.logic_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            expr = nodes.Logical(expr, operator, self.logic_and())
        return expr

    def logic_and(self) -> nodes.Expr:
        expr = self.equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            expr = nodes.Logical(expr, operator, self.equality())
        return expr

    def _binary(self, operand, operators: tuple[TokenType, ...]) -> nodes.Expr:
        # left-associative chain: operand (op operand)*
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            expr = nodes.Binary(expr, operator, operand())
        return expr

    def equality(self) -> nodes.Expr:
        return self._binary(self.comparison, _EQUALITY)

    def comparison(self) -> nodes.Expr:
        return self._binary(self.term, _COMPARISON)

    def term(self) -> nodes.Expr:
        return self._binary(self.factor, _TERM)

    def factor(self) -> nodes.Expr:
        return self._binary(self.unary, _FACTOR)

    def unary(self) -> nodes.Expr:
        if self.match(*_UNARY):
            operator = self.previous()
            return nodes.Unary(operator, self.unary())
        return self.call()

    def call(self) -> nodes.Expr:
        expr = self.primary()
        while self.match(TokenType.LEFT_PAREN):
            expr = self.finish_call(expr)
        return expr

    def finish_call(self, callee: nodes.Expr) -> nodes.Call:
        arguments: list[nodes.Expr] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    raise self.error(self.peek(), "Can't have more than 255 arguments.")
                arguments.append(self.expression())
                if not self.match(TokenType.COMMA):
                    break
        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return nodes.Call(callee, paren, arguments)

    def primary(self) -> nodes.Expr:
        if self.match(TokenType.FALSE):
            return nodes.Literal(False)
        if self.match(TokenType.TRUE):
            return nodes.Literal(True)
        if self.match(TokenType.NIL):
            return nodes.Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return nodes.Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return nodes.Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return nodes.Grouping(expr)
        raise self.error(self.peek(), "Expect expression.")

    # ----- token helpers -----

    def match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise self.error(self.peek(), message)

    def check(self, token_type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type is token_type

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type is TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def error(self, token: Token, message: str) -> ParseError:
        return ParseError(token, message)

    def synchronize(self) -> None:
        """Discard tokens until a statement boundary (panic-mode recovery)."""
        self.advance()
        while not self.is_at_end():
            if self.previous().type is TokenType.SEMICOLON:
                return
            if self.peek().type in _STATEMENT_STARTS:
                return
            self.advance()
