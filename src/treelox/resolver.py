from __future__ import annotations

import enum
import logging
from typing import Dict, Sequence

from . import nodes
from .errors import BindingError
from .session import Session
from .tokens import Token

logger = logging.getLogger(__name__)


class FunctionKind(enum.Enum):
    NONE = "none"
    FUNCTION = "function"


class Resolver:
    """
    Static pass computing, for each variable reference and assignment, how
    many scopes separate it from its declaration.

    The scope stack mirrors lexical nesting only: blocks and function bodies
    push a scope, global code has none. Within a scope a name maps to False
    while declared but not yet initialized and to True once defined. Names
    not found in any scope are left unresolved and looked up in the global
    frame at run time.
    """

    def __init__(self, session: Session):
        self.session = session
        self.scopes: list[Dict[str, bool]] = []
        self.current_function = FunctionKind.NONE

    def resolve(self, statements: Sequence[nodes.Stmt]) -> None:
        before = len(self.session.bindings)
        self.resolve_block(statements)
        logger.debug("resolved %d local binding(s)", len(self.session.bindings) - before)

    def resolve_block(self, statements: Sequence[nodes.Stmt]) -> None:
        for stmt in statements:
            self.resolve_stmt(stmt)

    def resolve_stmt(self, node: nodes.Stmt) -> None:
        m = getattr(self, f"stmt_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Statement not supported: {node.__class__.__name__}")
        m(node)

    def resolve_expr(self, node: nodes.Expr) -> None:
        m = getattr(self, f"expr_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Expression not supported: {node.__class__.__name__}")
        m(node)

    # ----- scope bookkeeping -----

    def begin_scope(self) -> None:
        self.scopes.append({})

    def end_scope(self) -> None:
        self.scopes.pop()

    def declare(self, name: Token) -> None:
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            raise BindingError(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def define(self, name: Token) -> None:
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True

    def resolve_local(self, node: nodes.Expr, name: Token) -> None:
        for depth, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.session.bind(node.node_id, depth)
                return
        # not found: global

    def resolve_function(self, node: nodes.Function, kind: FunctionKind) -> None:
        enclosing = self.current_function
        self.current_function = kind
        self.begin_scope()
        try:
            for param in node.params:
                self.declare(param)
                self.define(param)
            self.resolve_block(node.body)
        finally:
            self.end_scope()
            self.current_function = enclosing

    # ----- statements -----

    def stmt_Block(self, node: nodes.Block) -> None:
        self.begin_scope()
        try:
            self.resolve_block(node.statements)
        finally:
            self.end_scope()

    def stmt_Var(self, node: nodes.Var) -> None:
        self.declare(node.name)
        if node.initializer is not None:
            self.resolve_expr(node.initializer)
        self.define(node.name)

    def stmt_Function(self, node: nodes.Function) -> None:
        # defined before the body is resolved so the function can recurse
        self.declare(node.name)
        self.define(node.name)
        self.resolve_function(node, FunctionKind.FUNCTION)

    def stmt_Expression(self, node: nodes.Expression) -> None:
        self.resolve_expr(node.expression)

    def stmt_Print(self, node: nodes.Print) -> None:
        self.resolve_expr(node.expression)

    def stmt_If(self, node: nodes.If) -> None:
        self.resolve_expr(node.condition)
        self.resolve_stmt(node.then_branch)
        if node.else_branch is not None:
            self.resolve_stmt(node.else_branch)

    def stmt_While(self, node: nodes.While) -> None:
        self.resolve_expr(node.condition)
        self.resolve_stmt(node.body)

    def stmt_Return(self, node: nodes.Return) -> None:
        if self.current_function is FunctionKind.NONE:
            raise BindingError(node.keyword, "Can't return from top-level code.")
        if node.value is not None:
            self.resolve_expr(node.value)

    # ----- expressions -----

    def expr_Variable(self, node: nodes.Variable) -> None:
        if self.scopes and self.scopes[-1].get(node.name.lexeme) is False:
            raise BindingError(node.name, "Can't read local variable in its own initializer.")
        self.resolve_local(node, node.name)

    def expr_Assign(self, node: nodes.Assign) -> None:
        self.resolve_expr(node.value)
        self.resolve_local(node, node.name)

    def expr_Binary(self, node: nodes.Binary) -> None:
        self.resolve_expr(node.left)
        self.resolve_expr(node.right)

    def expr_Logical(self, node: nodes.Logical) -> None:
        self.resolve_expr(node.left)
        self.resolve_expr(node.right)

    def expr_Unary(self, node: nodes.Unary) -> None:
        self.resolve_expr(node.right)

    def expr_Grouping(self, node: nodes.Grouping) -> None:
        self.resolve_expr(node.expression)

    def expr_Call(self, node: nodes.Call) -> None:
        self.resolve_expr(node.callee)
        for argument in node.arguments:
            self.resolve_expr(argument)

    def expr_Literal(self, node: nodes.Literal) -> None:
        return

