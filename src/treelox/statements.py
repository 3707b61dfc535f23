from __future__ import annotations

from . import nodes
from .common import ReturnSignal
from .functions import LoxFunction


class StatementMixin:
    def exec_Expression(self, node: nodes.Expression) -> None:
        value = self.eval_expr(node.expression)
        if self.mode == "evaluate":
            self.write(self.stringify(value))

    def exec_Print(self, node: nodes.Print) -> None:
        self.write(self.stringify(self.eval_expr(node.expression)))

    def exec_Var(self, node: nodes.Var) -> None:
        value = None
        if node.initializer is not None:
            value = self.eval_expr(node.initializer)
        self.session.arena.define(self.environment, node.name.lexeme, value)

    def exec_Block(self, node: nodes.Block) -> None:
        frame = self.session.arena.new_frame(self.environment)
        self.execute_block(node.statements, frame)

    def exec_If(self, node: nodes.If) -> None:
        if self.is_truthy(self.eval_expr(node.condition)):
            self.exec_stmt(node.then_branch)
        elif node.else_branch is not None:
            self.exec_stmt(node.else_branch)

    def exec_While(self, node: nodes.While) -> None:
        # the condition is re-evaluated on every iteration
        while self.is_truthy(self.eval_expr(node.condition)):
            self.exec_stmt(node.body)

    def exec_Function(self, node: nodes.Function) -> None:
        # closes over the frame current *now*, not the one seen at parse time
        self.session.arena.capture(self.environment)
        func = LoxFunction(node, self.environment)
        self.session.arena.define(self.environment, node.name.lexeme, func)

    def exec_Return(self, node: nodes.Return) -> None:
        value = self.eval_expr(node.value) if node.value is not None else None
        raise ReturnSignal(value)
