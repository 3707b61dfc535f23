from __future__ import annotations

from typing import Any

from . import nodes
from .errors import LoxRuntimeError
from .tokens import TokenType


class ExpressionMixin:
    def eval_Literal(self, node: nodes.Literal) -> Any:
        return node.value

    def eval_Grouping(self, node: nodes.Grouping) -> Any:
        return self.eval_expr(node.expression)

    def eval_Unary(self, node: nodes.Unary) -> Any:
        right = self.eval_expr(node.right)
        op = node.operator.type
        if op is TokenType.BANG:
            return not self.is_truthy(right)
        if op is TokenType.MINUS:
            return -self._check_number_operand(node.operator, right)
        raise NotImplementedError(f"Unary operator not supported: {node.operator.lexeme}")

    def eval_Binary(self, node: nodes.Binary) -> Any:
        left = self.eval_expr(node.left)
        right = self.eval_expr(node.right)
        op = node.operator.type

        if op is TokenType.EQUAL_EQUAL:
            return self.is_equal(left, right)
        if op is TokenType.BANG_EQUAL:
            return not self.is_equal(left, right)
        if op is TokenType.PLUS:
            if type(left) is float and type(right) is float:
                return left + right
            if type(left) is str and type(right) is str:
                return left + right
            raise LoxRuntimeError(
                node.operator, "Operands must be two numbers or two strings."
            )

        left, right = self._check_number_operands(node.operator, left, right)
        return self._apply_arithmetic(node.operator, left, right)

    def eval_Logical(self, node: nodes.Logical) -> Any:
        left = self.eval_expr(node.left)
        if node.operator.type is TokenType.OR:
            if self.is_truthy(left):
                return left
        elif not self.is_truthy(left):
            return left
        return self.eval_expr(node.right)

    def eval_Variable(self, node: nodes.Variable) -> Any:
        return self._look_up_variable(node.name, node)

    def eval_Assign(self, node: nodes.Assign) -> Any:
        value = self.eval_expr(node.value)
        arena = self.session.arena
        distance = self.session.distance_of(node.node_id)
        if distance is not None:
            arena.assign_at(self.environment, distance, node.name.lexeme, value)
        else:
            arena.assign(self.globals, node.name, value)
        return value

    def eval_Call(self, node: nodes.Call) -> Any:
        callee = self.eval_expr(node.callee)
        arguments = [self.eval_expr(argument) for argument in node.arguments]
        return self._call_function(callee, arguments, node.paren)
