from __future__ import annotations

import math
import sys
from typing import Any, Sequence

from . import nodes
from .errors import LoxRuntimeError
from .functions import LoxCallable
from .tokens import Token, TokenType

_EPSILON = sys.float_info.epsilon


def _ieee_divide(left: float, right: float) -> float:
    if right != 0.0:
        return left / right
    if left == 0.0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


class HelperMixin:
    def is_truthy(self, value: Any) -> bool:
        # only nil and false are falsey; 0 and "" are truthy
        if value is None:
            return False
        if value is False:
            return False
        return True

    def is_equal(self, left: Any, right: Any) -> bool:
        # no cross-type equality: true != 1, nil != false
        if type(left) is not type(right):
            return False
        if left is None:
            return True
        if type(left) is float:
            return left == right or abs(left - right) < _EPSILON
        if isinstance(left, LoxCallable):
            return left is right
        return left == right

    def stringify(self, value: Any) -> str:
        if value is None:
            return "nil"
        if value is True:
            return "true"
        if value is False:
            return "false"
        if type(value) is float:
            if math.isnan(value):
                return "NaN"
            if math.isinf(value):
                return "inf" if value > 0 else "-inf"
            if value == 0 and math.copysign(1.0, value) < 0:
                return "-0"
            if value.is_integer():
                return str(int(value))
            return repr(value)
        if type(value) is str:
            return value
        return repr(value)

    def _check_number_operand(self, operator: Token, operand: Any) -> float:
        if type(operand) is float:
            return operand
        raise LoxRuntimeError(operator, "Operand must be a number.")

    def _check_number_operands(self, operator: Token, left: Any, right: Any) -> tuple[float, float]:
        if type(left) is float and type(right) is float:
            return left, right
        raise LoxRuntimeError(operator, "Operands must be numbers.")

    def _apply_arithmetic(self, operator: Token, left: float, right: float) -> Any:
        op = operator.type
        if op is TokenType.MINUS:
            return left - right
        if op is TokenType.STAR:
            return left * right
        if op is TokenType.SLASH:
            return _ieee_divide(left, right)
        if op is TokenType.GREATER:
            return left > right
        if op is TokenType.GREATER_EQUAL:
            return left >= right
        if op is TokenType.LESS:
            return left < right
        if op is TokenType.LESS_EQUAL:
            return left <= right
        raise NotImplementedError(f"Binary operator not supported: {operator.lexeme}")

    def _look_up_variable(self, name: Token, node: nodes.Expr) -> Any:
        distance = self.session.distance_of(node.node_id)
        if distance is not None:
            return self.session.arena.get_at(self.environment, distance, name.lexeme)
        return self.session.arena.get(self.globals, name)

    def _call_function(self, callee: Any, arguments: Sequence[Any], paren: Token) -> Any:
        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity():
            raise LoxRuntimeError(
                paren, f"Expected {callee.arity()} arguments but got {len(arguments)}."
            )
        return callee.call(self, arguments)
