from __future__ import annotations

from decimal import Decimal
from typing import Any

from . import nodes
from .tokens import format_number_literal


def _literal_text(value: Any) -> str:
    if value is None:
        return "nil"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, float):
        return format_number_literal(value)
    return value


class AstPrinter:
    """Canonical parenthesized rendering used by the `parse` command."""

    def print(self, node: nodes.Node) -> str:
        m = getattr(self, f"print_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Cannot print node: {node.__class__.__name__}")
        return m(node)

    def parenthesize(self, name: str, *parts: Any) -> str:
        out = [name]
        for part in parts:
            if isinstance(part, nodes.Node):
                out.append(self.print(part))
            else:
                out.append(str(part))
        return "(" + " ".join(out) + ")"

    # ----- expressions -----

    def print_Literal(self, node: nodes.Literal) -> str:
        return _literal_text(node.value)

    def print_Grouping(self, node: nodes.Grouping) -> str:
        return self.parenthesize("group", node.expression)

    def print_Unary(self, node: nodes.Unary) -> str:
        return self.parenthesize(node.operator.lexeme, node.right)

    def print_Binary(self, node: nodes.Binary) -> str:
        return self.parenthesize(node.operator.lexeme, node.left, node.right)

    def print_Logical(self, node: nodes.Logical) -> str:
        return self.parenthesize(node.operator.lexeme, node.left, node.right)

    def print_Variable(self, node: nodes.Variable) -> str:
        return node.name.lexeme

    def print_Assign(self, node: nodes.Assign) -> str:
        return self.parenthesize("=", node.name.lexeme, node.value)

    def print_Call(self, node: nodes.Call) -> str:
        return self.parenthesize("call", node.callee, *node.arguments)

    # ----- statements -----

    def print_Expression(self, node: nodes.Expression) -> str:
        return self.print(node.expression)

    def print_Print(self, node: nodes.Print) -> str:
        return self.parenthesize("print", node.expression)

    def print_Var(self, node: nodes.Var) -> str:
        if node.initializer is None:
            return self.parenthesize("var", node.name.lexeme)
        return self.parenthesize("var", node.name.lexeme, node.initializer)

    def print_Block(self, node: nodes.Block) -> str:
        return self.parenthesize("block", *node.statements)

    def print_If(self, node: nodes.If) -> str:
        if node.else_branch is None:
            return self.parenthesize("if", node.condition, node.then_branch)
        return self.parenthesize("if", node.condition, node.then_branch, node.else_branch)

    def print_While(self, node: nodes.While) -> str:
        return self.parenthesize("while", node.condition, node.body)

    def print_Function(self, node: nodes.Function) -> str:
        params = "(" + " ".join(p.lexeme for p in node.params) + ")"
        return self.parenthesize("fun", node.name.lexeme, params, *node.body)

    def print_Return(self, node: nodes.Return) -> str:
        if node.value is None:
            return "(return)"
        return self.parenthesize("return", node.value)


class SourcePrinter:
    """
    Renders an AST back into Lox source.

    Parsing the output yields an AST of the same shape: grouping is kept as
    explicit `Grouping` nodes, so no extra parentheses are ever added.
    """

    indent_unit = "    "

    def unparse(self, statements: list[nodes.Stmt]) -> str:
        return "".join(self.stmt(s, 0) for s in statements)

    def stmt(self, node: nodes.Stmt, depth: int) -> str:
        m = getattr(self, f"stmt_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Cannot unparse statement: {node.__class__.__name__}")
        return self.indent_unit * depth + m(node, depth) + "\n"

    def expr(self, node: nodes.Expr) -> str:
        m = getattr(self, f"expr_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Cannot unparse expression: {node.__class__.__name__}")
        return m(node)

    def _body(self, statements: list[nodes.Stmt], depth: int) -> str:
        inner = "".join(self.stmt(s, depth + 1) for s in statements)
        return "{\n" + inner + self.indent_unit * depth + "}"

    # ----- expressions -----

    def expr_Literal(self, node: nodes.Literal) -> str:
        value = node.value
        if isinstance(value, float):
            if value.is_integer():
                return format_number_literal(value)
            # positional notation; the scanner has no exponent syntax
            return format(Decimal(repr(value)), "f")
        if isinstance(value, str):
            return f'"{value}"'
        return _literal_text(value)

    def expr_Grouping(self, node: nodes.Grouping) -> str:
        return f"({self.expr(node.expression)})"

    def expr_Unary(self, node: nodes.Unary) -> str:
        return f"{node.operator.lexeme}{self.expr(node.right)}"

    def expr_Binary(self, node: nodes.Binary) -> str:
        return f"{self.expr(node.left)} {node.operator.lexeme} {self.expr(node.right)}"

    def expr_Logical(self, node: nodes.Logical) -> str:
        return f"{self.expr(node.left)} {node.operator.lexeme} {self.expr(node.right)}"

    def expr_Variable(self, node: nodes.Variable) -> str:
        return node.name.lexeme

    def expr_Assign(self, node: nodes.Assign) -> str:
        return f"{node.name.lexeme} = {self.expr(node.value)}"

    def expr_Call(self, node: nodes.Call) -> str:
        args = ", ".join(self.expr(a) for a in node.arguments)
        return f"{self.expr(node.callee)}({args})"

    # ----- statements -----

    def stmt_Expression(self, node: nodes.Expression, depth: int) -> str:
        return f"{self.expr(node.expression)};"

    def stmt_Print(self, node: nodes.Print, depth: int) -> str:
        return f"print {self.expr(node.expression)};"

    def stmt_Var(self, node: nodes.Var, depth: int) -> str:
        if node.initializer is None:
            return f"var {node.name.lexeme};"
        return f"var {node.name.lexeme} = {self.expr(node.initializer)};"

    def stmt_Block(self, node: nodes.Block, depth: int) -> str:
        return self._body(node.statements, depth)

    def _branch(self, node: nodes.Stmt, depth: int) -> str:
        if isinstance(node, nodes.Block):
            return self._body(node.statements, depth)
        return self.stmt(node, depth + 1).strip()

    def stmt_If(self, node: nodes.If, depth: int) -> str:
        out = f"if ({self.expr(node.condition)}) {self._branch(node.then_branch, depth)}"
        if node.else_branch is not None:
            out += f" else {self._branch(node.else_branch, depth)}"
        return out

    def stmt_While(self, node: nodes.While, depth: int) -> str:
        return f"while ({self.expr(node.condition)}) {self._branch(node.body, depth)}"

    def stmt_Function(self, node: nodes.Function, depth: int) -> str:
        params = ", ".join(p.lexeme for p in node.params)
        return f"fun {node.name.lexeme}({params}) {self._body(node.body, depth)}"

    def stmt_Return(self, node: nodes.Return, depth: int) -> str:
        if node.value is None:
            return "return;"
        return f"return {self.expr(node.value)};"


def to_sexpr(node: nodes.Node) -> str:
    return AstPrinter().print(node)


def unparse(statements: list[nodes.Stmt]) -> str:
    return SourcePrinter().unparse(statements)
