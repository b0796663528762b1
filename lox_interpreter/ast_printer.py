from typing import List

from . import ast_nodes as ast
from . values import stringify

class AstPrinter(ast.ExprVisitor, ast.StmtVisitor):
    """
    A utility class to print the AST in a readable Lisp-like format.
    This is extremely useful for debugging the parser, and the output is
    deterministic so it can be used in golden tests.
    """
    def print_program(self, statements: List[ast.Stmt]) -> str:
        lines = []
        for stmt in statements:
            lines.append(stmt.accept(self))
        return "\n".join(lines)

    def print_expr(self, expr: ast.Expr) -> str:
        return expr.accept(self)

    # --- Statement Visitor Methods ---

    def visit_expression_stmt(self, stmt: ast.Expression) -> str:
        return self._parenthesize(";", stmt.expression)

    def visit_print_stmt(self, stmt: ast.Print) -> str:
        return self._parenthesize("print", stmt.expression)

    def visit_var_stmt(self, stmt: ast.Var) -> str:
        if stmt.initializer is not None:
            return self._parenthesize(f"var {stmt.name.lexeme}", stmt.initializer)
        return f"(var {stmt.name.lexeme})"

    def visit_block_stmt(self, stmt: ast.Block) -> str:
        return self._parenthesize("block", *stmt.statements)

    def visit_if_stmt(self, stmt: ast.If) -> str:
        if stmt.else_branch is not None:
            return self._parenthesize("if-else", stmt.condition, stmt.then_branch, stmt.else_branch)
        return self._parenthesize("if", stmt.condition, stmt.then_branch)

    def visit_while_stmt(self, stmt: ast.While) -> str:
        return self._parenthesize("while", stmt.condition, stmt.body)

    def visit_function_stmt(self, stmt: ast.Function) -> str:
        param_str = " ".join(p.lexeme for p in stmt.params)
        return self._parenthesize(f"fun {stmt.name.lexeme} ({param_str})", *stmt.body)

    def visit_return_stmt(self, stmt: ast.Return) -> str:
        if stmt.value is not None:
            return self._parenthesize("return", stmt.value)
        return "(return)"

    # --- Expression Visitor Methods ---

    def visit_binary_expr(self, expr: ast.Binary) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_grouping_expr(self, expr: ast.Grouping) -> str:
        return self._parenthesize("group", expr.expression)

    def visit_literal_expr(self, expr: ast.Literal) -> str:
        if isinstance(expr.value, str): return f'"{expr.value}"'
        return stringify(expr.value)

    def visit_unary_expr(self, expr: ast.Unary) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.right)

    def visit_variable_expr(self, expr: ast.Variable) -> str:
        return expr.name.lexeme

    def visit_assign_expr(self, expr: ast.Assign) -> str:
        return self._parenthesize(f"= {expr.name.lexeme}", expr.value)

    def visit_logical_expr(self, expr: ast.Logical) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_call_expr(self, expr: ast.Call) -> str:
        return self._parenthesize("call", expr.callee, *expr.arguments)

    # --- Helper Method ---

    def _parenthesize(self, name: str, *parts) -> str:
        """Helper to format a node and its children."""
        result = [f"({name}"]
        for part in parts:
            result.append(f" {part.accept(self)}")
        result.append(")")
        return "".join(result)
