import sys
from dataclasses import dataclass, fields, is_dataclass
from typing import List, Any, Optional, TextIO

from . import ast_nodes as ast
from . tokens import Token, TokenType
from . errors import ErrorReporter, LoxRuntimeError
from . environment import Environment
from . callables import LoxFunction, LoxCallable, ClockFunction
from . values import is_number, is_truthy, is_equal, stringify

# Each Lox call costs several Python frames in the tree walker.
RECURSION_LIMIT = 10000


@dataclass(frozen=True)
class ReturnValue:
    """
    Result of executing a 'return' statement. Statement execution yields
    None for normal completion, or one of these to unwind to the enclosing call.
    """
    value: Any


class Interpreter(ast.ExprVisitor, ast.StmtVisitor):
    """
    The Interpreter walks the AST and executes the code.
    """
    def __init__(self, reporter: Optional[ErrorReporter] = None, output: Optional[TextIO] = None):
        self.reporter = reporter if reporter is not None else ErrorReporter()
        # None means whatever sys.stdout is at print time.
        self.output = output
        self.globals = Environment()
        self.environment = self.globals

        self.globals.define("clock", ClockFunction())

        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)

    def interpret(self, statements: List[ast.Stmt]):
        """The main entry point for the interpreter."""
        statement = None
        try:
            for statement in statements:
                self._execute(statement)
        except LoxRuntimeError as error:
            self.reporter.runtime_error(error)
        except RecursionError:
            # Nesting outside of any call ran out of Python stack.
            self.reporter.runtime_error(LoxRuntimeError(_first_token(statement), "Stack overflow."))

    def _execute(self, stmt: ast.Stmt) -> Optional[ReturnValue]:
        """Helper to execute a single statement."""
        return stmt.accept(self)

    def evaluate(self, expr: ast.Expr) -> Any:
        """Evaluates a single expression against the current environment."""
        return expr.accept(self)

    def execute_block(self, statements: List[ast.Stmt], environment: Environment) -> Optional[ReturnValue]:
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                result = self._execute(statement)
                if result is not None:
                    return result
        finally:
            self.environment = previous
        return None

    # --- STATEMENT VISITOR METHODS ---

    def visit_expression_stmt(self, stmt: ast.Expression):
        self.evaluate(stmt.expression)
        return None

    def visit_print_stmt(self, stmt: ast.Print):
        value = self.evaluate(stmt.expression)
        print(stringify(value), file=self.output)
        return None

    def visit_var_stmt(self, stmt: ast.Var):
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)

        self.environment.define(stmt.name.lexeme, value)
        return None

    def visit_block_stmt(self, stmt: ast.Block):
        return self.execute_block(stmt.statements, Environment(self.environment))

    def visit_if_stmt(self, stmt: ast.If):
        if is_truthy(self.evaluate(stmt.condition)):
            return self._execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            return self._execute(stmt.else_branch)
        return None

    def visit_while_stmt(self, stmt: ast.While):
        while is_truthy(self.evaluate(stmt.condition)):
            result = self._execute(stmt.body)
            if result is not None:
                return result
        return None

    def visit_function_stmt(self, stmt: ast.Function):
        function = LoxFunction(stmt, self.environment)
        self.environment.define(stmt.name.lexeme, function)
        return None

    def visit_return_stmt(self, stmt: ast.Return):
        value = None
        if stmt.value is not None:
            value = self.evaluate(stmt.value)

        return ReturnValue(value)

    # --- HELPER METHODS FOR RUNTIME CHECKS ---

    def _check_number_operand(self, operator: Token, operand: Any):
        if is_number(operand): return
        raise LoxRuntimeError(operator, "Operand must be a number.")

    def _check_number_operands(self, operator: Token, left: Any, right: Any):
        if is_number(left) and is_number(right): return
        raise LoxRuntimeError(operator, "Operands must be numbers.")

    # --- EXPRESSION VISITOR METHODS ---

    def visit_binary_expr(self, expr: ast.Binary):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        op_type = expr.operator.token_type

        if op_type == TokenType.MINUS:
            self._check_number_operands(expr.operator, left, right)
            return left - right
        if op_type == TokenType.SLASH:
            self._check_number_operands(expr.operator, left, right)
            if right == 0.0:
                raise LoxRuntimeError(expr.operator, "Division by zero.")
            return left / right
        if op_type == TokenType.STAR:
            self._check_number_operands(expr.operator, left, right)
            return left * right
        if op_type == TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError(expr.operator, "Operands must be two numbers or two strings.")

        if op_type == TokenType.GREATER:
            self._check_number_operands(expr.operator, left, right)
            return left > right
        if op_type == TokenType.GREATER_EQUAL:
            self._check_number_operands(expr.operator, left, right)
            return left >= right
        if op_type == TokenType.LESS:
            self._check_number_operands(expr.operator, left, right)
            return left < right
        if op_type == TokenType.LESS_EQUAL:
            self._check_number_operands(expr.operator, left, right)
            return left <= right

        if op_type == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if op_type == TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        raise LoxRuntimeError(expr.operator, f"Unknown binary operator '{expr.operator.lexeme}'.")

    def visit_grouping_expr(self, expr: ast.Grouping):
        return self.evaluate(expr.expression)

    def visit_literal_expr(self, expr: ast.Literal):
        return expr.value

    def visit_unary_expr(self, expr: ast.Unary):
        right = self.evaluate(expr.right)
        if expr.operator.token_type == TokenType.MINUS:
            self._check_number_operand(expr.operator, right)
            return -right
        if expr.operator.token_type == TokenType.BANG:
            return not is_truthy(right)

        raise LoxRuntimeError(expr.operator, f"Unknown unary operator '{expr.operator.lexeme}'.")

    def visit_variable_expr(self, expr: ast.Variable):
        return self.environment.get(expr.name)

    def visit_assign_expr(self, expr: ast.Assign):
        value = self.evaluate(expr.value)
        return self.environment.assign(expr.name, value)

    def visit_logical_expr(self, expr: ast.Logical):
        left = self.evaluate(expr.left)

        if expr.operator.token_type == TokenType.OR:
            if is_truthy(left):
                return left
        else: # AND
            if not is_truthy(left):
                return left

        return self.evaluate(expr.right)

    def visit_call_expr(self, expr: ast.Call):
        callee = self.evaluate(expr.callee)

        arguments = []
        for argument in expr.arguments:
            arguments.append(self.evaluate(argument))

        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")

        if len(arguments) != callee.arity():
            raise LoxRuntimeError(expr.paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")

        try:
            return callee.call(self, arguments)
        except RecursionError:
            raise LoxRuntimeError(expr.paren, "Stack overflow.") from None


def _first_token(node: Any) -> Token:
    """Breadth-first search for the token closest to the top of a syntax tree."""
    pending = [node]
    while pending:
        item = pending.pop(0)
        if isinstance(item, Token):
            return item
        if isinstance(item, list):
            pending.extend(item)
        elif is_dataclass(item):
            pending.extend(getattr(item, field.name) for field in fields(item))
    return Token(TokenType.EOF, "", None, 1)
