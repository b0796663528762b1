import time
from abc import ABC, abstractmethod
from typing import List, Any, TYPE_CHECKING

from . import ast_nodes as ast
from . environment import Environment

# This is a common pattern to break circular import cycles.
# The import is only done for static type checking, not at runtime.
if TYPE_CHECKING:
    from . interpreter import Interpreter


class LoxCallable(ABC):
    """
    An abstract base class for all objects that can be called like a function.
    """
    @abstractmethod
    def arity(self) -> int:
        """Returns the number of arguments the callable expects."""
        raise NotImplementedError

    @abstractmethod
    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        """Executes the callable's logic."""
        raise NotImplementedError

    def __str__(self) -> str:
        return "<native fn>"


class LoxFunction(LoxCallable):
    """
    Represents a user-defined function in Lox.
    """
    def __init__(self, declaration: ast.Function, closure: Environment):
        self.declaration = declaration
        self.closure = closure # The environment where the function was declared.

    def arity(self) -> int:
        """The number of parameters the function declares."""
        return len(self.declaration.params)

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        """
        Executes the function. This involves creating a new environment for the
        function's scope, binding arguments to parameters, and then executing
        the function's body.
        """
        # It encloses the function's closure, not the caller's environment.
        # This is what enables lexical scoping.
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        result = interpreter.execute_block(self.declaration.body, environment)
        if result is not None:
            return result.value

        # If no 'return' is encountered, functions implicitly return nil.
        return None

    def __str__(self) -> str:
        return f"<fn {self.declaration.name.lexeme}>"


class ClockFunction(LoxCallable):
    """Native clock(): seconds since the Unix epoch."""
    def arity(self) -> int:
        return 0

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        return time.time()
