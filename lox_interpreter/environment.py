from typing import Dict, Any, Optional

from . tokens import Token
from . errors import LoxRuntimeError

class Environment:
    """
    Manages variable scopes, storing and retrieving variable values.

    Environments are shared by reference: a block, a function call and every
    closure created inside them all hold the same object, so later
    assignments are visible to all of them.
    """
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.values: Dict[str, Any] = {}
        self.enclosing: Optional['Environment'] = enclosing

    def define(self, name: str, value: Any):
        """
        Defines a new variable in the current scope.
        Redefining a name in the same scope replaces the old binding.
        """
        self.values[name] = value

    def get(self, name: Token) -> Any:
        """
        Retrieves the value of a variable.
        If not found in the current scope, it checks the enclosing scope.
        """
        environment = self
        while environment is not None:
            if name.lexeme in environment.values:
                return environment.values[name.lexeme]
            environment = environment.enclosing

        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name: Token, value: Any) -> Any:
        """
        Assigns a new value to an existing variable in the nearest scope that
        defines it. Assignment never creates a binding.
        """
        environment = self
        while environment is not None:
            if name.lexeme in environment.values:
                environment.values[name.lexeme] = value
                return value
            environment = environment.enclosing

        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")
