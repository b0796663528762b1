from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, TextIO

from . tokens import Token, TokenType


class ErrorKind(Enum):
    LEXICAL = "lexical"
    SYNTAX = "syntax"
    RUNTIME = "runtime"


@dataclass(frozen=True)
class Diagnostic:
    """A single reported error with the source line it came from."""
    kind: ErrorKind
    line: int
    message: str
    location: str = ""

    def __str__(self) -> str:
        if self.kind is ErrorKind.RUNTIME:
            return f"{self.message}\n[line {self.line}]"
        return f"[line {self.line}] Error{self.location}: {self.message}"


class ParseError(RuntimeError):
    """A custom exception for unwinding the parser to a statement boundary."""
    pass


class LoxRuntimeError(RuntimeError):
    """Custom exception for reporting runtime errors."""
    def __init__(self, token: Token, message: str):
        self.token = token
        self.message = message
        super().__init__(self.message)


class ErrorReporter:
    """
    Collects lexical, syntax and runtime diagnostics in the order they are
    reported. When a stream is given, each diagnostic is also written to it
    as soon as it arrives.
    """
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.diagnostics: List[Diagnostic] = []

    @property
    def had_error(self) -> bool:
        return any(d.kind is not ErrorKind.RUNTIME for d in self.diagnostics)

    @property
    def had_runtime_error(self) -> bool:
        return any(d.kind is ErrorKind.RUNTIME for d in self.diagnostics)

    def error(self, line: int, message: str):
        """Reports a lexical error, which has no token to point at."""
        self._report(Diagnostic(ErrorKind.LEXICAL, line, message))

    def token_error(self, token: Token, message: str):
        """Reports a syntax error at the given token."""
        if token.token_type == TokenType.EOF:
            location = " at end"
        else:
            location = f" at '{token.lexeme}'"
        self._report(Diagnostic(ErrorKind.SYNTAX, token.line, message, location))

    def runtime_error(self, error: LoxRuntimeError):
        self._report(Diagnostic(ErrorKind.RUNTIME, error.token.line, error.message))

    def reset(self):
        self.diagnostics = []

    def _report(self, diagnostic: Diagnostic):
        self.diagnostics.append(diagnostic)
        if self.stream is not None:
            print(diagnostic, file=self.stream)
