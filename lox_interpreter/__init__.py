from .errors import Diagnostic, ErrorKind, LoxRuntimeError
from .lox import Lox

__all__ = ["Diagnostic", "ErrorKind", "Lox", "LoxRuntimeError"]
