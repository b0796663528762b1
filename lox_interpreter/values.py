"""
Helpers over Lox runtime values.

Values are plain Python objects:
    Number   -> float
    String   -> str
    Boolean  -> bool
    Nil      -> None
    Callable -> LoxCallable
"""
import math
from decimal import Decimal
from typing import Any


def is_number(value: Any) -> bool:
    # bool is an int subclass, and numbers are always floats, so check the exact type.
    return type(value) is float


def is_truthy(value: Any) -> bool:
    """Defines what is 'true' in Lox. False and nil are falsey."""
    if value is None: return False
    if isinstance(value, bool): return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    """Values of different kinds are never equal."""
    if a is None and b is None: return True
    if a is None or b is None: return False
    if type(a) is not type(b):
        return False
    return a == b


def stringify(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        # Shortest round-trip digits, always written out positionally.
        text = format(Decimal(repr(value)), 'f')
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return str(value)
