# pyramath/games/pyramid/logic/operations.py
from __future__ import annotations
import enum
from typing import Optional


class Operation(enum.Enum):
    """One face of the pyramid. Values are the short keys used on the wire."""
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def title(self) -> str:
        return _TITLES[self]

    @classmethod
    def parse(cls, value) -> "Operation":
        """
        Accepts the enum itself, the short key, the long name or the symbol:
          'add' | 'addition' | '+'  -> Operation.ADD
        Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        op = _ALIASES.get(key)
        if op is None:
            raise ValueError(f"Unknown operation: {value!r}")
        return op


# Face order around the pyramid (front, right, back, left)
FACE_ORDER = (Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY, Operation.DIVIDE)

_SYMBOLS = {
    Operation.ADD: "+",
    Operation.SUBTRACT: "−",
    Operation.MULTIPLY: "×",
    Operation.DIVIDE: "÷",
}

_TITLES = {
    Operation.ADD: "Addition",
    Operation.SUBTRACT: "Subtraction",
    Operation.MULTIPLY: "Multiplication",
    Operation.DIVIDE: "Division",
}

_ALIASES = {
    "add": Operation.ADD, "addition": Operation.ADD, "+": Operation.ADD,
    "subtract": Operation.SUBTRACT, "subtraction": Operation.SUBTRACT,
    "sub": Operation.SUBTRACT, "-": Operation.SUBTRACT, "−": Operation.SUBTRACT,
    "multiply": Operation.MULTIPLY, "multiplication": Operation.MULTIPLY,
    "mul": Operation.MULTIPLY, "*": Operation.MULTIPLY, "x": Operation.MULTIPLY,
    "×": Operation.MULTIPLY,
    "divide": Operation.DIVIDE, "division": Operation.DIVIDE, "div": Operation.DIVIDE,
    "/": Operation.DIVIDE, "÷": Operation.DIVIDE,
}


# ============================================================
# Pair arithmetic
# ============================================================

def divides_evenly(a: int, b: int) -> bool:
    """True when one operand is an exact multiple of the other (zero never qualifies)."""
    if a <= 0 or b <= 0:
        return False
    big, small = max(a, b), min(a, b)
    return big % small == 0


def pair_result(operation: Operation, a: int, b: int) -> Optional[int]:
    """
    Result of an unordered pair, i.e. the value the player produces when the
    two stones are picked in the right order:
      add       a + b
      subtract  |a - b|
      multiply  a * b
      divide    larger / smaller, 1 when equal, None when not exact
    """
    if operation is Operation.ADD:
        return a + b
    if operation is Operation.SUBTRACT:
        return abs(a - b)
    if operation is Operation.MULTIPLY:
        return a * b
    if operation is Operation.DIVIDE:
        if a == b and a > 0:
            return 1
        if not divides_evenly(a, b):
            return None
        return max(a, b) // min(a, b)
    raise ValueError(f"Unsupported operation: {operation!r}")


def ordered_operands(operation: Operation, a: int, b: int) -> tuple[int, int]:
    """Order two operands the way the player has to select them."""
    if operation in (Operation.SUBTRACT, Operation.DIVIDE) and a < b:
        return b, a
    return a, b


def is_strict_order(operation: Operation) -> bool:
    return operation in (Operation.SUBTRACT, Operation.DIVIDE)
