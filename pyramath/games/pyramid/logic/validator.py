# pyramath/games/pyramid/logic/validator.py
from __future__ import annotations
import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .face import Face
from .operations import Operation, is_strict_order, pair_result

logger = logging.getLogger(__name__)


class ErrorReason(enum.Enum):
    """
    Why a submitted pair was not accepted. Nothing here is fatal: the caller
    clears the selection and lets the player try again.
    """
    INVALID_SELECTION = "invalid_selection"        # stale / out of range / solved / same stone twice
    ORDERING_VIOLATION = "ordering_violation"      # smaller number picked first (- and ÷)
    NON_INTEGER_DIVISION = "non_integer_division"  # remainder
    DIVISION_BY_ZERO = "division_by_zero"
    MISMATCH = "mismatch"                          # valid math, wrong value


@dataclass(frozen=True)
class PairOutcome:
    matched: bool
    result: Optional[int] = None
    error: Optional[ErrorReason] = None

    @property
    def resets_streak(self) -> bool:
        # a click on a dead stone is a no-op, everything else is a real miss
        return self.error is not None and self.error is not ErrorReason.INVALID_SELECTION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matched": self.matched,
            "result": self.result,
            "error": self.error.value if self.error else None,
        }


def _is_index(face: Face, value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < len(face.stones)


def validate_pair(face: Face, index_a, index_b) -> PairOutcome:
    """
    Check stones `index_a` (picked first) and `index_b` against the face's
    current target. Subtraction and division are order-strict: the first
    stone is the minuend / dividend.

    On a match both stones join the solved set and pairs_completed goes up.
    Any other outcome leaves the face untouched.
    """
    if face.is_complete or face.current_target is None:
        return PairOutcome(False, error=ErrorReason.INVALID_SELECTION)
    if not (_is_index(face, index_a) and _is_index(face, index_b)) or index_a == index_b:
        return PairOutcome(False, error=ErrorReason.INVALID_SELECTION)
    if index_a in face.solved or index_b in face.solved:
        return PairOutcome(False, error=ErrorReason.INVALID_SELECTION)

    first = face.stones[index_a].value
    second = face.stones[index_b].value
    op = face.operation

    if is_strict_order(op) and first < second:
        return PairOutcome(False, error=ErrorReason.ORDERING_VIOLATION)

    if op is Operation.SUBTRACT:
        result = first - second
    elif op is Operation.DIVIDE:
        if second == 0:
            return PairOutcome(False, error=ErrorReason.DIVISION_BY_ZERO)
        if first % second != 0:
            return PairOutcome(False, error=ErrorReason.NON_INTEGER_DIVISION)
        result = first // second
    else:
        result = pair_result(op, first, second)

    if result != face.current_target:
        logger.debug("%s %s %s = %s, target %s", first, op.symbol, second, result, face.current_target)
        return PairOutcome(False, result=result, error=ErrorReason.MISMATCH)

    face.solved.update((index_a, index_b))
    face.pairs_completed += 1
    return PairOutcome(True, result=result)
