# pyramath/games/pyramid/logic/regroup.py
# Division hard case: re-pair leftover stones so the face stays solvable.
from __future__ import annotations
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .face import Face, Role
from .operations import Operation, pair_result

logger = logging.getLogger(__name__)

Entry = Tuple[int, int]  # (stone index, value)


@dataclass
class RegroupReport:
    pairs: List[Tuple[int, int]] = field(default_factory=list)   # (first index, second index)
    rewritten: List[int] = field(default_factory=list)           # stone indices whose value changed


def _first_divisible(entries: Sequence[Entry]) -> Optional[Tuple[int, int]]:
    """Lowest (i, j) whose values divide evenly or are equal."""
    for i in range(len(entries)):
        for j in range(i + 1, len(entries)):
            if pair_result(Operation.DIVIDE, entries[i][1], entries[j][1]) is not None:
                return i, j
    return None


def _plan(entries: Sequence[Entry]) -> List[Tuple[Entry, Entry, bool]]:
    """
    Greedy pairing. When a pass finds nothing, the last two entries are
    forced into a pair by making the second-to-last exactly double the last.
    The bool marks a forced (rewritten) pair.
    """
    remaining = list(entries)
    planned: List[Tuple[Entry, Entry, bool]] = []
    while len(remaining) >= 2:
        found = _first_divisible(remaining)
        if found is not None:
            i, j = found
            b = remaining.pop(j)
            a = remaining.pop(i)
            planned.append((a, b, False))
            continue
        last = remaining.pop()
        idx, _ = remaining.pop()
        planned.append(((idx, last[1] * 2), last, True))
    return planned


def regroup_values(values: Sequence[int]) -> List[Tuple[int, int]]:
    """Values-only view: list of (larger, smaller) division pairs."""
    out: List[Tuple[int, int]] = []
    for (_, a), (_, b), _forced in _plan(list(enumerate(values))):
        out.append((max(a, b), min(a, b)))
    return out


def needs_regroup(face: Face) -> bool:
    """True for a division face whose unsolved stones no longer hold an intact pair."""
    if face.operation is not Operation.DIVIDE:
        return False
    unsolved = face.unsolved_indices()
    if len(unsolved) < 2:
        return False
    counts = Counter(face.stones[i].pair_index for i in unsolved)
    return not any(c >= 2 for c in counts.values())


def regroup_face(face: Face) -> RegroupReport:
    """
    Re-pair every unsolved stone of the face. Pairs get fresh synthetic
    indices (100+). Stones are only rewritten when no divisible pair is left,
    and those indices are reported so the caller can redraw them.
    """
    report = RegroupReport()
    entries = [(i, face.stones[i].value) for i in face.unsolved_indices()]

    for (ia, va), (ib, vb), forced in _plan(entries):
        if forced:
            logger.warning(
                "regroup on %s face rewrote stone %d: %d -> %d",
                face.operation.value, ia, face.stones[ia].value, va,
            )
            face.stones[ia].value = va
            report.rewritten.append(ia)

        first, second = (ia, ib) if va >= vb else (ib, ia)
        pidx = face.take_synthetic_index()
        face.stones[first].pair_index = pidx
        face.stones[first].role = Role.FIRST
        face.stones[second].pair_index = pidx
        face.stones[second].role = Role.SECOND
        report.pairs.append((first, second))

    logger.info(
        "regrouped %s face into %d pairs (%d rewritten)",
        face.operation.value, len(report.pairs), len(report.rewritten),
    )
    return report
