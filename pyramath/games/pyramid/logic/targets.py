# pyramath/games/pyramid/logic/targets.py
from __future__ import annotations
import logging
import random
from typing import Dict, List, Optional, Tuple

from .face import Face
from .operations import Operation, ordered_operands, pair_result
from .regroup import needs_regroup, regroup_face

logger = logging.getLogger(__name__)


def _unsolved_pairs(face: Face):
    idx = face.unsolved_indices()
    for i in range(len(idx)):
        for j in range(i + 1, len(idx)):
            a, b = idx[i], idx[j]
            result = pair_result(face.operation, face.stones[a].value, face.stones[b].value)
            if result is not None:
                yield a, b, result


def achievable_results(face: Face) -> Dict[int, int]:
    """result -> number of unsolved pairs producing it (division counts exact pairs only)."""
    counts: Dict[int, int] = {}
    for _a, _b, result in _unsolved_pairs(face):
        counts[result] = counts.get(result, 0) + 1
    return counts


def find_pairs_for_target(face: Face, target: int) -> List[Tuple[int, int]]:
    """Unsolved index pairs hitting `target`, each in the order the player must pick them."""
    out: List[Tuple[int, int]] = []
    for a, b, result in _unsolved_pairs(face):
        if result != target:
            continue
        va, vb = face.stones[a].value, face.stones[b].value
        out.append((a, b) if ordered_operands(face.operation, va, vb) == (va, vb) else (b, a))
    return out


def candidate_targets(face: Face) -> List[int]:
    """
    Filtered, uniqueness-preferred candidates for the next capstone, sorted.
      add:    keep targets >= the biggest remaining stone
      divide: drop 0 and 1 while anything bigger exists
      then prefer targets reachable by exactly one pair
    """
    counts = achievable_results(face)
    possible = sorted(counts)
    if not possible:
        return []

    valid = possible
    if face.operation is Operation.ADD:
        biggest = max(face.values(face.unsolved_indices()))
        sensible = [t for t in possible if t >= biggest]
        valid = sensible or possible
    elif face.operation is Operation.DIVIDE:
        non_zero = [t for t in possible if t > 0]
        non_trivial = [t for t in non_zero if t > 1]
        valid = non_trivial or non_zero or possible

    single = [t for t in valid if counts[t] == 1]
    return single or valid


def select_next_target(face: Face, rng=None) -> Optional[int]:
    """
    Pick and store the next capstone. Returns None when the face is done:
    no stones left, or a single orphan (marked solved here).
    """
    rng = rng or random.Random()
    remaining = face.unsolved_indices()

    if len(remaining) == 1:
        logger.warning("%s face: 1 orphan stone %s, force-completing", face.operation.value, remaining)
        face.solved.add(remaining[0])
        remaining = []
    if not remaining:
        face.current_target = None
        return None

    if needs_regroup(face):
        regroup_face(face)

    candidates = candidate_targets(face)
    if not candidates:
        # regrouping always leaves at least one divisible pair
        logger.warning("%s face: no achievable target among %s, regrouping", face.operation.value, face.values(remaining))
        regroup_face(face)
        candidates = candidate_targets(face)

    target = rng.choice(candidates)
    face.current_target = target
    logger.debug("%s face: next target %s from %s", face.operation.value, target, candidates)
    return target
