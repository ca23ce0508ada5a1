# pyramath/games/pyramid/logic/face.py
from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set

from .operations import Operation

PAIRS_PER_FACE = 7
STONES_PER_FACE = PAIRS_PER_FACE * 2

# Row sizes under the capstone, top to bottom (2 + 3 + 4 + 5 = 14)
ROWS = (2, 3, 4, 5)

# Regrouped pairs get indices from here up so they never collide with
# generation-time pair indices (0..6).
SYNTHETIC_PAIR_START = 100


class Role(enum.Enum):
    FIRST = "first"     # minuend / dividend: selected first
    SECOND = "second"


class StoneState(enum.Enum):
    UNSOLVED = "unsolved"
    SELECTED = "selected"
    SOLVED = "solved"


@dataclass
class Stone:
    value: int
    pair_index: int
    role: Role


@dataclass(frozen=True)
class GeneratedPair:
    first: int
    second: int
    result: int


@dataclass
class Face:
    """
    One operation's sub-puzzle: 14 shuffled stones, the current target
    (capstone) and the set of stones already solved.
    """
    operation: Operation
    level: int
    stones: List[Stone]
    pairs: List[GeneratedPair]          # as generated; regrouping re-pairs through Stone.pair_index only
    current_target: Optional[int] = None
    solved: Set[int] = field(default_factory=set)
    pairs_completed: int = 0
    next_synthetic_index: int = SYNTHETIC_PAIR_START

    @property
    def total_pairs(self) -> int:
        return len(self.stones) // 2

    @property
    def is_complete(self) -> bool:
        return len(self.solved) >= len(self.stones)

    def unsolved_indices(self) -> List[int]:
        return [i for i in range(len(self.stones)) if i not in self.solved]

    def values(self, indices: Optional[Iterable[int]] = None) -> List[int]:
        idx = range(len(self.stones)) if indices is None else indices
        return [self.stones[i].value for i in idx]

    def stone_state(self, index: int, selected: Iterable[int] = ()) -> StoneState:
        if index in self.solved:
            return StoneState.SOLVED
        if index in set(selected):
            return StoneState.SELECTED
        return StoneState.UNSOLVED

    def rows(self) -> List[List[int]]:
        """Stone indices grouped the way the pyramid lays them out."""
        out: List[List[int]] = []
        start = 0
        for size in ROWS:
            out.append(list(range(start, start + size)))
            start += size
        return out

    def take_synthetic_index(self) -> int:
        idx = self.next_synthetic_index
        self.next_synthetic_index += 1
        return idx

    def to_dict(self, selected: Iterable[int] = ()) -> Dict[str, Any]:
        sel = set(selected)
        return {
            "operation": self.operation.value,
            "symbol": self.operation.symbol,
            "name": self.operation.title,
            "level": self.level,
            "target": self.current_target,
            "pairs_completed": self.pairs_completed,
            "total_pairs": self.total_pairs,
            "complete": self.is_complete,
            "rows": self.rows(),
            "stones": [
                {
                    "index": i,
                    "value": s.value,
                    "state": self.stone_state(i, sel).value,
                }
                for i, s in enumerate(self.stones)
            ],
        }
