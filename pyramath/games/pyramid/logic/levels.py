# pyramath/games/pyramid/logic/levels.py
# Level table for the four faces. Pure lookups, no state.
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from .operations import Operation

MAX_LEVEL = 5

_LEVEL_NAMES = ("Warm-up", "4th Grade", "5th Grade", "6th Grade", "Math Master")


@dataclass(frozen=True)
class NumberRange:
    """Inclusive operand bounds for add / subtract / multiply."""
    min: int
    max: int

    def __contains__(self, value: int) -> bool:
        return self.min <= value <= self.max

    def values(self) -> range:
        return range(self.min, self.max + 1)


@dataclass(frozen=True)
class DivisionRange:
    """
    Division is built from divisor x quotient. Divisors are primes so
    unrelated stones rarely divide each other.
    """
    divisors: Tuple[int, ...]
    quotients: Tuple[int, ...]


RangeSpec = Union[NumberRange, DivisionRange]


# Every tier holds at least 14 distinct operands (7 unique pairs), and every
# division tier at least 7 divisors.
_TABLE: Dict[Operation, List[RangeSpec]] = {
    Operation.ADD: [
        NumberRange(1, 20),
        NumberRange(5, 30),
        NumberRange(10, 50),
        NumberRange(20, 100),
        NumberRange(50, 200),
    ],
    Operation.SUBTRACT: [
        NumberRange(1, 25),
        NumberRange(10, 50),
        NumberRange(20, 100),
        NumberRange(40, 200),
        NumberRange(80, 400),
    ],
    Operation.MULTIPLY: [
        NumberRange(2, 16),       # times tables and a little beyond
        NumberRange(3, 18),
        NumberRange(4, 20),
        NumberRange(5, 24),
        NumberRange(6, 30),
    ],
    Operation.DIVIDE: [
        DivisionRange((2, 3, 5, 7, 11, 13, 17), (2, 3, 4, 5)),
        DivisionRange((2, 3, 5, 7, 11, 13, 17, 19), (2, 3, 4, 5, 6)),
        DivisionRange((3, 5, 7, 11, 13, 17, 19, 23), (2, 3, 4, 5, 6, 7)),
        DivisionRange((5, 7, 11, 13, 17, 19, 23, 29), (2, 3, 4, 5, 6, 7, 8)),
        DivisionRange((7, 11, 13, 17, 19, 23, 29, 31), (2, 3, 4, 5, 6, 7, 8, 9)),
    ],
}


def clamp_level(level: int) -> int:
    """Levels outside 1..MAX_LEVEL clamp to the nearest defined tier."""
    return max(1, min(int(level), MAX_LEVEL))


def get_range(operation: Operation, level: int) -> RangeSpec:
    tiers = _TABLE[Operation.parse(operation)]
    return tiers[clamp_level(level) - 1]


def level_name(level: int) -> str:
    return _LEVEL_NAMES[clamp_level(level) - 1]
