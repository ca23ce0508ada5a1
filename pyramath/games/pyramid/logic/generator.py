# pyramath/games/pyramid/logic/generator.py
"""
Stone-set generation for one face.

Two strategies share the PuzzleGenerator interface:
  - PairedGenerator: samples 7 operand pairs with globally unique values,
    bounded retry, then a deterministic fallback pair.
  - RangeSampleGenerator: draws 14 free values from the level range
    (duplicates allowed); division is built from shuffled prime divisors.

Both flatten the pairs into stones, shuffle them and start the face on the
result of pair 0. Generation never raises.
"""
from __future__ import annotations
import itertools
import logging
import random
from typing import Dict, List, Optional, Sequence, Set, Tuple, Type, Union

from .face import PAIRS_PER_FACE, STONES_PER_FACE, Face, GeneratedPair, Role, Stone
from .levels import DivisionRange, RangeSpec, clamp_level, get_range
from .operations import Operation, ordered_operands, pair_result

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 50

# Extra quotients tried when a level's own list can't give a fresh dividend
_FALLBACK_QUOTIENTS = tuple(range(2, 13))


# ============================================================
# Pair helpers
# ============================================================

def make_pair(operation: Operation, first: int, second: int) -> GeneratedPair:
    return GeneratedPair(first, second, pair_result(operation, first, second))


def sample_operands(operation: Operation, spec: RangeSpec, rng) -> Tuple[int, int]:
    """One random operand pair, already in selection order."""
    if isinstance(spec, DivisionRange):
        divisor = rng.choice(spec.divisors)
        quotient = rng.choice(spec.quotients)
        return divisor * quotient, divisor
    a = rng.randint(spec.min, spec.max)
    b = rng.randint(spec.min, spec.max)
    return ordered_operands(operation, a, b)


def _rotate(items: Sequence[int], offset: int) -> List[int]:
    if not items:
        return []
    k = offset % len(items)
    return list(items[k:]) + list(items[:k])


def fallback_pair(operation: Operation, spec: RangeSpec, used: Set[int], pair_index: int) -> Tuple[int, int]:
    """
    Deterministic unique pair for when random sampling runs out of attempts.

    Scans the level range starting at an offset given by the pair index and
    takes the first two unused values; only steps past the range once every
    value in it is taken. Division walks the divisor list the same way and
    looks for an unused multiple.
    """
    if isinstance(spec, DivisionRange):
        for divisor in _rotate(spec.divisors, pair_index):
            if divisor in used:
                continue
            for q in spec.quotients + _FALLBACK_QUOTIENTS:
                dividend = divisor * q
                if dividend not in used:
                    return dividend, divisor
        divisor = max(spec.divisors) + 1 + pair_index
        while divisor in used or divisor * 2 in used:
            divisor += 1
        return divisor * 2, divisor

    values = list(spec.values())
    start = pair_index % len(values)
    candidates = itertools.chain(values[start:], values[:start], itertools.count(spec.max + 1))
    a, b = itertools.islice((v for v in candidates if v not in used), 2)
    return ordered_operands(operation, a, b)


def build_face(operation: Operation, level: int, pairs: Sequence[GeneratedPair], rng) -> Face:
    """Flatten pairs into stones, shuffle, and aim the capstone at pair 0."""
    stones: List[Stone] = []
    for idx, p in enumerate(pairs):
        stones.append(Stone(p.first, idx, Role.FIRST))
        stones.append(Stone(p.second, idx, Role.SECOND))
    rng.shuffle(stones)
    return Face(
        operation=operation,
        level=clamp_level(level),
        stones=stones,
        pairs=list(pairs),
        current_target=pairs[0].result,
    )


# ============================================================
# Strategies
# ============================================================

class PuzzleGenerator:
    name = "base"

    def generate_pairs(self, operation: Operation, level: int, rng) -> List[GeneratedPair]:
        raise NotImplementedError

    def generate(self, operation, level: int, rng=None) -> Face:
        rng = rng or random.Random()
        operation = Operation.parse(operation)
        pairs = self.generate_pairs(operation, level, rng)
        face = build_face(operation, level, pairs, rng)
        logger.debug(
            "generated %s face L%s via %s: %s",
            operation.value, face.level, self.name,
            ", ".join(f"{p.first}{operation.symbol}{p.second}={p.result}" for p in pairs),
        )
        return face


class PairedGenerator(PuzzleGenerator):
    name = "paired"

    def generate_pairs(self, operation: Operation, level: int, rng) -> List[GeneratedPair]:
        spec = get_range(operation, level)
        used: Set[int] = set()
        pairs: List[GeneratedPair] = []

        for i in range(PAIRS_PER_FACE):
            chosen: Optional[Tuple[int, int]] = None
            for _ in range(MAX_ATTEMPTS):
                first, second = sample_operands(operation, spec, rng)
                if first != second and first not in used and second not in used:
                    chosen = (first, second)
                    break
            if chosen is None:
                chosen = fallback_pair(operation, spec, used, i)
                logger.warning(
                    "%s L%s pair %d: no unique pair after %d attempts, using fallback %s",
                    operation.value, level, i, MAX_ATTEMPTS, chosen,
                )
            used.update(chosen)
            pairs.append(make_pair(operation, *chosen))
        return pairs


class RangeSampleGenerator(PuzzleGenerator):
    name = "range"

    def generate_pairs(self, operation: Operation, level: int, rng) -> List[GeneratedPair]:
        spec = get_range(operation, level)
        if isinstance(spec, DivisionRange):
            return self._prime_pairs(spec, rng)

        draws = [rng.randint(spec.min, spec.max) for _ in range(STONES_PER_FACE)]
        return [
            make_pair(operation, *ordered_operands(operation, draws[i], draws[i + 1]))
            for i in range(0, STONES_PER_FACE, 2)
        ]

    def _prime_pairs(self, spec: DivisionRange, rng) -> List[GeneratedPair]:
        primes = list(spec.divisors)
        rng.shuffle(primes)
        used: Set[int] = set()
        pairs: List[GeneratedPair] = []

        while primes and len(pairs) < PAIRS_PER_FACE:
            divisor = primes.pop()
            if divisor in used:
                continue
            quotients = list(spec.quotients)
            rng.shuffle(quotients)
            dividend = next(
                (divisor * q for q in itertools.chain(quotients, _FALLBACK_QUOTIENTS)
                 if divisor * q not in used),
                None,
            )
            if dividend is None:
                continue
            used.update((divisor, dividend))
            pairs.append(make_pair(Operation.DIVIDE, dividend, divisor))

        while len(pairs) < PAIRS_PER_FACE:
            chosen = fallback_pair(Operation.DIVIDE, spec, used, len(pairs))
            logger.warning("division: ran out of primes, filling pair %d with %s", len(pairs), chosen)
            used.update(chosen)
            pairs.append(make_pair(Operation.DIVIDE, *chosen))
        return pairs


GENERATORS: Dict[str, Type[PuzzleGenerator]] = {
    PairedGenerator.name: PairedGenerator,
    RangeSampleGenerator.name: RangeSampleGenerator,
}

DEFAULT_GENERATOR = PairedGenerator.name


def get_generator(name: Union[str, PuzzleGenerator, None] = None) -> PuzzleGenerator:
    if isinstance(name, PuzzleGenerator):
        return name
    if name is None:
        name = DEFAULT_GENERATOR
    if not isinstance(name, str):
        raise ValueError(f"Unknown generator: {name!r} (expected one of {sorted(GENERATORS)})")
    key = name.strip().lower()
    cls = GENERATORS.get(key)
    if cls is None:
        raise ValueError(f"Unknown generator: {name!r} (expected one of {sorted(GENERATORS)})")
    return cls()


def generate_face(operation, level: int, generator: Union[str, PuzzleGenerator, None] = None, rng=None) -> Face:
    return get_generator(generator).generate(operation, level, rng=rng)
