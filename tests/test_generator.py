import logging
import random
from collections import Counter

import pytest

from pyramath.games.pyramid.logic.face import PAIRS_PER_FACE, STONES_PER_FACE, Role
from pyramath.games.pyramid.logic.generator import (
    PairedGenerator,
    RangeSampleGenerator,
    fallback_pair,
    generate_face,
    get_generator,
)
from pyramath.games.pyramid.logic.levels import MAX_LEVEL, DivisionRange, NumberRange, get_range
from pyramath.games.pyramid.logic.operations import FACE_ORDER, Operation


class StuckRandom(random.Random):
    """randint always answers the low bound, so every sampled pair is a duplicate."""

    def randint(self, a, b):
        return a


class StuckChoice(random.Random):
    """choice always answers the first item, so every division draw repeats."""

    def choice(self, seq):
        return seq[0]


def test_level_one_addition_face(rng):
    face = generate_face("add", 1, rng=rng)
    spec = get_range(Operation.ADD, 1)

    assert len(face.pairs) == PAIRS_PER_FACE
    assert len(face.stones) == STONES_PER_FACE
    assert all(s.value in spec for s in face.stones)
    assert face.current_target == face.pairs[0].first + face.pairs[0].second
    assert face.solved == set()
    assert face.pairs_completed == 0


def _assert_exact_division(face):
    assert all(s.value > 0 for s in face.stones)
    for p in face.pairs:
        assert p.first % p.second == 0
        assert p.result == p.first // p.second


@pytest.mark.parametrize("generator", ["paired", "range"])
def test_level_one_division_face_is_exact(generator, rng):
    _assert_exact_division(generate_face(Operation.DIVIDE, 1, generator=generator, rng=rng))


@pytest.mark.parametrize("generator", ["paired", "range"])
@pytest.mark.parametrize("level", range(1, MAX_LEVEL + 1))
def test_division_is_exact_at_every_level(generator, level):
    for seed in range(25):
        face = generate_face(Operation.DIVIDE, level, generator=generator, rng=random.Random(seed))
        _assert_exact_division(face)


@pytest.mark.parametrize("level", range(1, MAX_LEVEL + 1))
def test_stuck_division_falls_back_to_exact_unique_pairs(level, caplog):
    with caplog.at_level(logging.WARNING, logger="pyramath.games.pyramid.logic.generator"):
        face = PairedGenerator().generate(Operation.DIVIDE, level, rng=StuckChoice(5))

    assert "using fallback" in caplog.text
    _assert_exact_division(face)
    assert len(set(face.values())) == STONES_PER_FACE


def test_division_fallback_outside_the_divisor_list_is_exact():
    spec = get_range(Operation.DIVIDE, MAX_LEVEL)
    first, second = fallback_pair(Operation.DIVIDE, spec, set(spec.divisors), 0)
    assert (first, second) == (64, 32)
    assert first % second == 0


@pytest.mark.parametrize("generator", ["paired", "range"])
@pytest.mark.parametrize("op", FACE_ORDER)
def test_every_pair_index_used_exactly_twice(generator, op, rng):
    for level in range(1, MAX_LEVEL + 1):
        face = generate_face(op, level, generator=generator, rng=rng)
        counts = Counter(s.pair_index for s in face.stones)
        assert sorted(counts) == list(range(PAIRS_PER_FACE))
        assert set(counts.values()) == {2}
        for idx in counts:
            roles = sorted(s.role.value for s in face.stones if s.pair_index == idx)
            assert roles == [Role.FIRST.value, Role.SECOND.value]


@pytest.mark.parametrize("op", FACE_ORDER)
def test_paired_generator_keeps_operands_unique(op):
    for seed in range(20):
        for level in range(1, MAX_LEVEL + 1):
            face = generate_face(op, level, generator="paired", rng=random.Random(seed))
            values = face.values()
            assert len(set(values)) == STONES_PER_FACE


def test_pairs_are_in_selection_order(rng):
    for op in (Operation.SUBTRACT, Operation.DIVIDE):
        face = generate_face(op, 3, rng=rng)
        for p in face.pairs:
            assert p.first > p.second


def test_same_seed_same_face():
    a = generate_face("multiply", 2, rng=random.Random(7))
    b = generate_face("multiply", 2, rng=random.Random(7))
    assert a.values() == b.values()
    assert a.current_target == b.current_target


def test_range_generator_stays_in_bounds(rng):
    face = generate_face("subtract", 2, generator="range", rng=rng)
    spec = get_range(Operation.SUBTRACT, 2)
    assert all(s.value in spec for s in face.stones)


def test_fallback_used_when_sampling_is_stuck(caplog):
    with caplog.at_level(logging.WARNING, logger="pyramath.games.pyramid.logic.generator"):
        face = PairedGenerator().generate(Operation.ADD, 1, rng=StuckRandom(3))

    assert "using fallback" in caplog.text
    assert len(set(face.values())) == STONES_PER_FACE
    assert all(s.value in get_range(Operation.ADD, 1) for s in face.stones)


def test_fallback_pair_scans_range_then_steps_outside():
    spec = NumberRange(1, 20)
    assert fallback_pair(Operation.ADD, spec, set(), 0) == (1, 2)
    assert fallback_pair(Operation.ADD, spec, {1, 2}, 0) == (3, 4)
    assert fallback_pair(Operation.ADD, spec, set(range(1, 20)), 0) == (20, 21)
    assert fallback_pair(Operation.SUBTRACT, spec, set(range(1, 20)), 0) == (21, 20)


def test_fallback_pair_division():
    spec = DivisionRange((2, 3), (2,))
    assert fallback_pair(Operation.DIVIDE, spec, {4}, 0) == (6, 2)
    assert fallback_pair(Operation.DIVIDE, spec, {2, 3}, 0) == (8, 4)


def test_get_generator():
    assert isinstance(get_generator(None), PairedGenerator)
    assert isinstance(get_generator("RANGE"), RangeSampleGenerator)
    g = RangeSampleGenerator()
    assert get_generator(g) is g
    with pytest.raises(ValueError):
        get_generator("bottom-up")
    for junk in (5, ["range"], {"name": "range"}):
        with pytest.raises(ValueError):
            get_generator(junk)


def test_generated_level_is_clamped(rng):
    assert generate_face("add", 17, rng=rng).level == MAX_LEVEL
