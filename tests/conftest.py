import random

import pytest

from pyramath import create_app
from pyramath.config import TestingConfig
from pyramath.games.pyramid.logic.face import Face, GeneratedPair, Role, Stone
from pyramath.games.pyramid.logic.operations import Operation, pair_result


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_face():
    """
    Build a face from explicit (first, second) pairs, stones left in pair
    order: pair k sits at indices 2k (first) and 2k+1 (second).
    """
    def _make(operation, pairs, target=None, level=1):
        op = Operation.parse(operation)
        stones = []
        generated = []
        for idx, (first, second) in enumerate(pairs):
            stones.append(Stone(first, idx, Role.FIRST))
            stones.append(Stone(second, idx, Role.SECOND))
            generated.append(GeneratedPair(first, second, pair_result(op, first, second)))
        if target is None:
            target = generated[0].result
        return Face(operation=op, level=level, stones=stones, pairs=generated, current_target=target)
    return _make


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
