import pytest

from pyramath.games.pyramid.logic.levels import MAX_LEVEL
from pyramath.games.pyramid.logic.operations import FACE_ORDER, Operation
from pyramath.games.pyramid.logic.session import new_session
from pyramath.games.pyramid.logic.targets import find_pairs_for_target
from pyramath.games.pyramid.logic.validator import ErrorReason


def _right_pair(session):
    face = session.active_face
    return find_pairs_for_target(face, face.current_target)[0]


def _solve_active_face(session):
    turns = []
    while not session.active_face.is_complete:
        turns.append(session.submit(*_right_pair(session)))
    return turns


def _solve_pyramid(session):
    for i in range(4):
        session.rotate_to(i)
        _solve_active_face(session)


@pytest.fixture
def session(rng, clock):
    return new_session(level=1, rng=rng, clock=clock)


def test_new_session_deals_four_faces(session):
    assert [f.operation for f in session.faces.values()] == list(FACE_ORDER)
    assert session.active_operation is Operation.ADD
    assert session.score == 0 and session.streak == 0
    assert not session.is_pyramid_complete
    assert all(len(f.stones) == 14 for f in session.faces.values())


def test_level_is_clamped(rng):
    assert new_session(level=9, rng=rng).level == MAX_LEVEL
    assert new_session(level=0, rng=rng).level == 1


def test_streak_raises_points(rng, clock):
    s = new_session(level=2, rng=rng, clock=clock)
    first = s.submit(*_right_pair(s))
    second = s.submit(*_right_pair(s))
    assert first.points == 20          # (10 + 0) * 2
    assert second.points == 30         # (10 + 5) * 2
    assert s.streak == 2
    assert s.score == 50


def test_wrong_order_resets_streak_and_changes_nothing(session):
    session.submit(*_right_pair(session))
    session.rotate("right")
    assert session.active_operation is Operation.SUBTRACT

    a, b = _right_pair(session)
    solved_before = set(session.active_face.solved)
    turn = session.submit(b, a)
    assert turn.outcome.error is ErrorReason.ORDERING_VIOLATION
    assert turn.points == 0
    assert session.streak == 0
    assert session.active_face.solved == solved_before


def test_invalid_selection_keeps_streak(session):
    session.submit(*_right_pair(session))
    turn = session.submit(3, 3)
    assert turn.outcome.error is ErrorReason.INVALID_SELECTION
    assert session.streak == 1
    assert session.playflow.summary()["totals"]["incorrect"] == 0


def test_face_bonus(rng, clock):
    s = new_session(level=2, rng=rng, clock=clock)
    turns = _solve_active_face(s)
    assert len(turns) == 7
    assert [t.face_bonus for t in turns] == [0] * 6 + [100]
    # sum of (10 + 5k) * 2 for k = 0..6, plus 50 * 2
    assert s.score == 350 + 100
    assert Operation.ADD in s.completed_faces
    assert s.playflow.items["add"].final_outcome == "completed"


def test_rotation(session):
    assert session.rotate("left") is Operation.DIVIDE
    assert session.rotate("right") is Operation.ADD
    assert session.rotate_to(6) is Operation.MULTIPLY
    with pytest.raises(ValueError):
        session.rotate("up")
    for junk in (1, None, ["left"]):
        with pytest.raises(ValueError):
            session.rotate(junk)
    assert session.active_operation is Operation.MULTIPLY


def test_next_incomplete_face(session):
    _solve_active_face(session)
    assert session.next_incomplete_face() is Operation.SUBTRACT
    session.rotate_to(3)
    assert session.next_incomplete_face() is Operation.SUBTRACT


def test_pyramid_complete_stops_the_clock(session, clock):
    clock.advance(75)
    _solve_pyramid(session)
    assert session.is_pyramid_complete
    assert session.next_incomplete_face() is None
    clock.advance(500)
    assert session.elapsed_seconds() == 75


def test_advance_level_keeps_score(session, clock):
    _solve_pyramid(session)
    score = session.score
    bonus = session.advance_level()
    assert bonus == 200
    assert session.level == 2
    assert session.score == score + 200
    assert session.streak == 0
    assert not session.is_pyramid_complete
    assert session.elapsed_seconds() == 0


def test_max_level_replays_without_bonus(rng, clock):
    s = new_session(level=MAX_LEVEL, rng=rng, clock=clock)
    _solve_pyramid(s)
    score = s.score
    assert s.advance_level() == 0
    assert s.level == MAX_LEVEL
    assert s.score == score


def test_two_player_turns(rng, clock):
    s = new_session(level=1, rng=rng, clock=clock, multiplayer=True)
    t1 = s.submit(*_right_pair(s))
    assert t1.player == 1
    assert s.current_player == 2

    s.submit(0, 0)  # invalid, no turn change
    assert s.current_player == 2

    t2 = s.submit(*_right_pair(s))
    assert t2.player == 2
    assert s.current_player == 1
    assert s.player_scores == {1: 10, 2: 15}
    assert s.player_scores[1] + s.player_scores[2] == s.score


def test_two_player_miss_keeps_the_turn(rng, clock):
    s = new_session(level=1, rng=rng, clock=clock, multiplayer=True)
    s.rotate_to(1)  # subtraction
    a, b = _right_pair(s)
    s.submit(b, a)
    assert s.current_player == 1
    s.submit(a, b)
    assert s.current_player == 2
    assert s.player_scores == {1: 10, 2: 0}


def test_final_result(session, clock):
    clock.advance(42)
    result = session.final_result("  Ada  ")
    assert result.to_dict() == {"name": "Ada", "score": 0, "level": 1, "elapsed_seconds": 42}
    assert session.final_result("").name == "Player"
    assert len(session.final_result("x" * 80).name) == 32


def test_to_dict_shape(session):
    d = session.to_dict(selected=[2])
    assert d["level_name"] == "Warm-up"
    assert d["active_operation"] == "add"
    assert len(d["faces"]) == 4
    assert d["faces"][0]["stones"][2]["state"] == "selected"
    assert d["faces"][1]["stones"][2]["state"] == "unsolved"
    assert d["current_player"] is None
