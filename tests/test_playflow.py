from pyramath.games.core.playflow import Playflow


def test_accuracy_is_zero_without_correct_answers():
    pf = Playflow(session_uuid="s1")
    assert pf.accuracy() == 0
    pf.record("add", False)
    assert pf.accuracy() == 0


def test_accuracy_rounds_percentage():
    pf = Playflow(session_uuid="s1")
    pf.record("add", True)
    pf.record("add", True)
    pf.record("add", False)
    assert pf.accuracy() == 67


def test_summary_totals_and_outcomes():
    pf = Playflow(session_uuid="s1")
    for _ in range(7):
        pf.record("add", True)
    pf.complete("add")
    pf.record("divide", True)
    pf.record("divide", False)
    pf.finalize()

    s = pf.summary()
    assert s["session_uuid"] == "s1"
    assert s["totals"] == {"attempts": 9, "correct": 8, "incorrect": 1, "faces_completed": 1}
    assert s["accuracy"] == 89
    outcomes = {row["face"]: row["final_outcome"] for row in s["per_face"]}
    assert outcomes == {"add": "completed", "divide": "abandoned"}
    assert "Accuracy: 89%" in s["report_text"]
    assert all(row["ended_at_ms"] is not None for row in s["per_face"])


def test_complete_is_sticky():
    pf = Playflow(session_uuid="s1")
    pf.complete("add")
    pf.finalize()
    assert pf.items["add"].final_outcome == "completed"


def test_timestamps_come_from_the_shared_clock(monkeypatch):
    from pyramath.games.core import playflow

    pf = Playflow(session_uuid="s1")
    monkeypatch.setattr(playflow, "now_ms", lambda: 123456)
    pf.record("add", True)
    pf.complete("add")
    assert pf.items["add"].ended_at_ms == 123456
    assert pf.summary()["ended_at_ms"] == 123456
