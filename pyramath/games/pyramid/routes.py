# pyramath/games/pyramid/routes.py
# JSON API for the pyramid game. One PyramidSession per session key, kept in app.extensions.
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import current_app, jsonify, make_response, request

from pyramath import limiter
from . import bp
from .leaderboard import add_high_score, is_high_score, top_scores
from .logic.generator import get_generator
from .logic.session import PyramidSession, new_session
from ..core.coerce_utils import clean_name, coerce_bool, coerce_index, normalize_level
from ..core.game_core import base_session_id, fmt_mmss, get_or_create_session_id, get_store

logger = logging.getLogger(__name__)

SESSIONS_KEY = "pyramid_sessions"
COOKIE_MAX_AGE = 60 * 60 * 24 * 365

# -----------------------------------------------------------------------------
# Small per-request helpers
# -----------------------------------------------------------------------------
def _sessions() -> Dict[str, PyramidSession]:
    return get_store(SESSIONS_KEY, dict)

def _sid() -> str:
    return get_or_create_session_id(request)

def _session() -> Optional[PyramidSession]:
    return _sessions().get(_sid())

def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}

def _error(message: str, status: int):
    return jsonify({"ok": False, "error": message}), status

def _no_session():
    return _error("no_session", 404)

def _board_size() -> int:
    return int(current_app.config.get("PYRAMID_LEADERBOARD_SIZE", 10))

def _state_payload(session: PyramidSession) -> Dict[str, Any]:
    d = session.to_dict()
    d["elapsed"] = fmt_mmss(d["elapsed_seconds"])
    return d

# -----------------------------------------------------------------------------
# API: new session
# -----------------------------------------------------------------------------
@bp.post("/api/new")
def api_new():
    logger.info("=== api_new CALLED ===")
    data = _body()
    try:
        level = normalize_level(data.get("level", request.args.get("level")))
        multiplayer = coerce_bool(data.get("multiplayer", request.args.get("multiplayer")))
        generator = get_generator(data.get("generator") or current_app.config.get("PYRAMID_GENERATOR")).name
    except ValueError as e:
        return _error(str(e), 400)

    sid = _sid()
    old = _sessions().get(sid)
    if old is not None:
        old.playflow.finalize()

    session = new_session(level=level, generator=generator, multiplayer=multiplayer)
    _sessions()[sid] = session
    logger.info("new pyramid: sid=%s level=%s generator=%s multiplayer=%s",
                sid, level, generator, multiplayer)

    resp = make_response(jsonify({"ok": True, "state": _state_payload(session)}))
    cookie_sid = base_session_id(sid)
    if request.cookies.get("session_id") != cookie_sid:
        resp.set_cookie("session_id", cookie_sid, max_age=COOKIE_MAX_AGE, samesite="Lax")
    return resp

# -----------------------------------------------------------------------------
# API: state
# -----------------------------------------------------------------------------
@bp.get("/api/state")
def api_state():
    session = _session()
    if session is None:
        return _no_session()
    return jsonify({"ok": True, "state": _state_payload(session)}), 200

# -----------------------------------------------------------------------------
# API: submit a pair on the active face
# -----------------------------------------------------------------------------
@bp.post("/api/submit")
def api_submit():
    logger.info("=== api_submit CALLED ===")
    session = _session()
    if session is None:
        return _no_session()

    data = _body()
    try:
        a = coerce_index(data.get("a"), "a")
        b = coerce_index(data.get("b"), "b")
    except ValueError as e:
        return _error(str(e), 400)

    turn = session.submit(a, b)
    logger.info("submit %s,%s on %s: matched=%s error=%s score=%s",
                a, b, turn.operation.value, turn.outcome.matched,
                turn.outcome.error.value if turn.outcome.error else None, turn.score)
    return jsonify({"ok": True, "turn": turn.to_dict(), "state": _state_payload(session)}), 200

# -----------------------------------------------------------------------------
# API: face navigation
# -----------------------------------------------------------------------------
@bp.post("/api/rotate")
def api_rotate():
    session = _session()
    if session is None:
        return _no_session()

    data = _body()
    try:
        if "face" in data:
            op = session.rotate_to(coerce_index(data.get("face"), "face"))
        else:
            op = session.rotate(data.get("direction") or "")
    except ValueError as e:
        return _error(str(e), 400)

    return jsonify({"ok": True, "active_operation": op.value, "state": _state_payload(session)}), 200


@bp.post("/api/next-face")
def api_next_face():
    session = _session()
    if session is None:
        return _no_session()

    op = session.next_incomplete_face()
    if op is None:
        return _error("pyramid_complete", 409)
    return jsonify({"ok": True, "active_operation": op.value, "state": _state_payload(session)}), 200


@bp.post("/api/next-level")
def api_next_level():
    logger.info("=== api_next_level CALLED ===")
    session = _session()
    if session is None:
        return _no_session()
    if not session.is_pyramid_complete:
        return _error("pyramid_incomplete", 409)

    bonus = session.advance_level()
    return jsonify({"ok": True, "level_bonus": bonus, "state": _state_payload(session)}), 200

# -----------------------------------------------------------------------------
# API: summary
# -----------------------------------------------------------------------------
@bp.get("/api/summary")
def api_summary():
    session = _session()
    if session is None:
        return _no_session()

    summary = session.playflow.summary()
    elapsed = session.elapsed_seconds()
    summary.update(
        score=session.score,
        level=session.level,
        elapsed_seconds=elapsed,
        elapsed=fmt_mmss(elapsed),
        pyramid_complete=session.is_pyramid_complete,
        is_high_score=(session.is_pyramid_complete and not session.multiplayer
                       and is_high_score(session.score, _board_size())),
    )
    return jsonify({"ok": True, "summary": summary}), 200

# -----------------------------------------------------------------------------
# API: leaderboard
# -----------------------------------------------------------------------------
@bp.get("/api/leaderboard")
def api_leaderboard():
    rows = top_scores(_board_size())
    return jsonify({"ok": True, "leaderboard": [r.to_dict() for r in rows]}), 200


@bp.post("/api/leaderboard")
@limiter.limit("10 per minute")
def api_leaderboard_add():
    logger.info("=== api_leaderboard_add CALLED ===")
    session = _session()
    if session is None:
        return _no_session()
    if not session.is_pyramid_complete:
        return _error("pyramid_incomplete", 409)
    if session.multiplayer:
        return _error("multiplayer_scores_not_recorded", 409)
    if session.score_recorded:
        return _error("already_recorded", 409)

    size = _board_size()
    if not is_high_score(session.score, size):
        return jsonify({"ok": True, "saved": False}), 200

    result = session.final_result(clean_name(_body().get("name")))
    row = add_high_score(result.name, result.score, result.level, result.elapsed_seconds,
                         session_sid=base_session_id(_sid()), size=size)
    session.score_recorded = True
    return jsonify({"ok": True, "saved": True, "entry": row.to_dict(),
                    "leaderboard": [r.to_dict() for r in top_scores(size)]}), 200
